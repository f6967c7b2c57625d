"""Order assembly: raw pasted text → partial orders."""

from __future__ import annotations

import asyncio
import logging

from .config import IntakeConfig
from .contact import split_contact
from .items import ExtractItemsResult, extract_items, is_phone_line
from .models import Contact, PartialOrder, RegionMatch
from .region import NullRegionResolver, RegionResolver
from .scoring import count_potential_items, score_confidence
from .segmenter import segment_blocks

logger = logging.getLogger(__name__)


def strip_claimed_lines(block: str, extraction: ExtractItemsResult) -> str:
    """Drop the lines the item extractor consumed, keeping phone lines."""
    kept = [
        line
        for line in block.splitlines()
        if line not in extraction.claims or is_phone_line(line)
    ]
    return "\n".join(kept)


class OrderAssembler:
    """Turns pasted order text into one PartialOrder per detected block.

    Usage:
        assembler = OrderAssembler(resolver=create_resolver(config), config=config)
        orders = await assembler.parse(text)
    """

    def __init__(
        self,
        resolver: RegionResolver | None = None,
        config: IntakeConfig | None = None,
    ) -> None:
        self._resolver = resolver or NullRegionResolver()
        self._config = config or IntakeConfig()

    async def parse(self, raw_text: str) -> list[PartialOrder]:
        """Parse every block of ``raw_text``; blocks are assembled concurrently."""
        blocks = segment_blocks(
            raw_text, min_length=self._config.segmenter.min_block_length
        )
        if not blocks:
            return []
        orders = await asyncio.gather(*(self.assemble(block) for block in blocks))
        logger.debug("%d blok diproses menjadi %d pesanan", len(blocks), len(orders))
        return list(orders)

    async def assemble(self, block: str) -> PartialOrder:
        """Build the PartialOrder for a single block."""
        extraction = extract_items(block)
        contact = split_contact(strip_claimed_lines(block, extraction))
        region = await self.resolve_region(contact)

        return PartialOrder(
            contact=contact,
            items=extraction.items,
            region=region,
            potential_item_count=count_potential_items(block),
            confidence=score_confidence(
                contact, extraction.items, self._config.scoring.weights
            ),
            has_unpriced_items=extraction.has_unpriced_items,
            source_text=block,
        )

    async def resolve_region(self, contact: Contact) -> RegionMatch | None:
        if not contact.address:
            return None
        try:
            match = await self._resolver.resolve(contact.address)
        except Exception:
            logger.warning(
                "Gagal mencocokkan wilayah untuk alamat %r", contact.address,
                exc_info=True,
            )
            return None
        if match is None or match.confidence < self._config.region.min_confidence:
            return None
        return match


async def parse_orders(
    raw_text: str,
    resolver: RegionResolver | None = None,
    config: IntakeConfig | None = None,
) -> list[PartialOrder]:
    """Parse pasted order text into partial orders."""
    return await OrderAssembler(resolver=resolver, config=config).parse(raw_text)
