"""Rule-based parsing with optional AI fallback."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from .assembler import OrderAssembler
from .fallback import FallbackExtractor
from .models import PartialOrder

logger = logging.getLogger(__name__)


@dataclass
class IntakeResult:
    orders: list[PartialOrder] = field(default_factory=list)
    used_fallback: bool = False

    def to_dict(self) -> dict:
        return {
            "orders": [o.to_dict() for o in self.orders],
            "used_fallback": self.used_fallback,
        }


def should_escalate(orders: list[PartialOrder]) -> bool:
    """True when the rules found no items, or missed lines that look like items."""
    if sum(len(o.items) for o in orders) == 0:
        return True
    return any(o.potential_item_count > len(o.items) for o in orders)


class IntakePipeline:
    """Runs the rule-based assembler and escalates to an AI extractor if needed.

    Without an extractor the pipeline is equivalent to the assembler alone.
    A failing or empty fallback never loses the rule-based result.
    """

    def __init__(
        self,
        assembler: OrderAssembler | None = None,
        fallback: FallbackExtractor | None = None,
    ) -> None:
        self._assembler = assembler or OrderAssembler()
        self._fallback = fallback

    async def run(self, raw_text: str) -> IntakeResult:
        orders = await self._assembler.parse(raw_text)

        if self._fallback is None or not should_escalate(orders):
            return IntakeResult(orders=orders)

        logger.info("Hasil aturan belum lengkap, mencoba ekstraksi AI")
        try:
            ai_orders = await self._fallback.extract(raw_text)
        except Exception:
            logger.exception("Ekstraksi AI gagal, memakai hasil aturan")
            return IntakeResult(orders=orders)

        if not ai_orders:
            logger.warning("Ekstraksi AI tidak menghasilkan pesanan")
            return IntakeResult(orders=orders)

        regions = await asyncio.gather(
            *(self._assembler.resolve_region(o.contact) for o in ai_orders)
        )
        for order, region in zip(ai_orders, regions):
            order.region = region

        return IntakeResult(orders=ai_orders, used_fallback=True)
