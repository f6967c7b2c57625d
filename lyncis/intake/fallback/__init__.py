"""AI fallback extractor base class, response parsing, and factory."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..models import Contact, ExtractedItem, PartialOrder
from ..pricing import normalize_price
from ..scoring import count_potential_items, score_confidence

if TYPE_CHECKING:
    from ..config import IntakeConfig, ScoringWeights

PROMPT = """\
You are a data extractor for an Indonesian Jastip (personal shopping) service.
Extract every recipient and order from the WhatsApp text below and return a
JSON array of orders. Each order has this structure:
{
  "recipient": {"name": "", "phone": "digits only", "address": "full raw address"},
  "items": [
    {"name": "Item Name", "qty": 1, "unit_price": 0, "total_price": 0}
  ]
}

Rules:
1. Several orders may be separated by blank lines or markers.
2. "k" means thousand (5k = 5000, 3.5k = 3500). Dots and commas are thousand
   separators in Rupiah (10.000 or 10,000 = 10000).
3. "Qty Name Price" usually means the price is the TOTAL for that quantity;
   "@", "each" or "/pc" means the UNIT price.
4. Quantity defaults to 1. If a line looks like an item but has no price,
   still extract it with price 0.
5. Return ONLY a valid JSON array. Never use null for names or items.

TEXT:
"""


class FallbackExtractor(ABC):
    """Abstract base for AI extraction when the rule battery falls short."""

    @abstractmethod
    async def extract(self, raw_text: str) -> list[PartialOrder]:
        """Extract orders from the same raw text the rules were given."""
        ...


def _as_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    return normalize_price(str(value)) or default


def _build_item(data: dict) -> ExtractedItem | None:
    name = str(data.get("name") or "").strip()
    if not name:
        return None
    qty = max(1, _as_int(data.get("qty"), 1))
    unit_price = _as_int(data.get("unit_price", data.get("unitPrice")))
    total_price = _as_int(data.get("total_price", data.get("totalPrice")))
    if unit_price == 0 and total_price > 0:
        return ExtractedItem.from_total_price(name, qty, total_price)
    return ExtractedItem.from_unit_price(name, qty, unit_price)


def parse_response(
    text: str, raw_text: str, weights: ScoringWeights | None = None
) -> list[PartialOrder]:
    """Parse the JSON order array from a model response."""
    # Strip markdown fences if present
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)

    parsed = json.loads(cleaned)
    entries = parsed if isinstance(parsed, list) else [parsed]
    potential = count_potential_items(raw_text)

    orders: list[PartialOrder] = []
    for entry in entries:
        recipient = entry.get("recipient") or {}
        contact = Contact(
            name=str(recipient.get("name") or "").strip(),
            phone=re.sub(r"\D", "", str(recipient.get("phone") or "")),
            address=str(
                recipient.get("address") or recipient.get("addressRaw") or ""
            ).strip(),
        )
        items = [
            item
            for item in (_build_item(d) for d in entry.get("items") or [])
            if item is not None
        ]
        orders.append(
            PartialOrder(
                contact=contact,
                items=items,
                potential_item_count=potential,
                confidence=score_confidence(contact, items, weights),
                has_unpriced_items=any(
                    i.unit_price == 0 and i.total_price == 0 for i in items
                ),
                is_ai_parsed=True,
                source_text=raw_text,
            )
        )
    return orders


def create_extractor(config: IntakeConfig) -> FallbackExtractor:
    """Create an AI fallback extractor based on configuration."""
    backend_name = config.fallback.backend
    weights = config.scoring.weights

    match backend_name:
        case "claude":
            from .claude import ClaudeFallbackExtractor

            return ClaudeFallbackExtractor(
                api_key=config.fallback.claude.api_key,
                model=config.fallback.claude.model,
                timeout=config.fallback.timeout,
                weights=weights,
            )
        case "gemini":
            from .gemini import GeminiFallbackExtractor

            return GeminiFallbackExtractor(
                api_key=config.fallback.gemini.api_key,
                model=config.fallback.gemini.model,
                timeout=config.fallback.timeout,
                weights=weights,
            )
        case _:
            raise ValueError(
                f"Backend AI tidak dikenal: {backend_name!r}  "
                f"(pilih claude / gemini)"
            )
