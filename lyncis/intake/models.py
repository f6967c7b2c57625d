"""Data models for orders recovered from freeform order text."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field


def _new_id() -> str:
    return uuid.uuid4().hex


def _round_div(total: int, qty: int) -> int:
    """Integer ``round(total / qty)`` with halves rounding up."""
    return (2 * total + qty) // (2 * qty)


@dataclass
class ExtractedItem:
    """A single purchased item recovered from an order line."""

    name: str
    qty: int = 1
    unit_price: int = 0
    total_price: int = 0
    is_manual_total: bool = False  # total_price is authoritative
    id: str = field(default_factory=_new_id)

    @classmethod
    def from_unit_price(cls, name: str, qty: int, unit_price: int) -> ExtractedItem:
        qty = max(1, qty)
        unit_price = max(0, unit_price)
        return cls(
            name=name,
            qty=qty,
            unit_price=unit_price,
            total_price=unit_price * qty,
            is_manual_total=False,
        )

    @classmethod
    def from_total_price(cls, name: str, qty: int, total_price: int) -> ExtractedItem:
        qty = max(1, qty)
        total_price = max(0, total_price)
        return cls(
            name=name,
            qty=qty,
            unit_price=_round_div(total_price, qty),
            total_price=total_price,
            is_manual_total=True,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "qty": self.qty,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
            "is_manual_total": self.is_manual_total,
        }


@dataclass(frozen=True)
class Contact:
    """Recipient contact fields. Empty string when not found."""

    name: str = ""
    phone: str = ""  # digits only
    address: str = ""  # raw, unstructured

    def to_dict(self) -> dict:
        return {"name": self.name, "phone": self.phone, "address": self.address}


@dataclass(frozen=True)
class RegionMatch:
    """Structured administrative region resolved from an address."""

    province: str
    city: str
    district: str
    subdistrict: str
    postal_code: str
    confidence: float  # 0.0 - 1.0

    def to_dict(self) -> dict:
        return {
            "province": self.province,
            "city": self.city,
            "district": self.district,
            "subdistrict": self.subdistrict,
            "postal_code": self.postal_code,
            "confidence": self.confidence,
        }


@dataclass
class PartialOrder:
    """One order recovered from a block of text.

    Has no identity beyond its position in the result list; persistence
    assigns a durable id later.
    """

    contact: Contact = field(default_factory=Contact)
    items: list[ExtractedItem] = field(default_factory=list)
    region: RegionMatch | None = None
    potential_item_count: int = 0
    confidence: float = 0.0
    has_unpriced_items: bool = False
    is_ai_parsed: bool = False
    source_text: str = ""

    @property
    def item_shortfall(self) -> int:
        """How many item-looking lines were not turned into items."""
        return max(0, self.potential_item_count - len(self.items))

    @property
    def subtotal(self) -> int:
        return sum(item.total_price for item in self.items)

    def to_dict(self) -> dict:
        return {
            "contact": self.contact.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "region": self.region.to_dict() if self.region else None,
            "potential_item_count": self.potential_item_count,
            "confidence": self.confidence,
            "has_unpriced_items": self.has_unpriced_items,
            "is_ai_parsed": self.is_ai_parsed,
            "subtotal": self.subtotal,
        }
