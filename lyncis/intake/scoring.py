"""Completeness scoring and item-count sanity heuristics."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .config import ScoringWeights
from .items import HEADER_ONLY, is_phone_line, is_postal_line
from .models import Contact, ExtractedItem


def score_confidence(
    contact: Contact,
    items: Sequence[ExtractedItem],
    weights: ScoringWeights | None = None,
) -> float:
    """Return a 0..1 completeness score for a partially built order.

    This routes records to human review; it is not a correctness guarantee.
    """
    w = weights or ScoringWeights()
    score = 0.0

    if len(contact.name) > 2:
        score += w.name
    if len(contact.phone) >= 8:
        score += w.phone
    if len(contact.address) > 10:
        score += w.address
    if items:
        score += w.items
        if any(item.unit_price > 0 for item in items):
            score += w.priced_items

    return round(min(score, 1.0), 4)


_CONTACT_LABEL = re.compile(
    r"^(?:nama|name|penerima|hp|wa|telp|telepon|phone|alamat|address|lokasi|"
    r"almt|tlp|nohp|nomor)\s*[:\-]",
    re.IGNORECASE,
)
_CONTACT_PREFIX = re.compile(
    r"^(?:alamat|address|lokasi|almt|telepon|telp|hp|wa|phone|nohp|nomor)\s+",
    re.IGNORECASE,
)
_ADDRESS_START = re.compile(
    r"^(?:jl|jln|jalan|blok|rt|rw|no|kodepos|kec|kel|kab|prov)\b", re.IGNORECASE
)
# Only the long region words: "2x Kue Kota Tua" is still an item
_REGION_WORDS = re.compile(
    r"\b(?:kecamatan|kelurahan|kabupaten|provinsi|avenue|komplek|perumahan|"
    r"gang|gg)\b",
    re.IGNORECASE,
)

_ITEM_STARTS = (
    re.compile(r"^[-•]\s+"),  # bullets
    re.compile(r"^\d+\s*[x.]\s+", re.IGNORECASE),  # "2x ..." / "1. ..."
    re.compile(r"^\d+\s+[A-Z]"),  # "3 Chitato ..."
)
_ITEM_CONTENTS = (
    re.compile(r"@\s*(?:Rp\.?)?\s*[0-9][0-9.,]*k?", re.IGNORECASE),
    re.compile(r"\s(?:Rp\.?\s*)?[0-9][0-9.,]*(?:\s*k)?\s*$", re.IGNORECASE),
    re.compile(r"(?:^|\s)x\s*\d+\s*$", re.IGNORECASE),
)


def _looks_like_item(line: str) -> bool:
    if _CONTACT_LABEL.match(line) or _CONTACT_PREFIX.match(line):
        return False
    if _ADDRESS_START.match(line) or _REGION_WORDS.search(line):
        return False
    if HEADER_ONLY.match(line):
        return False
    if is_postal_line(line):
        return False
    # tabular dumps, not free text
    if len(re.split(r"[,;\t]", line)) >= 3:
        return False
    if not (
        any(p.search(line) for p in _ITEM_STARTS)
        or any(p.search(line) for p in _ITEM_CONTENTS)
    ):
        return False
    return not is_phone_line(line)


def count_potential_items(block_text: str) -> int:
    """Count lines that look like items, independently of the extractor.

    A count above the number of extracted items signals under-extraction.
    """
    lines = (line.strip() for line in block_text.splitlines())
    return sum(1 for line in lines if line and _looks_like_item(line))
