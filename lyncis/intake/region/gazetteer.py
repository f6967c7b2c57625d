"""Gazetteer-backed region resolver (Indonesian administrative regions)."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..models import RegionMatch
from . import RegionResolver

logger = logging.getLogger(__name__)

_STOP = (
    r"(?=\s*,|\s*\bkelurahan\b|\s*\bkel\b\.?|\s*\bkecamatan\b|\s*\bkec\b\.?|"
    r"\s*\bkota\b|\s*\bkabupaten\b|\s*\bkab\b\.?|\s*\bprovinsi\b|\s*\bprov\b\.?|"
    r"\s*\d{5}|\s*$)"
)
_TERM = r"\s+([a-z0-9\s()\-]+?)" + _STOP

_MARKERS = {
    "subdistrict": re.compile(r"\b(?:kelurahan|kel\.?)" + _TERM, re.IGNORECASE),
    "district": re.compile(r"\b(?:kecamatan|kec\.?)" + _TERM, re.IGNORECASE),
    "city": re.compile(r"\b(?:kota|kabupaten|kab\.?)" + _TERM, re.IGNORECASE),
    "province": re.compile(r"\b(?:provinsi|prov\.?)" + _TERM, re.IGNORECASE),
}
_POSTAL_CODE = re.compile(r"\b\d{5}\b")

_MIN_SCORE = 20


@dataclass(frozen=True)
class RegionRecord:
    province: str
    city: str
    district: str
    subdistrict: str
    postal_code: str

    def value_for(self, scope: str) -> str:
        return getattr(self, scope)

    def to_match(self, confidence: float) -> RegionMatch:
        return RegionMatch(
            province=self.province,
            city=self.city,
            district=self.district,
            subdistrict=self.subdistrict,
            postal_code=self.postal_code,
            confidence=confidence,
        )


@dataclass
class AddressKeywords:
    postal_codes: list[str] = field(default_factory=list)
    subdistrict: list[str] = field(default_factory=list)
    district: list[str] = field(default_factory=list)
    city: list[str] = field(default_factory=list)
    province: list[str] = field(default_factory=list)


def extract_keywords(text: str) -> AddressKeywords:
    """Pull postal codes and ``kel./kec./kota/prov.`` terms out of an address."""
    keywords = AddressKeywords(postal_codes=_POSTAL_CODE.findall(text))
    for scope, pattern in _MARKERS.items():
        terms = [m.group(1).strip().lower() for m in pattern.finditer(text)]
        setattr(keywords, scope, [t for t in terms if t])
    return keywords


def name_variants(name: str) -> list[str]:
    """``"setia budi (setiabudi)"`` → the full name plus both spellings."""
    variants = [name]
    m = re.match(r"^(.+?)\s*\((.+?)\)$", name)
    if m:
        variants.extend([m.group(1).strip(), m.group(2).strip()])
    return variants


class GazetteerRegionResolver(RegionResolver):
    """Resolve addresses against a JSON list of region records.

    Each record has ``province_name``, ``city_name``, ``district_name``,
    ``subdistrict_name`` and ``postal_code``. The file is read once, on
    first use.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self._records: list[RegionRecord] | None = None
        self._lock = asyncio.Lock()

    async def records(self) -> list[RegionRecord]:
        async with self._lock:
            if self._records is None:
                self._records = await asyncio.to_thread(self._load)
        return self._records

    def _load(self) -> list[RegionRecord]:
        with open(self._path, encoding="utf-8") as f:
            raw = json.load(f)
        if isinstance(raw, dict):
            raw = raw.get("locations", [])

        records = [
            RegionRecord(
                province=entry.get("province_name", ""),
                city=entry.get("city_name", ""),
                district=entry.get("district_name", ""),
                subdistrict=entry.get("subdistrict_name", ""),
                postal_code=str(entry.get("postal_code", "")),
            )
            for entry in raw
        ]
        logger.info("Data wilayah dimuat: %d baris dari %s", len(records), self._path)
        return records

    async def resolve(self, address: str) -> RegionMatch | None:
        records = await self.records()
        if not records or not address.strip():
            return None
        return match_region(address, records)


def match_region(address: str, records: list[RegionRecord]) -> RegionMatch | None:
    """Pick the best region record for an address, or None."""
    keywords = extract_keywords(address)

    # Postal code is the most specific signal
    for code in keywords.postal_codes:
        for record in records:
            if record.postal_code == code:
                return record.to_match(0.95)

    scope = ""
    for candidate_scope in ("subdistrict", "district", "city"):
        if getattr(keywords, candidate_scope):
            scope = candidate_scope
            break
    if not scope:
        return None

    primary = getattr(keywords, scope)[0]
    candidates = [r for r in records if primary in r.value_for(scope).lower()]
    if not candidates:
        return None

    def score(record: RegionRecord) -> int:
        total = 5 if scope == "city" else 10
        exact_bonus = 10 if scope == "city" else 15
        if primary in name_variants(record.value_for(scope).lower()):
            total += exact_bonus

        # Cross-validation against the other keywords
        if keywords.district and scope != "district":
            term = keywords.district[0]
            if any(term in v for v in name_variants(record.district.lower())):
                total += 15
        if keywords.city and scope != "city":
            term = keywords.city[0]
            if any(term in v for v in name_variants(record.city.lower())):
                total += 10
        if keywords.province:
            term = keywords.province[0]
            if any(term in v for v in name_variants(record.province.lower())):
                total += 5
        return total

    best = max(candidates, key=score)
    best_score = score(best)
    if best_score < _MIN_SCORE:
        return None
    return best.to_match(min(0.5 + best_score / 60, 1.0))
