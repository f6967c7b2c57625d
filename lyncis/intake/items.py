"""Item line extraction from freeform order text.

Each order line is offered to an ordered battery of line-shape rules. The
first rule that yields an item claims the line; claimed lines are never
reinterpreted by a looser rule. Rules recognizing an explicit ``@`` price run
before the bare ``qty name number`` shape, which runs before the name-first
shapes, because the looser shapes also match the stricter lines.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from .models import ExtractedItem
from .pricing import normalize_price

# Section headers written in front of item lines ("Pesanan: 3 Aqua 9000")
_INLINE_HEADER = re.compile(
    r"^\s*(?:order|pesanan|barang|items?|list|daftar)\s*[:\-]\s*", re.IGNORECASE
)
HEADER_ONLY = re.compile(
    r"^\s*(?:order|pesanan|barang|items?|list|daftar)\s*[:\-]?\s*$", re.IGNORECASE
)

_CONTACT_WORDS = (
    r"nama|name|penerima|atas\s+nama|a/n|"
    r"no\.?\s*(?:hp|wa|telp)|hp|wa|whatsapp|telp|telepon|tlp|phone|nohp|nomor|"
    r"alamat|address|lokasi|almt"
)
_LABELED_CONTACT = re.compile(rf"^(?:{_CONTACT_WORDS})\s*[:\-]", re.IGNORECASE)
_BARE_CONTACT = re.compile(rf"^(?:{_CONTACT_WORDS})\s*[:\-]?$", re.IGNORECASE)
_UNLABELED_ADDRESS = re.compile(
    r"^(?:alamat|address|lokasi|almt)\s+"
    r"(?:jl|jalan|jln|blok|rt|rw|kel|kec|kab|kota|prov|taman|komplek|gg|gang|no)\b",
    re.IGNORECASE,
)
_CONTACT_NAME_PREFIX = re.compile(
    r"^(?:alamat|address|lokasi|almt|telp|telepon|phone|nama|name|penerima|hp|wa)\b",
    re.IGNORECASE,
)
_STREET_PREFIX = re.compile(
    r"^(?:jl|jln|jalan|gg|gang|blok|rt|rw|komplek|komp|perum|perumahan|no)\b",
    re.IGNORECASE,
)
REGION_KEYWORDS = re.compile(
    r"\b(?:kecamatan|kelurahan|kabupaten|provinsi|kota|kec|kel|kab|prov|"
    r"avenue|komplek|perumahan|gang|gg)\b",
    re.IGNORECASE,
)
_PHONE_CHARS = re.compile(r"^[+\d\s.\-/()]{8,}$")
_NUMERIC_NAME = re.compile(r"^[\d\s.,]+$")

_PRICE = r"(?:Rp\.?\s*)?([0-9][0-9.,]*(?:\s*k)?)"
_UNIT_WORDS = r"(?:pcs|pc|buah|box|pack)"

_UNPRICED = re.compile(r"([1-9]\d?)\s+([A-Za-z][A-Za-z ]*[A-Za-z])")
# "Jakarta Selatan 12120": a place name followed by a postal code
_POSTAL_LINE = re.compile(r"^[A-Za-z][A-Za-z .]*\s(\d{5})$")


def strip_inline_header(line: str) -> str:
    """Remove a leading ``Pesanan:``-style header from a line."""
    return _INLINE_HEADER.sub("", line, count=1)


def is_contact_line(line: str) -> bool:
    """True for labeled contact lines, ``alamat jl. ...`` lines and bare labels."""
    text = line.strip()
    return bool(
        _LABELED_CONTACT.match(text)
        or _UNLABELED_ADDRESS.match(text)
        or _BARE_CONTACT.match(text)
    )


def is_postal_line(line: str) -> bool:
    """True for a bare place name plus a 5-digit code that is not a round price."""
    m = _POSTAL_LINE.match(line.strip())
    return bool(m) and not m.group(1).endswith("00")


def is_phone_line(line: str) -> bool:
    """True when the line is only a phone number (8+ digits, phone punctuation)."""
    text = line.strip()
    digits = re.sub(r"\D", "", text)
    return len(digits) >= 8 and bool(_PHONE_CHARS.match(text))


class LineClaims:
    """Per-block ledger of lines already attributed to an item."""

    def __init__(self) -> None:
        self._claims: dict[str, str] = {}

    @staticmethod
    def key(line: str) -> str:
        return strip_inline_header(line).strip().lower()

    def claim(self, line: str, rule: str = "") -> bool:
        """Claim a line for ``rule``. False if the line was already claimed."""
        k = self.key(line)
        if not k or k in self._claims:
            return False
        self._claims[k] = rule
        return True

    def rule_for(self, line: str) -> str | None:
        return self._claims.get(self.key(line))

    def __contains__(self, line: object) -> bool:
        return isinstance(line, str) and self.key(line) in self._claims

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)


@dataclass
class ExtractItemsResult:
    items: list[ExtractedItem] = field(default_factory=list)
    has_unpriced_items: bool = False
    claims: LineClaims = field(default_factory=LineClaims)


# ── Guards ───────────────────────────────────────────────────


def _acceptable_name(name: str) -> bool:
    if not name or _NUMERIC_NAME.match(name):
        return False
    return not _CONTACT_NAME_PREFIX.match(name)


def _phone_like_price(token: str | None) -> bool:
    digits = re.sub(r"\D", "", token or "")
    return len(digits) >= 8 and digits.startswith("0")


def _qty(text: str | None, default: int = 1) -> int:
    if not text:
        return default
    try:
        return max(1, int(text))
    except ValueError:
        return default


# ── Rule battery ─────────────────────────────────────────────


@dataclass(frozen=True)
class LineRule:
    """A line shape plus how to turn its match into an item.

    ``fields`` maps the match to ``(name, qty, price_token)``; ``total``
    says whether the price is the line total rather than the unit price.
    """

    name: str
    pattern: re.Pattern[str]
    fields: Callable[[re.Match[str]], tuple[str, str | None, str | None]]
    total: bool = False
    name_first: bool = False

    def apply(self, line: str) -> ExtractedItem | None:
        m = self.pattern.fullmatch(line)
        if m is None:
            return None
        item_name, qty_text, price_token = self.fields(m)
        item_name = item_name.strip()
        if not _acceptable_name(item_name) or _phone_like_price(price_token):
            return None
        if self.name_first and (
            _STREET_PREFIX.match(item_name)
            or REGION_KEYWORDS.search(line)
            or is_postal_line(line)
        ):
            return None

        qty = _qty(qty_text)
        price = normalize_price(price_token)
        if self.total:
            return ExtractedItem.from_total_price(item_name, qty, price)
        return ExtractedItem.from_unit_price(item_name, qty, price)


def _rule(name: str, regex: str, fields, total: bool = False, name_first: bool = False) -> LineRule:
    return LineRule(
        name=name,
        pattern=re.compile(regex, re.IGNORECASE),
        fields=fields,
        total=total,
        name_first=name_first,
    )


RULES: tuple[LineRule, ...] = (
    # "2x Pocky Matcha @30000", "3x coca cola 21.000", "3x coca cola"
    _rule(
        "qty_x_name_price",
        r"(?:(?:order|pesanan|barang|items?|list|daftar)\s*[:\-]?\s*)?"
        r"(\d+)\s*x(?![a-z])\s*([^@]*?[a-z][^@]*?)"
        rf"(?:\s*(?:@\s*)?{_PRICE})?",
        lambda m: (m.group(2), m.group(1), m.group(3)),
    ),
    # "Pocky Matcha - 1 - 25.000"
    _rule(
        "name_dash_qty_dash_price",
        rf"([a-z0-9][^\-]*?)\s*-\s*(\d+)\s*{_UNIT_WORDS}?\s*-\s*{_PRICE}",
        lambda m: (m.group(1), m.group(2), m.group(3)),
        total=True,
    ),
    # "- Chitato 12000 x2"
    _rule(
        "bullet_name_price",
        rf"[-•]\s*([a-z0-9\s.]+?)\s+{_PRICE}(?:\s*x\s*(\d+))?",
        lambda m: (m.group(1), m.group(3), m.group(2)),
    ),
    # "1. Chitato Sapi Panggang @12000 (2pcs)"
    _rule(
        "numbered_entry",
        r"\d+\.(?!\d)\s*([^@(]+?)"
        rf"(?:\s*@\s*{_PRICE})?"
        rf"(?:\s*\((\d+)\s*{_UNIT_WORDS}?\))?",
        lambda m: (m.group(1), m.group(3), m.group(2)),
    ),
    # "3 Aqua 600ml @3k"
    _rule(
        "qty_name_at_price",
        r"(\d+)\s+(.+?)\s*@\s*(?:Rp\.?\s*)?([0-9][0-9.,\s]*(?:\s*k)?)",
        lambda m: (m.group(2), m.group(1), m.group(3)),
    ),
    # "Pocky Matcha @30000 2x"
    _rule(
        "name_at_price_qty",
        rf"(.+?)\s+@\s*{_PRICE}\s+(?:x\s*)?(\d+)\s*x?",
        lambda m: (m.group(1), m.group(3), m.group(2)),
    ),
    # "3 Chitato 45000", "2 Teh Botol 250ml 5k"
    _rule(
        "qty_name_total",
        rf"([1-9]\d?)\s+(.+?)\s+{_PRICE}",
        lambda m: (m.group(2), m.group(1), m.group(3)),
        total=True,
    ),
    # "Indomie Goreng Rendang 3 9000", "Aqua 600ml 6 18000"
    _rule(
        "name_qty_total",
        rf"([a-z][\w\s.]*?)\s+([1-9]\d?)\s+{_PRICE}",
        lambda m: (m.group(1), m.group(2), m.group(3)),
        total=True,
        name_first=True,
    ),
    # "Indomie Kuah Soto 9000"
    _rule(
        "name_price",
        rf"([a-z][\w\s.]*?)\s+{_PRICE}",
        lambda m: (m.group(1), None, m.group(2)),
        name_first=True,
    ),
)


def _dedupe(items: list[ExtractedItem]) -> list[ExtractedItem]:
    seen: set[tuple[str, int, int]] = set()
    result: list[ExtractedItem] = []
    for item in items:
        key = (item.name.lower(), item.qty, item.unit_price)
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def extract_items(block_text: str) -> ExtractItemsResult:
    """Extract item lines from one order block.

    Returns the deduplicated items, whether any item has no price, and the
    claim ledger telling which source lines were consumed.
    """
    claims = LineClaims()
    lines = [strip_inline_header(raw).strip() for raw in block_text.splitlines()]
    lines = [line for line in lines if line]

    items: list[ExtractedItem] = []
    for line in lines:
        if line in claims or is_contact_line(line) or is_phone_line(line):
            continue
        for rule in RULES:
            item = rule.apply(line)
            if item is None:
                continue
            claims.claim(line, rule.name)
            items.append(item)
            break

    items = _dedupe(items)

    # Lines with a quantity and a name but no price ("2 ayam goreng")
    captured = {item.name.lower() for item in items}
    for line in lines:
        if line in claims:
            continue
        m = _UNPRICED.fullmatch(line)
        if m is None or is_contact_line(line) or is_phone_line(line):
            continue
        name = m.group(2).strip()
        if name.lower() in captured:
            continue
        claims.claim(line, "unpriced")
        items.append(ExtractedItem.from_unit_price(name, int(m.group(1)), 0))
        captured.add(name.lower())

    has_unpriced = any(i.unit_price == 0 and i.total_price == 0 for i in items)
    return ExtractItemsResult(items=items, has_unpriced_items=has_unpriced, claims=claims)
