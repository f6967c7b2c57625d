"""Recipient contact splitting (name / phone / address).

Runs on the text left over after item lines have been removed.
"""

from __future__ import annotations

import re

from .items import HEADER_ONLY
from .models import Contact

_NAME_LABELS = (
    r"nama\s+penerima|nama\s+lengkap|atas\s+nama|a/n|nama|name|penerima|"
    r"recipient|customer"
)
_PHONE_LABELS = (
    r"no\.?\s*(?:hp|wa|telp|telepon|handphone)|nomor\s+(?:hp|wa|telepon)|nohp|"
    r"handphone|whatsapp|telepon|telp|tlp|phone|kontak|contact|nomor|hp|wa"
)
_ADDRESS_LABELS = (
    r"alamat\s+lengkap|alamat\s+pengiriman|alamat|almt|address|lokasi"
)


def _labeled(labels: str) -> re.Pattern[str]:
    return re.compile(rf"^(?:{labels})\b\s*[:\-]?\s*(.+)$", re.IGNORECASE)


_NAME_LINE = _labeled(_NAME_LABELS)
_PHONE_LINE = _labeled(_PHONE_LABELS)
_ADDRESS_LINE = _labeled(_ADDRESS_LABELS)
_BARE_LABEL = re.compile(
    rf"^(?:{_NAME_LABELS}|{_PHONE_LABELS}|{_ADDRESS_LABELS})\s*[:\-]?$",
    re.IGNORECASE,
)

_PHONE_RUN = re.compile(r"(?<![A-Za-z\d])\+?[\d(][\d\s\-()]*\d(?![A-Za-z\d])")

ADDRESS_MARKERS = re.compile(
    r"\b(?:jl|jln|jalan|gg|gang|blok|rt|rw|no|kel|kelurahan|kec|kecamatan|"
    r"kab|kabupaten|kota|prov|provinsi|desa|dusun|komplek|komp|perum|perumahan|"
    r"apartemen|apt|tower|lantai|kodepos|avenue|street|road)\b|\b\d{5}\b",
    re.IGNORECASE,
)


def _digits(text: str) -> str:
    return re.sub(r"\D", "", text)


def find_phone(line: str) -> str:
    """Return the digits of a standalone 8–15 digit phone run, or ``""``."""
    for m in _PHONE_RUN.finditer(line):
        digits = _digits(m.group())
        if 8 <= len(digits) <= 15:
            return digits
    return ""


def _append(address: str, part: str) -> str:
    return f"{address}, {part}" if address else part


def split_contact(block_text: str) -> Contact:
    """Recover name, phone and address from an item-free block.

    Labeled lines (``Nama:``, ``HP``, ``Alamat -`` ...) are read first. The
    remaining lines are then assigned by position: the first plain line is
    the name, address-looking lines and everything after go to the address.
    """
    name = phone = address = ""
    untouched: list[str] = []

    for raw in block_text.splitlines():
        line = raw.strip()
        if not line or HEADER_ONLY.match(line) or _BARE_LABEL.match(line):
            continue

        m = _NAME_LINE.match(line)
        if m:
            name = name or m.group(1).strip()
            continue
        m = _PHONE_LINE.match(line)
        if m:
            phone = phone or _digits(m.group(1))
            continue
        m = _ADDRESS_LINE.match(line)
        if m:
            address = _append(address, m.group(1).strip())
            continue

        if not phone:
            found = find_phone(line)
            if found:
                phone = found
                continue

        untouched.append(line)

    for index, line in enumerate(untouched):
        if ADDRESS_MARKERS.search(line):
            address = _append(address, line)
        elif index == 0 and not name:
            name = line
        else:
            address = _append(address, line)

    return Contact(name=name, phone=phone, address=address)
