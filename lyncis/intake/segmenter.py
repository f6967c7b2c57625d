"""Split pasted multi-order text into one block per candidate order."""

from __future__ import annotations

import re

DEFAULT_MIN_BLOCK_LENGTH = 3

_SEPARATOR = re.compile(r"^\s*(?:={3,}|-{3,})\s*$")
_NAME_LABEL = (
    r"(?:nama(?:\s+(?:penerima|lengkap))?|name|penerima|recipient|atas\s+nama|a/n)"
    r"\s*[:\-]"
)
# "2. Nama: Siti" starts a new order; the list number is dropped
_NUMBERED_ENTRY = re.compile(rf"^\s*\d+\s*[.)]\s*(?={_NAME_LABEL})", re.IGNORECASE)
_NAME_LINE = re.compile(rf"^\s*{_NAME_LABEL}", re.IGNORECASE)


def segment_blocks(raw_text: str, min_length: int = DEFAULT_MIN_BLOCK_LENGTH) -> list[str]:
    """Split raw text into per-order blocks.

    Boundaries are blank lines, separator lines (``===``, ``---``),
    numbered ``Nama:`` entries, and a second ``Nama:`` line inside the same
    block. Blocks shorter than ``min_length`` characters are dropped as
    noise.
    """
    blocks: list[list[str]] = []
    current: list[str] = []
    has_name = False

    def flush() -> None:
        nonlocal has_name
        if current:
            blocks.append(current.copy())
            current.clear()
        has_name = False

    for line in raw_text.splitlines():
        if not line.strip() or _SEPARATOR.match(line):
            flush()
            continue
        m = _NUMBERED_ENTRY.match(line)
        if m:
            flush()
            line = line[m.end():]
        elif _NAME_LINE.match(line) and has_name:
            # Orders pasted back to back without a blank line
            flush()
        if _NAME_LINE.match(line):
            has_name = True
        current.append(line.rstrip())
    flush()

    result = []
    for lines in blocks:
        text = "\n".join(lines).strip()
        if len(text) >= min_length:
            result.append(text)
    return result
