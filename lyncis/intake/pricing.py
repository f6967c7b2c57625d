"""Price token normalization (Rupiah amounts written by hand)."""

from __future__ import annotations

import re

_K_SUFFIX = re.compile(r"^(.*?)\s*k$", re.IGNORECASE)
_LEADING_DECIMAL = re.compile(r"\d+(?:\.\d+)?")
_LEADING_DIGITS = re.compile(r"\d+")
_SEPARATORS = re.compile(r"[.,\s]")


def normalize_price(token: str | None) -> int:
    """Turn a price token into a non-negative integer amount.

    ``"30000"`` → 30000, ``"21.000"`` / ``"30,000"`` → thousand separators,
    ``"10k"`` → 10000, ``"3.5k"`` / ``"3,5k"`` → 3500.
    Malformed input gives 0; this function never raises.
    """
    if not token:
        return 0
    text = token.strip()
    if not text:
        return 0

    m = _K_SUFFIX.match(text)
    if m:
        body = m.group(1).strip()
        if "." in body or "," in body:
            # "3,5k" is a decimal, not a thousand separator
            body = body.replace(",", ".", 1)
            num = _LEADING_DECIMAL.match(body)
            if num is None:
                return 0
            return int(float(num.group()) * 1000 + 0.5)
        num = _LEADING_DIGITS.match(body.replace(" ", ""))
        return int(num.group()) * 1000 if num else 0

    num = _LEADING_DIGITS.match(_SEPARATORS.sub("", text))
    return int(num.group()) if num else 0
