"""Numeric literal parsing shared by keys, filters and listing columns."""

from __future__ import annotations

import re

from kbremap.core.errors import LiteralParseError

_HEX_DIGITS_RE = re.compile(r"[0-9a-fA-F]+")
_DEC_DIGITS_RE = re.compile(r"[0-9]+")
U64_MAX = (1 << 64) - 1


def parse_literal(text: str) -> int:
    """Parse `0x`-prefixed hexadecimal or bare decimal into an unsigned 64-bit int."""
    if text.startswith("0x"):
        digits, radix, pattern = text[2:], "hexadecimal", _HEX_DIGITS_RE
    else:
        digits, radix, pattern = text, "decimal", _DEC_DIGITS_RE

    if not pattern.fullmatch(digits):
        raise LiteralParseError(f"failed to parse `{text}` as {radix}")
    value = int(digits, 16 if radix == "hexadecimal" else 10)
    if value > U64_MAX:
        raise LiteralParseError(f"`{text}` does not fit in an unsigned 64-bit integer")
    return value
