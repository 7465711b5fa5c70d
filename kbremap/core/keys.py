"""Key vocabulary and its USB HID usage encoding.

A key is one of four variants:

- `NamedKey`: physical keys with a fixed name (return, lcommand, fn, ...).
- `Char`: the key that types a printable character, case-insensitive for letters.
- `FunctionKey`: F1 through F24.
- `RawKey`: any usage ID not covered above.

Usage IDs follow the USB HID Usage Tables, Keyboard/Keypad page. See
https://developer.apple.com/library/archive/technotes/tn2450/_index.html
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Union

from kbremap.core.errors import KeyEncodingError, KeyParseError, LiteralParseError
from kbremap.core.literal import parse_literal

KEYBOARD_USAGE_PAGE = 0x7_0000_0000
VENDOR_USAGE_PAGE = 0xFF_0000_0000
_PAGE_SHIFT_LIMIT = 1 << 32

_FUNCTION_KEY_RE = re.compile(r"f([0-9]+)")


class NamedKey(enum.Enum):
    RETURN = "return"
    ESCAPE = "escape"
    DELETE = "delete"
    CAPS_LOCK = "capslock"
    LEFT_CONTROL = "lcontrol"
    LEFT_SHIFT = "lshift"
    LEFT_OPTION = "loption"
    LEFT_COMMAND = "lcommand"
    RIGHT_CONTROL = "rcontrol"
    RIGHT_SHIFT = "rshift"
    RIGHT_OPTION = "roption"
    RIGHT_COMMAND = "rcommand"
    FN = "fn"

    def usage_page_id(self) -> int:
        if self is NamedKey.FN:
            return VENDOR_USAGE_PAGE
        return KEYBOARD_USAGE_PAGE

    def usage_id(self) -> int | None:
        return _NAMED_USAGE_IDS[self]

    def describe(self) -> str:
        return self.value


_NAMED_USAGE_IDS: dict[NamedKey, int] = {
    NamedKey.RETURN: 0x28,
    NamedKey.ESCAPE: 0x29,
    NamedKey.DELETE: 0x2A,
    NamedKey.CAPS_LOCK: 0x39,
    NamedKey.LEFT_CONTROL: 0xE0,
    NamedKey.LEFT_SHIFT: 0xE1,
    NamedKey.LEFT_OPTION: 0xE2,
    NamedKey.LEFT_COMMAND: 0xE3,
    NamedKey.RIGHT_CONTROL: 0xE4,
    NamedKey.RIGHT_SHIFT: 0xE5,
    NamedKey.RIGHT_OPTION: 0xE6,
    NamedKey.RIGHT_COMMAND: 0xE7,
    NamedKey.FN: 0x03,
}


def _char_table() -> dict[str, int]:
    table: dict[str, int] = {}
    for offset, letter in enumerate("abcdefghijklmnopqrstuvwxyz"):
        table[letter] = table[letter.upper()] = 0x04 + offset
    # Digits 1..9 then 0, each sharing a key with its US shifted symbol.
    for offset, (digit, shifted) in enumerate(zip("1234567890", "!@#$%^&*()")):
        table[digit] = table[shifted] = 0x1E + offset
    for chars, usage_id in (
        ("\t", 0x2B),
        (" ", 0x2C),
        ("-_", 0x2D),
        ("=+", 0x2E),
        ("[{", 0x2F),
        ("]}", 0x30),
        ("\\|", 0x31),
        # 0x32 is the Non-US `#~` key.
        (";:", 0x33),
        ("'\"", 0x34),
        ("`~", 0x35),
        (",<", 0x36),
        (".>", 0x37),
        ("/?", 0x38),
    ):
        for char in chars:
            table[char] = usage_id
    return table


_CHAR_USAGE_IDS = _char_table()


@dataclass(frozen=True)
class Char:
    """The key that produces `char` on a US layout."""

    char: str

    def usage_page_id(self) -> int:
        return KEYBOARD_USAGE_PAGE

    def usage_id(self) -> int | None:
        return _CHAR_USAGE_IDS.get(self.char)

    def describe(self) -> str:
        return repr(self.char)


@dataclass(frozen=True)
class FunctionKey:
    number: int

    def __post_init__(self) -> None:
        if not 1 <= self.number <= 24:
            raise ValueError(f"invalid function key number: {self.number}")

    def usage_page_id(self) -> int:
        return KEYBOARD_USAGE_PAGE

    def usage_id(self) -> int | None:
        # F1-F12 and F13-F24 are two contiguous runs.
        if self.number <= 12:
            return 0x3A + self.number - 1
        return 0x68 + self.number - 13

    def describe(self) -> str:
        return f"f{self.number}"


@dataclass(frozen=True)
class RawKey:
    """Any key by usage ID.

    Codes below 2**32 are usage IDs on the keyboard page. Larger codes already
    carry their usage page in the upper bits and are passed through as-is.
    """

    code: int

    def usage_page_id(self) -> int:
        if self.code >= _PAGE_SHIFT_LIMIT:
            return 0
        return KEYBOARD_USAGE_PAGE

    def usage_id(self) -> int | None:
        return self.code

    def describe(self) -> str:
        return f"0x{self.code:x}"


Key = Union[NamedKey, Char, FunctionKey, RawKey]

_NAMED_KEYS_BY_NAME = {key.value: key for key in NamedKey}


def parse_key(text: str) -> Key:
    """Parse a key from its user-facing name.

    Named keys win over single characters, which win over function keys, which
    win over raw hexadecimal/decimal codes.
    """
    lowered = text.lower()

    named = _NAMED_KEYS_BY_NAME.get(lowered)
    if named is not None:
        return named

    if len(lowered) == 1 and len(text) == 1:
        return Char(text)

    function_match = _FUNCTION_KEY_RE.fullmatch(lowered)
    if function_match:
        number = int(function_match.group(1))
        if not 1 <= number <= 24:
            raise KeyParseError(f"failed to parse key from `{text}`: invalid function key number: {number}")
        return FunctionKey(number)

    try:
        return RawKey(parse_literal(lowered))
    except LiteralParseError as exc:
        raise KeyParseError(f"failed to parse key from `{text}`: {exc}") from exc


def describe_key(key: Key) -> str:
    return key.describe()


def encode_key(key: Key) -> int:
    """Return the composite usage page + usage ID value `hidutil` expects."""
    usage_id = key.usage_id()
    if usage_id is None:
        raise KeyEncodingError(
            f"failed to serialize key {describe_key(key)}, consider using a raw usage ID such as `0x64`"
        )
    return key.usage_page_id() + usage_id
