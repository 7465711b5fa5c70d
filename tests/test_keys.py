from __future__ import annotations

import string

import pytest

from kbremap.core.errors import KeyEncodingError, KeyParseError
from kbremap.core.keys import (
    KEYBOARD_USAGE_PAGE,
    VENDOR_USAGE_PAGE,
    Char,
    FunctionKey,
    NamedKey,
    RawKey,
    encode_key,
    parse_key,
)

NAMED_CODES = {
    "return": 0x28,
    "escape": 0x29,
    "delete": 0x2A,
    "capslock": 0x39,
    "lcontrol": 0xE0,
    "lshift": 0xE1,
    "loption": 0xE2,
    "lcommand": 0xE3,
    "rcontrol": 0xE4,
    "rshift": 0xE5,
    "roption": 0xE6,
    "rcommand": 0xE7,
}


@pytest.mark.parametrize(("name", "usage_id"), sorted(NAMED_CODES.items()))
def test_named_keys_encode_on_keyboard_page(name: str, usage_id: int) -> None:
    key = parse_key(name)
    assert isinstance(key, NamedKey)
    assert key.usage_page_id() == KEYBOARD_USAGE_PAGE
    assert encode_key(key) == KEYBOARD_USAGE_PAGE + usage_id


def test_fn_uses_vendor_page() -> None:
    key = parse_key("fn")
    assert key is NamedKey.FN
    assert key.usage_page_id() == VENDOR_USAGE_PAGE
    assert encode_key(key) == 0xFF_0000_0003


def test_named_keys_are_case_insensitive() -> None:
    assert parse_key("Return") is NamedKey.RETURN
    assert parse_key("CapsLock") is NamedKey.CAPS_LOCK
    assert parse_key("LCOMMAND") is NamedKey.LEFT_COMMAND


def test_single_character_keeps_case() -> None:
    assert parse_key("c") == Char("c")
    assert parse_key("A") == Char("A")
    assert parse_key("%") == Char("%")


def test_letters_encode_case_insensitively() -> None:
    for lower, upper in zip(string.ascii_lowercase, string.ascii_uppercase):
        assert Char(lower).usage_id() == Char(upper).usage_id()
    assert Char("a").usage_id() == 0x04
    assert Char("Z").usage_id() == 0x1D


def test_character_table_spot_checks() -> None:
    assert Char("1").usage_id() == 0x1E
    assert Char("!").usage_id() == 0x1E
    assert Char("0").usage_id() == 0x27
    assert Char(")").usage_id() == 0x27
    assert Char("\t").usage_id() == 0x2B
    assert Char(" ").usage_id() == 0x2C
    assert Char("_").usage_id() == 0x2D
    assert Char("|").usage_id() == 0x31
    assert Char(":").usage_id() == 0x33
    assert Char('"').usage_id() == 0x34
    assert Char("~").usage_id() == 0x35
    assert Char("?").usage_id() == 0x38


def test_unsupported_character_has_no_usage_id() -> None:
    assert parse_key("§") == Char("§")
    assert Char("§").usage_id() is None
    assert Char("é").usage_id() is None


def test_unsupported_character_fails_at_encoding() -> None:
    with pytest.raises(KeyEncodingError) as exc:
        encode_key(Char("§"))
    assert "'§'" in str(exc.value)
    assert "raw usage ID" in str(exc.value)


@pytest.mark.parametrize("number", range(1, 25))
def test_function_keys_parse(number: int) -> None:
    assert parse_key(f"f{number}") == FunctionKey(number)
    assert parse_key(f"F{number}") == FunctionKey(number)


@pytest.mark.parametrize("text", ["f0", "f25", "f99"])
def test_function_key_out_of_range(text: str) -> None:
    with pytest.raises(KeyParseError) as exc:
        parse_key(text)
    assert "invalid function key number" in str(exc.value)
    assert f"`{text}`" in str(exc.value)


def test_function_key_usage_ids() -> None:
    assert FunctionKey(1).usage_id() == 0x3A
    assert FunctionKey(11).usage_id() == 0x44
    assert FunctionKey(12).usage_id() == 0x45
    assert FunctionKey(13).usage_id() == 0x68
    assert FunctionKey(24).usage_id() == 0x73


def test_raw_keys_parse_hex_and_decimal() -> None:
    assert parse_key("0x39") == RawKey(0x39)
    assert parse_key("0X39") == RawKey(0x39)
    assert parse_key("100") == RawKey(100)


def test_raw_usage_id_is_added_to_keyboard_page() -> None:
    assert RawKey(0x5).usage_id() == 0x5
    assert encode_key(RawKey(0x64)) == 0x7_0000_0064


def test_raw_code_with_usage_page_passes_through() -> None:
    assert encode_key(RawKey(0x7_0000_0039)) == 0x7_0000_0039
    assert encode_key(RawKey(0xFF_0000_0003)) == 0xFF_0000_0003


@pytest.mark.parametrize("text", ["zz", "enter", "0xqq", "fx", "f5\n", "0x39\n"])
def test_unparseable_key(text: str) -> None:
    with pytest.raises(KeyParseError) as exc:
        parse_key(text)
    assert f"`{text}`" in str(exc.value)
