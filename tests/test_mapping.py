from __future__ import annotations

import pytest

from kbremap.core.errors import MappingParseError
from kbremap.core.keys import Char, NamedKey, RawKey
from kbremap.core.mapping import Mapping, expand_maps, expand_swaps, parse_mappings


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("return:A", [Mapping(NamedKey.RETURN, Char("A"))]),
        ("capslock:0x64", [Mapping(NamedKey.CAPS_LOCK, RawKey(0x64))]),
        (
            "command:lcontrol",
            [
                Mapping(NamedKey.LEFT_COMMAND, NamedKey.LEFT_CONTROL),
                Mapping(NamedKey.RIGHT_COMMAND, NamedKey.LEFT_CONTROL),
            ],
        ),
        (
            "command:control",
            [
                Mapping(NamedKey.LEFT_COMMAND, NamedKey.LEFT_CONTROL),
                Mapping(NamedKey.RIGHT_COMMAND, NamedKey.RIGHT_CONTROL),
            ],
        ),
        (
            "capslock:shift",
            [
                Mapping(NamedKey.CAPS_LOCK, NamedKey.LEFT_SHIFT),
                Mapping(NamedKey.CAPS_LOCK, NamedKey.RIGHT_SHIFT),
            ],
        ),
        ("a::", [Mapping(Char("a"), Char(":"))]),
    ],
)
def test_parse_mappings(text: str, expected: list[Mapping]) -> None:
    assert parse_mappings(text) == expected


@pytest.mark.parametrize("text", ["", "return", "return:", ":return"])
def test_malformed_tokens_rejected(text: str) -> None:
    with pytest.raises(MappingParseError):
        parse_mappings(text)


def test_bilateral_names_are_case_sensitive() -> None:
    with pytest.raises(MappingParseError) as exc:
        parse_mappings("Control:a")
    assert "`Control:a`" in str(exc.value)


def test_bad_key_reported_with_token() -> None:
    with pytest.raises(MappingParseError) as exc:
        parse_mappings("f30:a")
    assert "invalid function key number" in str(exc.value)


def test_swapped_twice_is_identity() -> None:
    mapping = Mapping(NamedKey.CAPS_LOCK, NamedKey.ESCAPE)
    assert mapping.swapped() == Mapping(NamedKey.ESCAPE, NamedKey.CAPS_LOCK)
    assert mapping.swapped().swapped() == mapping


def test_expand_maps_preserves_order() -> None:
    assert expand_maps(["a:b", "capslock:escape"]) == [
        Mapping(Char("a"), Char("b")),
        Mapping(NamedKey.CAPS_LOCK, NamedKey.ESCAPE),
    ]


def test_expand_swaps_adds_reverse_mappings() -> None:
    assert expand_swaps(["option:command"]) == [
        Mapping(NamedKey.LEFT_OPTION, NamedKey.LEFT_COMMAND),
        Mapping(NamedKey.RIGHT_OPTION, NamedKey.RIGHT_COMMAND),
        Mapping(NamedKey.LEFT_COMMAND, NamedKey.LEFT_OPTION),
        Mapping(NamedKey.RIGHT_COMMAND, NamedKey.RIGHT_OPTION),
    ]
