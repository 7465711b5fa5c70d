"""Key mappings and parsing of `SRC:DST` tokens."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from kbremap.core.errors import KeyParseError, MappingParseError
from kbremap.core.keys import Key, NamedKey, describe_key, parse_key


@dataclass(frozen=True)
class Mapping:
    """A remapping of one key to another."""

    src: Key
    dst: Key

    def swapped(self) -> Mapping:
        return Mapping(src=self.dst, dst=self.src)

    def describe(self) -> str:
        return f"{describe_key(self.src)} -> {describe_key(self.dst)}"


@dataclass(frozen=True)
class _Bilateral:
    left: Key
    right: Key


@dataclass(frozen=True)
class _Single:
    key: Key


_BILATERAL_NAMES = {
    "control": _Bilateral(NamedKey.LEFT_CONTROL, NamedKey.RIGHT_CONTROL),
    "shift": _Bilateral(NamedKey.LEFT_SHIFT, NamedKey.RIGHT_SHIFT),
    "option": _Bilateral(NamedKey.LEFT_OPTION, NamedKey.RIGHT_OPTION),
    "command": _Bilateral(NamedKey.LEFT_COMMAND, NamedKey.RIGHT_COMMAND),
}


def _classify(side: str) -> _Bilateral | _Single:
    bilateral = _BILATERAL_NAMES.get(side)
    if bilateral is not None:
        return bilateral
    return _Single(parse_key(side))


def _expand(src: _Bilateral | _Single, dst: _Bilateral | _Single) -> list[Mapping]:
    if isinstance(src, _Bilateral):
        if isinstance(dst, _Bilateral):
            return [Mapping(src.left, dst.left), Mapping(src.right, dst.right)]
        return [Mapping(src.left, dst.key), Mapping(src.right, dst.key)]
    if isinstance(dst, _Bilateral):
        return [Mapping(src.key, dst.left), Mapping(src.key, dst.right)]
    return [Mapping(src.key, dst.key)]


def parse_mappings(text: str) -> list[Mapping]:
    """Parse `SRC:DST` into one or more mappings.

    `control`, `shift`, `option` and `command` stand for both the left and right
    physical keys. Two such names pair left with left and right with right; one
    such name maps both physical keys to or from the single key on the other side.
    """
    if not text:
        raise MappingParseError("failed to parse mapping: empty")
    src, sep, dst = text.partition(":")
    if not sep:
        raise MappingParseError(f"failed to parse mapping from `{text}`: colon not found")
    if not src or not dst:
        raise MappingParseError(f"failed to parse mapping from `{text}`: expected `SRC:DST`")

    try:
        return _expand(_classify(src), _classify(dst))
    except KeyParseError as exc:
        raise MappingParseError(f"failed to parse mapping from `{text}`: {exc}") from exc


def expand_maps(tokens: Iterable[str]) -> list[Mapping]:
    mappings: list[Mapping] = []
    for token in tokens:
        mappings.extend(parse_mappings(token))
    return mappings


def expand_swaps(tokens: Iterable[str]) -> list[Mapping]:
    """Parse swap tokens, emitting each mapping followed by its reverse."""
    mappings: list[Mapping] = []
    for token in tokens:
        forward = parse_mappings(token)
        mappings.extend(forward)
        mappings.extend(mapping.swapped() for mapping in forward)
    return mappings
