"""Stable public API for building tooling on top of kbremap.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Sequence

from kbremap.core.errors import (
    CommandError,
    DeviceListingError,
    DeviceSelectionError,
    KbRemapError,
    KeyEncodingError,
    KeyParseError,
    LiteralParseError,
    MappingParseError,
    ProfileLoadError,
    ProfileValidationError,
)
from kbremap.core.keys import Char, FunctionKey, Key, NamedKey, RawKey, encode_key, parse_key
from kbremap.core.mapping import Mapping, parse_mappings
from kbremap.core.model import ApplyResult, Device, DeviceFilters, Profile
from kbremap.core.service import RemapService
from kbremap.runners.base import CommandRunner

__all__ = [
    "KbRemapError",
    "CommandError",
    "DeviceListingError",
    "DeviceSelectionError",
    "KeyEncodingError",
    "KeyParseError",
    "LiteralParseError",
    "MappingParseError",
    "ProfileLoadError",
    "ProfileValidationError",
    "Char",
    "FunctionKey",
    "Key",
    "NamedKey",
    "RawKey",
    "encode_key",
    "parse_key",
    "Mapping",
    "parse_mappings",
    "ApplyResult",
    "Device",
    "DeviceFilters",
    "Profile",
    "CommandRunner",
    "Client",
]


class Client:
    """Public client for interacting with kbremap core capabilities.

    A `Client` instance wraps profile loading, device discovery/selection, and
    `hidutil` property application behind a stable API intended for
    third-party tools (GUI/TUI/services/scripts).
    """

    def __init__(self, *, runner: CommandRunner | None = None) -> None:
        self._service = RemapService(runner=runner)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_profiles(self) -> list[Profile]:
        return self._service.list_profiles()

    def list_devices(self) -> list[Device]:
        return self._service.list_devices()

    def select_device(
        self,
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> Device | None:
        return self._service.select_device(filters, usb_name=usb_name)

    def resolve_mappings(
        self,
        *,
        maps: Sequence[str] = (),
        swaps: Sequence[str] = (),
        profile_id: str | None = None,
    ) -> list[Mapping]:
        return self._service.resolve_mappings(maps, swaps, profile_id=profile_id)

    def apply(
        self,
        mappings: Sequence[Mapping],
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> ApplyResult:
        return self._service.apply(mappings, filters, usb_name=usb_name)

    def reset(
        self,
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> ApplyResult:
        return self._service.reset(filters, usb_name=usb_name)

    def dump(
        self,
        mappings: Sequence[Mapping],
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> str:
        return self._service.dump(mappings, filters, usb_name=usb_name)
