"""Service layer used by CLI and future UI frontends."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from kbremap.core import payload
from kbremap.core.errors import ProfileLoadError
from kbremap.core.listing import list_devices
from kbremap.core.mapping import Mapping, expand_maps, expand_swaps
from kbremap.core.model import ApplyResult, Device, DeviceFilters, Profile
from kbremap.core.profile_loader import LoadedProfiles, load_profiles
from kbremap.core.registry import lookup_usb_device
from kbremap.core.selection import select_device
from kbremap.runners.base import CommandRunner
from kbremap.runners.subprocess_runner import SubprocessRunner

LOGGER = logging.getLogger(__name__)


class RemapService:
    def __init__(self, *, runner: CommandRunner | None = None) -> None:
        self.runner = runner or SubprocessRunner()
        self._loaded: LoadedProfiles | None = None

    @property
    def profiles(self) -> dict[str, Profile]:
        """Profiles by id, loaded on first access."""
        if self._loaded is None:
            self._loaded = load_profiles()
        return self._loaded.profiles

    @property
    def load_warnings(self) -> tuple[str, ...]:
        if self._loaded is None:
            return ()
        return self._loaded.warnings

    def list_profiles(self) -> list[Profile]:
        return sorted(self.profiles.values(), key=lambda p: p.id)

    def get_profile(self, profile_id: str) -> Profile:
        profile = self.profiles.get(profile_id)
        if profile is None:
            raise ProfileLoadError(
                f"Unknown profile '{profile_id}'. Use 'kbremap --list-profiles' to inspect available profiles."
            )
        return profile

    def list_devices(self) -> list[Device]:
        return list_devices(self.runner)

    def resolve_mappings(
        self,
        maps: Sequence[str] = (),
        swaps: Sequence[str] = (),
        profile_id: str | None = None,
    ) -> list[Mapping]:
        mappings: list[Mapping] = []
        if profile_id:
            profile = self.get_profile(profile_id)
            mappings += expand_maps(profile.maps)
            mappings += expand_swaps(profile.swaps)
        mappings += expand_maps(maps)
        mappings += expand_swaps(swaps)
        LOGGER.debug("Resolved %d mapping(s)", len(mappings))
        return mappings

    def resolve_filters(self, filters: DeviceFilters, profile_id: str | None = None) -> DeviceFilters:
        """Fill unset filters from the profile's device section."""
        if not profile_id:
            return filters
        defaults = self.get_profile(profile_id).filters
        return replace(
            filters,
            name=filters.name if filters.name is not None else defaults.name,
            vendor_id=filters.vendor_id if filters.vendor_id is not None else defaults.vendor_id,
            product_id=filters.product_id if filters.product_id is not None else defaults.product_id,
        )

    def select_device(
        self,
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> Device | None:
        if usb_name:
            return lookup_usb_device(self.runner, usb_name)
        return select_device(self.list_devices(), filters or DeviceFilters())

    def apply(
        self,
        mappings: Sequence[Mapping],
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> ApplyResult:
        device = self.select_device(filters, usb_name=usb_name)
        command = payload.apply(self.runner, device, mappings)
        return ApplyResult(device=device, mappings=tuple(mappings), command=tuple(command))

    def reset(
        self,
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> ApplyResult:
        return self.apply([], filters, usb_name=usb_name)

    def dump(
        self,
        mappings: Sequence[Mapping],
        filters: DeviceFilters | None = None,
        *,
        usb_name: str | None = None,
    ) -> str:
        device = self.select_device(filters, usb_name=usb_name)
        return payload.dump(device, mappings)
