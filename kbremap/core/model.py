"""Core data models used across parsers, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass

from kbremap.core.mapping import Mapping


@dataclass(frozen=True)
class Device:
    vendor_id: int
    product_id: int
    name: str
    transport: str | None = None
    device_class: str | None = None

    @property
    def identity(self) -> tuple[int, int, str]:
        return (self.vendor_id, self.product_id, self.name)


@dataclass(frozen=True)
class DeviceFilters:
    name: str | None = None
    vendor_id: int | None = None
    product_id: int | None = None

    def is_empty(self) -> bool:
        return self.name is None and self.vendor_id is None and self.product_id is None


@dataclass(frozen=True)
class Profile:
    id: str
    name: str
    description: str
    filters: DeviceFilters
    maps: tuple[str, ...]
    swaps: tuple[str, ...]


@dataclass(frozen=True)
class ApplyResult:
    device: Device | None
    mappings: tuple[Mapping, ...]
    command: tuple[str, ...]
