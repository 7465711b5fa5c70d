"""Device selection from listing filters."""

from __future__ import annotations

import logging

from kbremap.core.errors import DeviceSelectionError
from kbremap.core.model import Device, DeviceFilters
from kbremap.core.table import device_table

LOGGER = logging.getLogger(__name__)


def _name_match(device: Device, name: str) -> bool:
    return device.name == name


def _vendor_match(device: Device, vendor_id: int) -> bool:
    return device.vendor_id == vendor_id


def _product_match(device: Device, product_id: int) -> bool:
    return device.product_id == product_id


def select_device(devices: list[Device], filters: DeviceFilters) -> Device | None:
    """Resolve filters to a single device.

    Returns `None` when several devices remain and no filter was given, which
    targets every device.
    """
    candidates = list(devices)
    filtered = False

    for value, predicate, label in (
        (filters.name, _name_match, "name '{}'"),
        (filters.vendor_id, _vendor_match, "vendor ID 0x{:x}"),
        (filters.product_id, _product_match, "product ID 0x{:x}"),
    ):
        if value is None:
            continue
        filtered = True
        candidates = [d for d in candidates if predicate(d, value)]
        if not candidates:
            raise DeviceSelectionError(f"No device found matching {label.format(value)}")

    if len(candidates) == 1:
        LOGGER.debug("Selected device %s", candidates[0])
        return candidates[0]

    if not filtered:
        LOGGER.debug("No device filter given, targeting all %d device(s)", len(candidates))
        return None

    raise DeviceSelectionError(
        "Multiple candidate devices found. Use --name, --vendor-id or --product-id to choose one:\n"
        + device_table(candidates)
    )
