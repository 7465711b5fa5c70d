from __future__ import annotations

import pytest

from kbremap.core.errors import DeviceSelectionError
from kbremap.core.model import Device, DeviceFilters
from kbremap.core.selection import select_device

INTERNAL = Device(vendor_id=0x5AC, product_id=0x281, name="Apple Internal Keyboard / Trackpad")
MAGIC = Device(vendor_id=0x4C, product_id=0x267, name="Magic Keyboard")
MAGIC_USB = Device(vendor_id=0x5AC, product_id=0x267, name="Magic Keyboard")


def test_single_device_selected_without_filters() -> None:
    assert select_device([MAGIC], DeviceFilters()) == MAGIC


def test_multiple_devices_without_filters_targets_all() -> None:
    assert select_device([INTERNAL, MAGIC], DeviceFilters()) is None


def test_no_devices_without_filters_targets_all() -> None:
    assert select_device([], DeviceFilters()) is None


def test_name_filter() -> None:
    assert select_device([INTERNAL, MAGIC], DeviceFilters(name="Magic Keyboard")) == MAGIC


def test_name_filter_is_exact() -> None:
    with pytest.raises(DeviceSelectionError) as exc:
        select_device([INTERNAL, MAGIC], DeviceFilters(name="Magic"))
    assert "name 'Magic'" in str(exc.value)


def test_filters_apply_in_sequence() -> None:
    devices = [INTERNAL, MAGIC, MAGIC_USB]
    assert select_device(devices, DeviceFilters(name="Magic Keyboard", vendor_id=0x5AC)) == MAGIC_USB


def test_filter_without_match_names_value() -> None:
    with pytest.raises(DeviceSelectionError) as exc:
        select_device([INTERNAL, MAGIC], DeviceFilters(product_id=0x9999))
    assert "product ID 0x9999" in str(exc.value)


def test_ambiguous_after_filter_lists_candidates() -> None:
    with pytest.raises(DeviceSelectionError) as exc:
        select_device([INTERNAL, MAGIC, MAGIC_USB], DeviceFilters(name="Magic Keyboard"))
    message = str(exc.value)
    assert "Multiple candidate devices found" in message
    assert "Vendor ID  Product ID  Name" in message
    assert "0x4c" in message
    assert "0x5ac" in message
