from __future__ import annotations

from collections.abc import Sequence

import pytest

from kbremap.core.errors import DeviceSelectionError
from kbremap.core.model import Device
from kbremap.core.registry import lookup_usb_device

IOREG_OUTPUT = """+-o USB Keyboard@14100000  <class IOUSBHostDevice, id 0x100000b2c, registered, matched, active>
    {
      "sessionID" = 0x2f6ad64f3
      "idProduct" = 0x24f
      "USB Product Name" = "USB Keyboard"
      "idVendor" = 0x4d9
      "bcdDevice" = 0x110
    }
"""


class FakeRunner:
    def __init__(self, output: str) -> None:
        self.output = output
        self.calls: list[tuple[str, list[str]]] = []

    def run(self, program: str, args: Sequence[str]) -> str:
        self.calls.append((program, list(args)))
        return self.output


def test_lookup_usb_device() -> None:
    runner = FakeRunner(IOREG_OUTPUT)
    device = lookup_usb_device(runner, "USB Keyboard")
    assert device == Device(vendor_id=0x4D9, product_id=0x24F, name="USB Keyboard")
    assert runner.calls == [("ioreg", ["-p", "IOUSB", "-x", "-n", "USB Keyboard"])]


def test_lookup_usb_device_not_found() -> None:
    with pytest.raises(DeviceSelectionError) as exc:
        lookup_usb_device(FakeRunner(""), "Missing Keyboard")
    assert "Missing Keyboard" in str(exc.value)
