"""USB device lookup through the I/O registry (`ioreg`)."""

from __future__ import annotations

import logging
import re

from kbremap.core.errors import DeviceSelectionError
from kbremap.core.model import Device
from kbremap.runners.base import CommandRunner

LOGGER = logging.getLogger(__name__)

_ID_RE = re.compile(r'"(idProduct|idVendor)" = 0x([0-9a-fA-F]+)')


def lookup_usb_device(runner: CommandRunner, name: str) -> Device:
    """Find a USB device's vendor and product IDs by its registry name."""
    output = runner.run("ioreg", ["-p", "IOUSB", "-x", "-n", name])
    ids: dict[str, int] = {}
    for key, value in _ID_RE.findall(output):
        ids.setdefault(key, int(value, 16))

    if "idVendor" not in ids or "idProduct" not in ids:
        raise DeviceSelectionError(f"No USB device named '{name}' found in the I/O registry")

    device = Device(vendor_id=ids["idVendor"], product_id=ids["idProduct"], name=name)
    LOGGER.debug("Resolved USB device %s via ioreg", device)
    return device
