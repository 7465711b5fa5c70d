"""Construction of `hidutil property` arguments.

Values are written as hexadecimal literals. The `--matching` and `--set`
arguments are therefore `hidutil` property syntax, not strict JSON, and
`json.loads` rejects them. `apply` and `dump` both build their arguments
through `property_args`.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Sequence

from kbremap.core.keys import encode_key
from kbremap.core.mapping import Mapping
from kbremap.core.model import Device
from kbremap.runners.base import CommandRunner

LOGGER = logging.getLogger(__name__)

HIDUTIL = "hidutil"


def matching_option(device: Device) -> str:
    return f'{{"VendorID":0x{device.vendor_id:x},"ProductID":0x{device.product_id:04x}}}'


def set_option(mappings: Sequence[Mapping]) -> str:
    entries = []
    for mapping in mappings:
        src = encode_key(mapping.src)
        dst = encode_key(mapping.dst)
        entries.append(
            f'{{"HIDKeyboardModifierMappingSrc":0x{src:09x},"HIDKeyboardModifierMappingDst":0x{dst:09x}}}'
        )
    return '{"UserKeyMapping":[' + ",".join(entries) + "]}"


def property_args(device: Device | None, mappings: Sequence[Mapping]) -> list[str]:
    args = ["property"]
    if device is not None:
        args += ["--matching", matching_option(device)]
    args += ["--set", set_option(mappings)]
    return args


def apply(runner: CommandRunner, device: Device | None, mappings: Sequence[Mapping]) -> list[str]:
    """Apply the mappings, replacing any previous ones. An empty list resets."""
    args = property_args(device, mappings)
    LOGGER.info("Applying %d mapping(s) to %s", len(mappings), device.name if device else "all devices")
    runner.run(HIDUTIL, args)
    return [HIDUTIL, *args]


def dump(device: Device | None, mappings: Sequence[Mapping]) -> str:
    """Render the command `apply` would run, one option per line."""
    args = property_args(device, mappings)
    lines = [f"{HIDUTIL} {args[0]}"]
    lines += [f"  {flag} {shlex.quote(value)}" for flag, value in zip(args[1::2], args[2::2])]
    return " \\\n".join(lines)
