"""Parsing of the `hidutil list` device/service table.

The output has no machine-readable mode. Each section starts with a
`Services:` or `Devices:` line followed by a column header line; columns are
located by the character offset at which each header token starts. Long
values may wrap onto the next physical line, so a section body is sliced as
one stream of text rather than line by line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from kbremap.core.errors import DeviceListingError, LiteralParseError
from kbremap.core.literal import parse_literal
from kbremap.core.model import Device
from kbremap.runners.base import CommandRunner

LOGGER = logging.getLogger(__name__)

NULL_MARKER = "(null)"
_SECTION_HEADERS = {"Services:": "service", "Devices:": "device"}
_REQUIRED_DEVICE_COLUMNS = ("VendorID", "ProductID", "Product")
_TOKEN_RE = re.compile(r"\S+")
_WRAP_RE = re.compile(r"\s*\n\s*")


@dataclass(frozen=True)
class _Column:
    name: str
    start: int
    end: int | None


@dataclass
class _Section:
    kind: str
    columns: tuple[_Column, ...]


def list_devices(runner: CommandRunner) -> list[Device]:
    """List HID devices reported by `hidutil list`."""
    output = runner.run("hidutil", ["list"])
    try:
        devices = parse_device_listing(output)
    except DeviceListingError as exc:
        raise DeviceListingError(f"failed to parse `hidutil list` output: {exc}") from exc
    LOGGER.debug("Parsed %d device(s) from hidutil listing", len(devices))
    return devices


def parse_device_listing(text: str) -> list[Device]:
    devices: dict[tuple[int, int, str], Device] = {}
    section: _Section | None = None
    pos = 0

    while pos < len(text):
        line_end = _line_end(text, pos)
        line = text[pos:line_end].rstrip("\r")

        if not line.strip():
            pos = line_end + 1
            continue

        kind = _SECTION_HEADERS.get(line.strip())
        if kind is not None:
            header_start = line_end + 1
            if header_start >= len(text):
                raise DeviceListingError(f"expected header after '{line.strip()}'")
            header_end = _line_end(text, header_start)
            header = text[header_start:header_end].rstrip("\r")
            if not header.strip():
                raise DeviceListingError(f"expected header after '{line.strip()}'")
            section = _Section(kind=kind, columns=_parse_columns(header))
            if kind == "device":
                _check_device_columns(section)
            pos = header_end + 1
            continue

        if section is None:
            raise DeviceListingError(f"unexpected row before any section header: {line.strip()!r}")

        values, pos = _slice_row(text, pos, section.columns)
        if section.kind != "device":
            continue
        device = _build_device(values)
        if device is not None:
            devices.setdefault(device.identity, device)

    return sorted(devices.values(), key=lambda d: d.identity)


def _line_end(text: str, start: int) -> int:
    end = text.find("\n", start)
    return len(text) if end == -1 else end


def _parse_columns(header: str) -> tuple[_Column, ...]:
    tokens = [(m.group(0), m.start()) for m in _TOKEN_RE.finditer(header)]
    columns = []
    for index, (name, start) in enumerate(tokens):
        end = tokens[index + 1][1] if index + 1 < len(tokens) else None
        columns.append(_Column(name=name, start=start, end=end))
    return tuple(columns)


def _check_device_columns(section: _Section) -> None:
    names = {column.name for column in section.columns}
    missing = [name for name in _REQUIRED_DEVICE_COLUMNS if name not in names]
    if missing:
        raise DeviceListingError(f"expected column(s) {', '.join(missing)} in Devices header")


def _slice_row(text: str, row_start: int, columns: tuple[_Column, ...]) -> tuple[dict[str, str], int]:
    """Slice one logical row starting at `row_start`.

    Returns the column values and the offset of the next row. The last column
    runs to the first newline at or after its start, which is where a wrapped
    row ends.
    """
    values: dict[str, str] = {}
    row_end = len(text)
    for column in columns:
        start = row_start + column.start
        if column.end is not None:
            end = row_start + column.end
        else:
            end = _line_end(text, min(start, len(text)))
            row_end = min(end + 1, len(text))
        values[column.name] = text[start:end].strip()
    return values, row_end


def _optional(value: str | None) -> str | None:
    if value is None or value == NULL_MARKER or value == "":
        return None
    return value


def _build_device(values: dict[str, str]) -> Device | None:
    name = _optional(values["Product"])
    if name is None:
        return None
    try:
        vendor_id = parse_literal(values["VendorID"])
        product_id = parse_literal(values["ProductID"])
    except LiteralParseError as exc:
        raise DeviceListingError(f"invalid id in row for '{name}': {exc}") from exc
    return Device(
        vendor_id=vendor_id,
        product_id=product_id,
        name=_WRAP_RE.sub(" ", name),
        transport=_optional(values.get("Transport")),
        device_class=_optional(values.get("Class")),
    )
