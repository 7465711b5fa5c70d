"""Plain console table rendering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from kbremap.core.model import Device


def format_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    rows = [tuple(row) for row in rows]
    widths = [len(h) for h in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [_line(headers), _line(["-" * width for width in widths])]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines)


def device_table(devices: Iterable[Device]) -> str:
    return format_table(
        ("Vendor ID", "Product ID", "Name"),
        ((f"0x{d.vendor_id:x}", f"0x{d.product_id:x}", d.name) for d in devices),
    )
