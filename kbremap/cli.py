"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from kbremap.core.errors import KbRemapError
from kbremap.core.literal import parse_literal
from kbremap.core.model import ApplyResult, DeviceFilters
from kbremap.core.service import RemapService
from kbremap.core.table import device_table

app = typer.Typer(help="Remap macOS keyboard keys through hidutil", add_completion=False)


def _build_service() -> RemapService:
    return RemapService()


def _echo_load_warnings(service: RemapService) -> None:
    for warning in service.load_warnings:
        typer.echo(f"Warning: {warning}", err=True)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _parse_id(value: str | None) -> int | None:
    return parse_literal(value) if value is not None else None


def _describe_target(result: ApplyResult) -> str:
    if result.device is None:
        return "all devices"
    d = result.device
    return f"{d.name} (0x{d.vendor_id:x}:0x{d.product_id:x})"


@app.command()
def main(
    list_devices: bool = typer.Option(False, "--list", help="List keyboard devices and exit."),
    list_profiles: bool = typer.Option(False, "--list-profiles", help="List available profiles and exit."),
    reset: bool = typer.Option(False, "--reset", help="Clear all custom key mappings."),
    dump: bool = typer.Option(False, "--dump", help="Print the hidutil command instead of running it."),
    maps: list[str] | None = typer.Option(None, "--map", "-m", metavar="SRC:DST", help="Map SRC to DST."),
    swaps: list[str] | None = typer.Option(None, "--swap", "-s", metavar="SRC:DST", help="Swap SRC and DST."),
    profile: str | None = typer.Option(None, "--profile", "-p", help="Apply a named profile."),
    name: str | None = typer.Option(None, "--name", "-n", help="Exact device name."),
    vendor_id: str | None = typer.Option(None, "--vendor-id", metavar="HEX", help="Device vendor ID."),
    product_id: str | None = typer.Option(None, "--product-id", metavar="HEX", help="Device product ID."),
    usb_name: str | None = typer.Option(
        None, "--usb-name", help="Look the device up by USB registry name via ioreg."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Remap keys on one or all keyboards.

    Keys are named (return, escape, delete, capslock, fn, lcontrol, rshift, ...),
    single characters (a, 1, /), function keys (f1-f24) or raw usage IDs (0x64).
    control, shift, option and command stand for both the left and right keys.
    """
    _configure_logging(verbose)
    maps = maps or []
    swaps = swaps or []

    if reset and (maps or swaps or profile):
        raise typer.BadParameter("cannot be combined with --map, --swap or --profile", param_hint="'--reset'")
    if usb_name and (name or vendor_id or product_id):
        raise typer.BadParameter(
            "cannot be combined with --name, --vendor-id or --product-id", param_hint="'--usb-name'"
        )

    try:
        service = _build_service()

        if list_profiles:
            profiles = service.list_profiles()
            _echo_load_warnings(service)
            if not profiles:
                typer.echo("No profiles loaded")
                return
            for item in profiles:
                typer.echo(f"{item.id}: {item.name}")
                for token in item.maps:
                    typer.echo(f"  map {token}")
                for token in item.swaps:
                    typer.echo(f"  swap {token}")
            return

        if list_devices:
            devices = service.list_devices()
            if not devices:
                typer.echo("No keyboard devices found")
                return
            typer.echo(device_table(devices))
            return

        if not (reset or maps or swaps or profile):
            raise typer.BadParameter("nothing to do, pass --map, --swap, --profile or --reset")

        filters = service.resolve_filters(
            DeviceFilters(name=name, vendor_id=_parse_id(vendor_id), product_id=_parse_id(product_id)),
            profile_id=profile,
        )
        mappings = [] if reset else service.resolve_mappings(maps, swaps, profile_id=profile)
        _echo_load_warnings(service)

        if dump:
            typer.echo(service.dump(mappings, filters, usb_name=usb_name))
            return

        if reset:
            result = service.reset(filters, usb_name=usb_name)
            typer.echo(f"Reset key mappings on {_describe_target(result)}")
            return

        result = service.apply(mappings, filters, usb_name=usb_name)
        typer.echo(f"Applied {len(result.mappings)} mapping(s) to {_describe_target(result)}")
        for mapping in result.mappings:
            typer.echo(f"  {mapping.describe()}")
    except KbRemapError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
