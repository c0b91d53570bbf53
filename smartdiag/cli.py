"""CLI entrypoints for smartdiag."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from smartdiag import __version__
from smartdiag.config import Config, load_config
from smartdiag.engine import SmartInformation
from smartdiag.executor import SmartDiagError
from smartdiag.models import Device, DeviceReport, Verdict

VERDICT_COLORS = {
    Verdict.GOOD: "green",
    Verdict.BAD_STATUS: "yellow",
    Verdict.BAD_ATTRIBUTE_IN_THE_PAST: "yellow",
    Verdict.BAD_ATTRIBUTE_NOW: "red",
    Verdict.BAD_SECTOR: "red",
    Verdict.BAD_SECTOR_MANY: "red",
}

config_option = click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
type_option = click.option(
    "-d", "--type", "dev_type",
    default=None,
    help="Device type passed to smartctl -d (e.g. sat, nvme, megaraid,0)",
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_engine(cfg: Config, path: str, dev_type: str | None = None) -> SmartInformation:
    """Create the engine for a device, preferring its configured settings."""
    device = None
    for dev_cfg in cfg.devices:
        if dev_cfg.path == path:
            device = dev_cfg.to_device()
            break
    if device is None:
        device = Device.from_path(path)
    if dev_type:
        device.type_hint = dev_type
    return SmartInformation(device, cfg.smartctl)


def _fail(message: str) -> None:
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="smartdiag")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """smartdiag - SMART disk health assessment."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@config_option
@click.option("--json", "as_json", is_flag=True, help="Print reports as JSON")
@click.argument("devices", nargs=-1)
def status(config: Path | None, as_json: bool, devices: tuple[str, ...]) -> None:
    """Show the health status of DEVICES (default: configured devices)."""
    cfg = load_config(config)
    logger = logging.getLogger("smartdiag.status")

    paths = list(devices) or [d.path for d in cfg.devices]
    if not paths:
        click.secho("No devices given or configured", fg="yellow")
        return

    reports: list[DeviceReport] = []
    errors: dict[str, str] = {}

    for path in paths:
        try:
            reports.append(get_engine(cfg, path).get_report())
        except SmartDiagError as e:
            logger.debug(f"Failed to read {path}", exc_info=True)
            errors[path] = str(e)

    if as_json:
        data = [r.to_dict() for r in reports]
        data.extend({"device": path, "error": error} for path, error in errors.items())
        click.echo(json.dumps(data, indent=2))
    else:
        for report in reports:
            click.secho(f"[{report.status}] ", fg=VERDICT_COLORS[report.status], nl=False)
            temperature = "n/a" if report.temperature is None else f"{report.temperature}C"
            click.echo(
                f"{report.device}: {report.model or 'unknown model'} "
                f"(serial {report.serial or 'n/a'}), temperature {temperature}, "
                f"power-on hours {report.power_on_hours}, mode {report.power_mode}"
            )
        for path, error in errors.items():
            click.secho("[UNKNOWN] ", fg="white", nl=False)
            click.secho(f"{path}: {error}", fg="red")

    # Exit with appropriate code
    if any(r.status.is_problem() for r in reports):
        sys.exit(2)
    elif errors:
        sys.exit(1)


@main.command()
@config_option
@type_option
@click.argument("device")
def attributes(config: Path | None, dev_type: str | None, device: str) -> None:
    """Show the assessed SMART attribute table of DEVICE."""
    engine = get_engine(load_config(config), device, dev_type)
    try:
        attrs = engine.get_attributes()
    except SmartDiagError as e:
        _fail(str(e))
        return

    if not attrs:
        click.secho(f"{device}: no attribute table (SAS/SCSI or NVMe device?)", fg="yellow")
        return

    click.echo(f"{'ID':>3} {'NAME':<24} {'FLAGS':<7} {'VALUE':>5} {'WORST':>5} {'THRESH':>6}  RAW")
    for attr in attrs:
        click.echo(
            f"{attr.id:>3} {attr.name:<24} {attr.flags:<7} {attr.value:>5} "
            f"{attr.worst:>5} {attr.threshold:>6}  {attr.raw_value:<20} ",
            nl=False,
        )
        click.secho(str(attr.verdict), fg=VERDICT_COLORS[attr.verdict])


@main.command()
@config_option
@type_option
@click.argument("device")
def info(config: Path | None, dev_type: str | None, device: str) -> None:
    """Show the information section of DEVICE."""
    engine = get_engine(load_config(config), device, dev_type)
    try:
        information = engine.get_information()
    except SmartDiagError as e:
        _fail(str(e))
        return

    for key, value in information.items():
        click.echo(f"{key}: {value}")


@main.command()
@config_option
@type_option
@click.argument("device")
def selftests(config: Path | None, dev_type: str | None, device: str) -> None:
    """Show the self-test log of DEVICE."""
    engine = get_engine(load_config(config), device, dev_type)
    try:
        entries = engine.get_selftest_logs()
    except SmartDiagError as e:
        _fail(str(e))
        return

    if not entries:
        click.secho(f"{device}: no self-tests logged", fg="yellow")
        return

    for entry in entries:
        color = "green" if entry.status.startswith("Completed without error") else "red"
        click.echo(f"#{entry.num:<3} {entry.description:<17} ", nl=False)
        click.secho(f"{entry.status:<32}", fg=color, nl=False)
        click.echo(
            f" {entry.remaining:>3}% {entry.lifetime:>8}h  {entry.lba_of_first_error}"
        )


@main.command()
@config_option
@type_option
@click.argument("device")
def extended(config: Path | None, dev_type: str | None, device: str) -> None:
    """Print the complete 'smartctl -x' output of DEVICE."""
    engine = get_engine(load_config(config), device, dev_type)
    try:
        click.echo(engine.get_extended_information())
    except SmartDiagError as e:
        _fail(str(e))


@main.command("power-mode")
@config_option
@type_option
@click.argument("device")
def power_mode(config: Path | None, dev_type: str | None, device: str) -> None:
    """Show the power mode of DEVICE without spinning it up."""
    engine = get_engine(load_config(config), device, dev_type)
    mode = engine.get_power_mode()
    click.secho(f"{device}: {mode}", fg="red" if mode == "ERROR" else None)


if __name__ == "__main__":
    main()
