"""Scanner default commands.

Defaults live in YAML settings under each scanner's PID:

    provision config set obr startLevel 5 --scope project
    provision config set all start false
    provision config show
"""

from __future__ import annotations

from typing import cast

import click
from rich.table import Table

from ..console import console
from ..errors import ConfigurationError
from ..scanners import BundleScanner
from ..scanners import CompositeScanner
from ..scanners import DirectoryScanner
from ..scanners import FileScanner
from ..scanners import ObrScanner
from ..scanners import ScannerConfiguration
from ..scanners.configuration import PROPERTY_START
from ..scanners.configuration import PROPERTY_START_LEVEL
from ..scanners.configuration import PROPERTY_UPDATE
from ..settings import ProvisionSettings
from ..settings import Scope

# Short scanner names -> configuration PID; "all" writes the shared option
SCANNER_PIDS: dict[str, str | None] = {
    "file": FileScanner.PID,
    "dir": DirectoryScanner.PID,
    "bundle": BundleScanner.PID,
    "composite": CompositeScanner.PID,
    "obr": ObrScanner.PID,
    "all": None,
}

KEYS = [PROPERTY_START_LEVEL, PROPERTY_START, PROPERTY_UPDATE]

_scanner_option = click.argument("scanner", type=click.Choice(list(SCANNER_PIDS)))
_key_option = click.argument("key", type=click.Choice(KEYS))
_scope_option = click.option(
    "--scope",
    type=click.Choice(["local", "project", "global"]),
    default="global",
    show_default=True,
    help="Settings scope to write",
)


def _settings_key(scanner: str, key: str) -> str:
    pid = SCANNER_PIDS[scanner]
    return f"{pid}.{key}" if pid else key


def _parse_value(key: str, value: str) -> int | bool:
    if key == PROPERTY_START_LEVEL:
        if not value.isdigit() or int(value) < 1:
            raise click.BadParameter(f"start level must be a positive integer, got {value!r}")
        return int(value)
    normalized = value.strip().lower()
    if normalized in ("true", "yes", "on", "1"):
        return True
    if normalized in ("false", "no", "off", "0"):
        return False
    raise click.BadParameter(f"{key} must be true or false, got {value!r}")


@click.group()
def config():
    """Manage scanner install defaults."""


@config.command("show")
def show():
    """Show the effective defaults of every scanner."""
    settings = ProvisionSettings()
    try:
        resolver = settings.as_property_resolver()
        table = Table(title="Scanner defaults", show_header=True, header_style="bold cyan")
        table.add_column("Scanner", style="green")
        table.add_column("PID", style="dim")
        table.add_column("Start level", justify="right")
        table.add_column("Start")
        table.add_column("Update")
        for name, pid in SCANNER_PIDS.items():
            if pid is None:
                continue
            configuration = ScannerConfiguration(resolver, pid)
            start_level = configuration.start_level()
            start = configuration.should_start()
            update = configuration.should_update()
            table.add_row(
                name,
                pid,
                "-" if start_level is None else str(start_level),
                "-" if start is None else str(start).lower(),
                "-" if update is None else str(update).lower(),
            )
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    console.print(table)


@config.command("set")
@_scanner_option
@_key_option
@click.argument("value")
@_scope_option
def set_value(scanner: str, key: str, value: str, scope: str):
    """Set a default for SCANNER."""
    parsed = _parse_value(key, value)
    settings_key = _settings_key(scanner, key)
    ProvisionSettings().set_value(settings_key, parsed, scope=cast(Scope, scope))
    console.print(f"[green]✓ Set {settings_key} = {parsed} ({scope})[/green]")


@config.command("unset")
@_scanner_option
@_key_option
@_scope_option
def unset_value(scanner: str, key: str, scope: str):
    """Remove a default for SCANNER."""
    settings_key = _settings_key(scanner, key)
    if ProvisionSettings().remove_value(settings_key, scope=cast(Scope, scope)):
        console.print(f"[green]✓ Removed {settings_key} ({scope})[/green]")
    else:
        console.print(f"[yellow]{settings_key} is not set at {scope} scope[/yellow]")
