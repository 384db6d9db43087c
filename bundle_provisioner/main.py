"""Command line entry point: ``provision``."""

from __future__ import annotations

import json
import logging

import click
from rich.markup import escape
from rich.table import Table

from .commands.config import config as config_group
from .console import console
from .console import error_console
from .errors import ProvisionError
from .logging_setup import init_json_logging
from .models import InstallableBundles
from .paths import create_provision_service

logger = logging.getLogger(__name__)


def _format_flag(value: bool | None) -> str:
    if value is None:
        return "[dim]-[/dim]"
    return "[green]yes[/green]" if value else "[red]no[/red]"


def _render_table(spec: str, bundles: InstallableBundles) -> Table:
    table = Table(title=f"Bundles for {escape(spec)}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Location", style="green")
    table.add_column("Start level", justify="right")
    table.add_column("Start")
    table.add_column("Update")
    for index, bundle in enumerate(bundles, start=1):
        reference = bundle.reference
        table.add_row(
            str(index),
            escape(reference.location),
            "-" if reference.start_level is None else str(reference.start_level),
            _format_flag(reference.start),
            _format_flag(reference.update),
        )
    return table


@click.group()
@click.version_option(package_name="bundle-provisioner")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for the log file",
)
def cli(log_file: str | None, log_level: str | None):
    """Resolve provisioning specifications into ordered bundle lists."""
    if log_file or log_level:
        init_json_logging(log_file, log_level)


@cli.command()
@click.argument("spec")
@click.option("--json", "as_json", is_flag=True, help="Print the bundles as JSON")
@click.option("--no-plugins", is_flag=True, help="Only use the built-in scanners")
def scan(spec: str, as_json: bool, no_plugins: bool):
    """Scan SPEC (scheme:path) and list the bundles it provisions."""
    try:
        service = create_provision_service(load_plugins=not no_plugins)
        bundles = service.scan(spec)
    except ProvisionError as e:
        logger.error(f"Provisioning [{spec}] failed: {e}")
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    if as_json:
        click.echo(json.dumps([bundle.reference.model_dump() for bundle in bundles], indent=2))
        return

    if not len(bundles):
        console.print("[yellow]No bundles to install[/yellow]")
        return
    console.print(_render_table(spec, bundles))


@cli.command()
@click.option("--no-plugins", is_flag=True, help="Only list the built-in scanners")
def schemes(no_plugins: bool):
    """List the registered provisioning schemes."""
    try:
        service = create_provision_service(load_plugins=not no_plugins)
    except ProvisionError as e:
        logger.error(f"Could not build the provision service: {e}")
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    for scheme in service.schemes():
        console.print(f"  [cyan]{scheme}[/cyan]  {escape(repr(service.get_scanner(scheme)))}")


cli.add_command(config_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
