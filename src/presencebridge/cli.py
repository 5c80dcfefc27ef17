from __future__ import annotations

import asyncio
import json
import signal
import sys
from importlib.resources import files

import click
from pydantic import ValidationError

from presencebridge.catalog import load_catalog
from presencebridge.core.bridge import BridgeLoop
from presencebridge.distro import current_distro_label
from presencebridge.exceptions import CatalogError
from presencebridge.logging import configure_logging
from presencebridge.paths import default_config_file
from presencebridge.scanner import ProcessScanner
from presencebridge.settings import Settings
from presencebridge.transport.locator import SocketLocator


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """presencebridge command line interface."""
    try:
        settings = Settings()
    except (json.JSONDecodeError, ValidationError) as e:
        raise click.ClickException(f"Invalid configuration ({default_config_file()}): {e}") from e
    configure_logging(settings, level=log_level)
    ctx.obj = settings


@cli.command("run")
@click.option("--interval", type=float, default=None, help="Scan interval in seconds.")
@click.pass_obj
def run(settings: Settings, interval: float | None) -> None:
    """Watch for Steam games and relay them to Discord until stopped."""
    if interval is not None:
        if interval <= 0:
            raise click.BadParameter("must be positive", param_hint="--interval")
        settings = settings.model_copy(update={"scan_interval": interval})

    async def _run() -> None:
        try:
            catalog = await load_catalog(settings)
        except CatalogError as e:
            raise click.ClickException(f"Cannot load game catalog: {e}") from e

        bridge = BridgeLoop.from_settings(settings, catalog, current_distro_label())

        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop.set)
        try:
            await bridge.run(stop)
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)

    asyncio.run(_run())


@cli.command("scan")
@click.pass_obj
def scan(settings: Settings) -> None:
    """Scan the process table once and print the detected game."""
    result = ProcessScanner(ignored=settings.ignored_set()).scan()
    if result.failed:
        raise click.ClickException("Process table could not be read")
    if result.game is None:
        click.echo("No game running")
    else:
        click.echo(f"{result.game.name} (pid {result.game.pid})")
    if result.partial:
        click.echo(f"[{result.skipped} process entries unreadable]", err=True)


@cli.command("locate")
@click.pass_obj
def locate(settings: Settings) -> None:
    """Print the Discord IPC socket path."""
    path = SocketLocator(override=settings.socket_path).locate()
    if path is None:
        raise click.ClickException("Discord IPC socket not found")
    click.echo(str(path))


@cli.command("unit")
def unit() -> None:
    """Print the systemd user unit."""
    click.echo(files("presencebridge.data").joinpath("presencebridge.service").read_text(), nl=False)


@cli.group("catalog")
def catalog_group() -> None:
    """Game catalog commands."""


@catalog_group.command("refresh")
@click.pass_obj
def catalog_refresh(settings: Settings) -> None:
    """Download the catalog and rewrite the cache."""
    try:
        catalog = asyncio.run(load_catalog(settings, force_refresh=True))
    except CatalogError as e:
        raise click.ClickException(f"Cannot load game catalog: {e}") from e
    click.echo(f"{len(catalog)} games indexed")


@catalog_group.command("resolve")
@click.argument("name")
@click.pass_obj
def catalog_resolve(settings: Settings, name: str) -> None:
    """Print the application id NAME resolves to."""
    try:
        catalog = asyncio.run(load_catalog(settings))
    except CatalogError as e:
        raise click.ClickException(f"Cannot load game catalog: {e}") from e
    resolution = catalog.resolution(name)
    click.echo(resolution.client_id)
    if not resolution.known:
        click.echo(f"{name!r} is not in the catalog", err=True)
        sys.exit(1)


def main() -> None:
    cli.main()


if __name__ == "__main__":
    main()
