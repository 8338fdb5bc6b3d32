"""CLI handling for keymapsync.

This module provides the command-line interface for keymapsync, handling
argument parsing via click, logging configuration, and dispatching to the
watch, once or check mode based on user-specified options.

Usage:
    keymapsync [--watch] --server ADDR [--keybindings PATH] [--shared PATH] [--verbose]
    keymapsync --once [...]
    keymapsync --check --server ADDR [--root-cert PATH | --plaintext]
"""

import ssl
import sys

import click

from keymapsync.client import create_ssl_context
from keymapsync.main_logging import configure_logging
from keymapsync.main_options import RunModeOption, selected_mode
from keymapsync.paths import DEFAULT_SHARED_CONFIG_PATH, default_keybindings_path, resolve_home


@click.command()
@click.pass_context
@click.option(
    "--watch",
    is_flag=True,
    cls=RunModeOption,
    help="Keep both files in sync until interrupted (default)",
)
@click.option(
    "--once",
    is_flag=True,
    cls=RunModeOption,
    help="Sync the keybinding file into the shared keymap once and exit",
)
@click.option(
    "--check",
    is_flag=True,
    cls=RunModeOption,
    help="Only test the connection to the translation service",
)
@click.option(
    "--server",
    required=True,
    envvar="KEYMAPSYNC_SERVER",
    help="Translation service address (host:port or unix:PATH)",
)
@click.option(
    "--root-cert",
    type=click.Path(dir_okay=False),
    envvar="KEYMAPSYNC_ROOT_CERT",
    help="PEM CA certificate to trust for the service",
)
@click.option(
    "--plaintext",
    is_flag=True,
    help="Connect without TLS",
)
@click.option(
    "--keybindings",
    type=click.Path(dir_okay=False),
    envvar="KEYMAPSYNC_KEYBINDINGS",
    help="Editor keybindings file [default: VS Code user keybindings.json]",
)
@click.option(
    "--shared",
    type=click.Path(dir_okay=False),
    default=DEFAULT_SHARED_CONFIG_PATH,
    show_default=True,
    envvar="KEYMAPSYNC_SHARED",
    help="Shared keymap file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
def main(
    ctx: click.Context,
    server: str,
    root_cert: str | None,
    plaintext: bool,
    keybindings: str | None,
    shared: str,
    verbose: bool,
) -> None:
    """Keep editor keybindings and a shared keymap file in sync."""
    configure_logging(verbose)

    from keymapsync.runner import SyncSettings

    settings = SyncSettings(
        server=server,
        keybindings_path=resolve_home(keybindings) if keybindings else default_keybindings_path(),
        shared_path=resolve_home(shared),
        root_cert=_load_root_cert(root_cert),
        plaintext=plaintext,
    )

    _run_mode(selected_mode(ctx), settings)


def _load_root_cert(path: str | None) -> bytes | None:
    """Read the CA certificate, falling back to the system store on failure.

    Args:
        path: Path to a PEM file, or None.
    """
    if not path:
        return None
    try:
        with open(resolve_home(path), "rb") as f:
            root_cert = f.read()
    except OSError as e:
        click.echo(f"Error: Failed to load root certificate from {path}: {e}", err=True)
        return None
    try:
        create_ssl_context(root_cert)
    except (ssl.SSLError, ValueError) as e:
        click.echo(f"Error: Invalid root certificate in {path}: {e}", err=True)
        return None
    return root_cert


def _run_mode(mode: str, settings) -> None:
    """Run the selected mode, exiting with code 1 on startup failure.

    Args:
        mode: One of "watch", "once" or "check".
        settings: The resolved SyncSettings.
    """
    import asyncio
    from keymapsync.runner import StartupError, run_check, run_once, run_watch

    runners = {"watch": run_watch, "once": run_once, "check": run_check}
    try:
        asyncio.run(runners[mode](settings))
    except (StartupError, ConnectionError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if mode == "check":
        click.echo(f"Connected to {settings.server}")
