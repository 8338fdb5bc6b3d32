#!/usr/bin/env python3
"""Run modes for keymapsync.

This module wires the translation client, local file access, status
reporter, watchers and sync loop together for each CLI mode:
- run_watch: initialize, then sync on every settled change until signalled
- run_once: initialize, then one native -> shared sync
- run_check: probe the translation service and report
"""

from __future__ import annotations

import asyncio
import logging
import signal
from dataclasses import dataclass

from keymapsync.client import TranslationClient, create_ssl_context
from keymapsync.client_constants import DEFAULT_EDITOR_TYPE
from keymapsync.file_access import LocalFileSystem
from keymapsync.status import EchoStatusReporter
from keymapsync.sync import SyncCoordinator, run_sync_loop
from keymapsync.watcher import DEBOUNCE_SECONDS, FileWatcher

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """Raised when a run mode cannot start; the message is shown to the user."""

    pass


@dataclass
class SyncSettings:
    """Resolved command-line configuration.

    Attributes:
        server: Translation service address, "host:port" or "unix:PATH".
        keybindings_path: Native editor keybinding file.
        shared_path: Shared keymap file.
        root_cert: PEM CA certificate bytes to trust, or None.
        plaintext: Connect without TLS.
        editor_type: Editor identifier sent to the service.
        debounce: Seconds a file must be quiet before syncing.
    """

    server: str
    keybindings_path: str
    shared_path: str
    root_cert: bytes | None = None
    plaintext: bool = False
    editor_type: str = DEFAULT_EDITOR_TYPE
    debounce: float = DEBOUNCE_SECONDS


def build_client(settings: SyncSettings) -> TranslationClient:
    """Create the translation client described by settings."""
    ssl_context = None if settings.plaintext else create_ssl_context(settings.root_cert)
    return TranslationClient(settings.server, ssl_context, editor_type=settings.editor_type)


def build_coordinator(settings: SyncSettings, client: TranslationClient) -> SyncCoordinator:
    """Create a coordinator over the local filesystem."""
    return SyncCoordinator(
        settings.keybindings_path,
        settings.shared_path,
        client,
        LocalFileSystem(),
        EchoStatusReporter(),
    )


async def _connect(settings: SyncSettings) -> TranslationClient:
    client = build_client(settings)
    if not await client.check_connection():
        raise StartupError(f"Failed to connect to server at {settings.server}")
    return client


async def run_check(settings: SyncSettings) -> None:
    """Probe the translation service.

    Raises:
        StartupError: If the service does not answer.
    """
    await _connect(settings)
    logger.info("Translation service at %s is reachable", settings.server)


async def run_once(settings: SyncSettings) -> None:
    """Initialize if needed, then push the native file to the shared file.

    Raises:
        StartupError: If the service does not answer.
    """
    client = await _connect(settings)
    coordinator = build_coordinator(settings, client)
    await coordinator.initialize_if_needed()
    await coordinator.on_native_file_changed()
    coordinator.status.show_status_message("OneKeymap: Manual sync triggered")


async def run_watch(settings: SyncSettings) -> None:
    """Initialize, then keep both files in sync until SIGINT/SIGTERM.

    Raises:
        StartupError: If the service does not answer or the native
            keybinding file does not exist.
    """
    client = await _connect(settings)
    file_system = LocalFileSystem()
    if not file_system.exists(settings.keybindings_path):
        raise StartupError(f"keybindings.json not found at {settings.keybindings_path}")

    coordinator = build_coordinator(settings, client)
    logger.info("Native keybindings: %s", settings.keybindings_path)
    logger.info("Shared keymap: %s", settings.shared_path)
    await coordinator.initialize_if_needed()

    # Register signal handlers for clean shutdown
    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_requested.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_requested.set)

    native_watcher = FileWatcher(settings.keybindings_path, debounce=settings.debounce)
    shared_watcher = FileWatcher(settings.shared_path, debounce=settings.debounce)
    try:
        async with native_watcher, shared_watcher:
            await run_sync_loop(
                coordinator,
                native_watcher.changed,
                shared_watcher.changed,
                shutdown_requested,
            )
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        loop.remove_signal_handler(signal.SIGTERM)
