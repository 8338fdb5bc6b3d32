#!/usr/bin/env python3
"""Main synchronization event loop.

This module provides run_sync_loop, the single worker that turns settled
file change events into coordinator transactions. Transactions run one at
a time to completion, so the coordinator's guards and hash table are never
touched by two transactions at once.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from keymapsync.sync_coordinator import SyncCoordinator

logger = logging.getLogger(__name__)


async def run_sync_loop(
    coordinator: SyncCoordinator,
    native_changed: asyncio.Event,
    shared_changed: asyncio.Event,
    shutdown_requested: asyncio.Event,
) -> None:
    """Dispatch change events to the coordinator until shutdown.

    Waits for either file's change event or the shutdown event. A fired
    change event is cleared before its transaction runs, so a change that
    settles during the transaction triggers another pass.

    Args:
        coordinator: The sync coordinator owning both directions.
        native_changed: Set when the native keybinding file changed.
        shared_changed: Set when the shared keymap file changed.
        shutdown_requested: Set to stop the loop.
    """
    while not shutdown_requested.is_set():
        waiters = {
            asyncio.create_task(native_changed.wait()),
            asyncio.create_task(shared_changed.wait()),
            asyncio.create_task(shutdown_requested.wait()),
        }
        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            # Event.wait tasks are stateless, safe to cancel
            for task in waiters:
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task

        if shutdown_requested.is_set():
            break

        if native_changed.is_set():
            native_changed.clear()
            logger.debug("Native keybindings changed")
            await coordinator.on_native_file_changed()

        if shared_changed.is_set():
            shared_changed.clear()
            logger.debug("Shared keymap changed")
            await coordinator.on_shared_file_changed()

    logger.debug("Sync loop stopped")
