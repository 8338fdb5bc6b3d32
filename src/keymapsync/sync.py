#!/usr/bin/env python3
"""Bidirectional keymap synchronization coordination.

This module re-exports synchronization components from submodules for
convenient imports. The actual implementations are in:
- sync_state: SyncState dataclass
- sync_coordinator: SyncCoordinator
- summary: format_change_summary
- sync_loop: run_sync_loop
"""

from keymapsync.summary import format_change_summary
from keymapsync.sync_coordinator import SyncCoordinator
from keymapsync.sync_loop import run_sync_loop
from keymapsync.sync_state import SyncState

__all__ = [
    "SyncCoordinator",
    "SyncState",
    "format_change_summary",
    "run_sync_loop",
]
