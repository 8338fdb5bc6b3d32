#!/usr/bin/env python3
"""Keymap synchronization state.

This module provides the SyncState dataclass that groups the mutable state
shared by both sync directions of one coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from keymapsync.hashing import HashState


@dataclass
class SyncState:
    """State for bidirectional keymap synchronization.

    Both sync directions read and write this state, so it is one critical
    section per coordinator: transactions must not interleave.

    Attributes:
        native_path: Path to the native editor keybinding file.
        shared_path: Path to the shared cross-editor keymap file.
        hash_state: Hashes of content last written per path.
        syncing: True only while a write to either file is in flight.
    """

    native_path: str
    shared_path: str
    hash_state: HashState = field(default_factory=HashState)
    syncing: bool = False
