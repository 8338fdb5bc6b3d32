#!/usr/bin/env python3
"""
SHA-256 hashing of file content for loop prevention.

Every write the coordinator makes to the native or shared file is seen again
by the file watcher. Without tracking, that notification would trigger a sync
in the opposite direction, which writes the first file again, and so on.

This module provides:
- compute_hash(): SHA-256 hex digest of file content
- HashState: per-path record of the last content this process wrote

Critical ordering: record_written() must be called BEFORE writing the file so
that a watcher firing during or right after the write sees it as an echo.
"""
import hashlib
from keymapsync.hash_state import HashState

__all__ = ["compute_hash", "HashState"]


def compute_hash(content: str) -> str:
    """
    Compute SHA-256 hash of file content.

    Args:
        content: Text content of a keybinding or keymap file.

    Returns:
        Hexadecimal string representation of the SHA-256 digest of the
        UTF-8 encoded content.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
