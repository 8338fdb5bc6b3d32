#!/usr/bin/env python3
"""Bidirectional sync between the native keybinding file and the shared keymap.

This module provides the SyncCoordinator with two entry points, one per
direction, plus a bootstrap helper:
- on_native_file_changed: native editor file -> shared keymap file
- on_shared_file_changed: shared keymap file -> native editor file
- initialize_if_needed: seed the shared file from the native one

Loop prevention uses two independent guards. The syncing flag suppresses
notifications that arrive while our own write is in flight; the hash table
suppresses notifications for content we wrote ourselves that arrive later.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from keymapsync.hashing import compute_hash
from keymapsync.summary import format_change_summary
from keymapsync.sync_state import SyncState

if TYPE_CHECKING:
    from keymapsync.interfaces import FileSystem, KeymapClient, StatusReporter
    from keymapsync.models import Keymap

logger = logging.getLogger(__name__)

# How long status messages stay visible, in milliseconds.
STATUS_HIDE_AFTER_MS: int = 5000


class SyncCoordinator:
    """Decide, sequence and write each sync between the two files.

    Entry points never raise. Failures are logged and, for unexpected
    errors, reported through the status reporter.

    Args:
        native_path: Path to the native editor keybinding file.
        shared_path: Path to the shared keymap file.
        client: Translation service client.
        file_system: File access used for every read and write.
        status: Reporter for user-visible messages.
        editor_label: Editor name used in status messages.
    """

    def __init__(
        self,
        native_path: str,
        shared_path: str,
        client: KeymapClient,
        file_system: FileSystem,
        status: StatusReporter,
        editor_label: str = "VS Code",
    ) -> None:
        self.state = SyncState(native_path=native_path, shared_path=shared_path)
        self.client = client
        self.file_system = file_system
        self.status = status
        self.editor_label = editor_label

    @property
    def native_path(self) -> str:
        return self.state.native_path

    @property
    def shared_path(self) -> str:
        return self.state.shared_path

    async def on_native_file_changed(self) -> None:
        """Propagate the native file's current content into the shared file."""
        if self.state.syncing:
            return

        content = self._read_changed(self.native_path)
        if content is None:
            return

        content_hash = compute_hash(content)
        if self.state.hash_state.is_echo(self.native_path, content_hash):
            return

        try:
            baseline = await self._load_shared_keymap()

            analyze_response = await self.client.analyze_editor_config(content, baseline)
            if analyze_response.keymap is None:
                logger.warning("AnalyzeEditorConfig returned no keymap")
                return

            changes = analyze_response.changes
            if changes is not None and changes.is_empty():
                # Formatting-only edit; skip re-analysis of identical content
                self.state.hash_state.record_written(self.native_path, content_hash)
                logger.info("No changes detected from %s keybindings", self.editor_label)
                return

            generate_response = await self.client.generate_keymap(analyze_response.keymap)
            self._write_guarded(self.shared_path, generate_response.content)
            # The shared file now reflects this content
            self.state.hash_state.record_written(self.native_path, content_hash)

            summary = format_change_summary(changes)
            self.status.show_status_message(
                f"OneKeymap: Synced from {self.editor_label} ({summary})",
                STATUS_HIDE_AFTER_MS,
            )
            logger.info("Synced %s -> %s (%s)", self.native_path, self.shared_path, summary)
        except Exception:
            logger.exception("Failed to sync %s -> %s", self.native_path, self.shared_path)
            self.status.show_status_message(
                f"OneKeymap: Sync failed ({self.editor_label} → onekeymap)",
                STATUS_HIDE_AFTER_MS,
            )

    async def on_shared_file_changed(self) -> None:
        """Propagate the shared file's current content into the native file."""
        if self.state.syncing:
            return

        content = self._read_changed(self.shared_path)
        if content is None:
            return

        content_hash = compute_hash(content)
        if self.state.hash_state.is_echo(self.shared_path, content_hash):
            return

        try:
            parse_response = await self.client.parse_keymap(content)
            if parse_response.keymap is None:
                logger.warning("ParseKeymap returned no keymap")
                return

            try:
                current_native = self.file_system.read_file(self.native_path)
            except OSError:
                # The native file may not exist yet
                current_native = ""

            generate_response = await self.client.generate_editor_config(
                parse_response.keymap, current_native
            )
            new_native = generate_response.content
            if new_native == current_native:
                logger.info("No changes to write to %s", self.native_path)
                return

            self._write_guarded(self.native_path, new_native)

            self.status.show_status_message(
                "OneKeymap: Synced from onekeymap.json", STATUS_HIDE_AFTER_MS
            )
            logger.info("Synced %s -> %s", self.shared_path, self.native_path)
        except Exception:
            logger.exception("Failed to sync %s -> %s", self.shared_path, self.native_path)
            self.status.show_status_message(
                f"OneKeymap: Sync failed (onekeymap → {self.editor_label})",
                STATUS_HIDE_AFTER_MS,
            )

    async def initialize_if_needed(self) -> None:
        """Create the shared file from the native file if only the latter exists."""
        shared_exists = self.file_system.exists(self.shared_path)
        native_exists = self.file_system.exists(self.native_path)

        if not shared_exists and native_exists:
            logger.info(
                "%s not found, creating from current %s keybindings",
                self.shared_path,
                self.editor_label,
            )
            await self.on_native_file_changed()

    def _read_changed(self, path: str) -> str | None:
        """Read a file that was reported as changed, or None if unreadable."""
        try:
            return self.file_system.read_file(path)
        except OSError as e:
            logger.error("Failed to read %s: %s", path, e)
            return None

    async def _load_shared_keymap(self) -> Keymap | None:
        """Parse the shared file as a diff baseline; None if unavailable."""
        try:
            content = self.file_system.read_file(self.shared_path)
            response = await self.client.parse_keymap(content)
        except Exception as e:
            logger.debug("No baseline from %s: %s", self.shared_path, e)
            return None
        return response.keymap

    def _write_guarded(self, path: str, content: str) -> None:
        """Write content to path with both loop-prevention guards in place.

        The hash is recorded BEFORE writing so a change notification racing
        the write is already recognized as an echo. The syncing flag is
        cleared on every exit path.
        """
        self.state.syncing = True
        try:
            self.file_system.ensure_parent_dir(path)
            self.state.hash_state.record_written(path, compute_hash(content))
            self.file_system.write_file(path, content)
        finally:
            self.state.syncing = False
