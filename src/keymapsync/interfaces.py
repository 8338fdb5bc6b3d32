#!/usr/bin/env python3
"""Collaborator interfaces used by the sync coordinator.

The coordinator only talks to the outside world through these protocols,
which keeps it testable with in-memory fakes:
- FileSystem: read/write the native and shared files
- StatusReporter: surface a short message to the user
- KeymapClient: the four translation service operations
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keymapsync.models import (
        AnalyzeEditorConfigResponse,
        GenerateEditorConfigResponse,
        GenerateKeymapResponse,
        Keymap,
        ParseKeymapResponse,
    )


class FileSystem(Protocol):
    """Synchronous file access."""

    def read_file(self, path: str) -> str:
        """Return the text at path. Raises OSError if missing or unreadable."""
        ...

    def write_file(self, path: str, content: str) -> None:
        """Replace the text at path. Raises OSError on failure."""
        ...

    def exists(self, path: str) -> bool:
        ...

    def ensure_parent_dir(self, path: str) -> None:
        """Create the directory that will contain path, if needed."""
        ...


class StatusReporter(Protocol):
    """Fire-and-forget user notification."""

    def show_status_message(self, message: str, hide_after_ms: int = 5000) -> None:
        ...


class KeymapClient(Protocol):
    """Translation service operations. Every call may raise."""

    async def analyze_editor_config(
        self, content: str, original_config: Keymap | None = None
    ) -> AnalyzeEditorConfigResponse:
        ...

    async def generate_editor_config(
        self, keymap: Keymap, original_content: str
    ) -> GenerateEditorConfigResponse:
        ...

    async def parse_keymap(self, content: str) -> ParseKeymapResponse:
        ...

    async def generate_keymap(self, keymap: Keymap) -> GenerateKeymapResponse:
        ...
