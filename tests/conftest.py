#!/usr/bin/env python3
"""Pytest fixtures for keymapsync tests.

Provides in-memory collaborators for the sync coordinator: a fake file
system, a recording status reporter and a scripted translation client.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from keymapsync.hashing import HashState
from keymapsync.models import (
    AnalyzeEditorConfigResponse,
    GenerateEditorConfigResponse,
    GenerateKeymapResponse,
    Keymap,
    KeymapChanges,
    KeymapUpdate,
    ParseKeymapResponse,
)
from keymapsync.sync_coordinator import SyncCoordinator

NATIVE_PATH = "/mock/keybindings.json"
SHARED_PATH = "/mock/onekeymap.json"


def make_keymap(name: str = "test") -> Keymap:
    """Create a minimal opaque keymap."""
    return Keymap({"name": name, "actions": []})


def make_changes(add: int = 0, remove: int = 0, update: int = 0) -> KeymapChanges:
    """Create a change set with the given number of entries per kind."""
    return KeymapChanges(
        add=[{"name": "a"} for _ in range(add)],
        remove=[{"name": "r"} for _ in range(remove)],
        update=[KeymapUpdate() for _ in range(update)],
    )


class FakeFileSystem:
    """In-memory FileSystem recording every write."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.written: list[tuple[str, str]] = []
        self.dirs: list[str] = []
        self.fail_writes = False

    def read_file(self, path: str) -> str:
        if path not in self.files:
            raise FileNotFoundError(f"ENOENT: {path}")
        return self.files[path]

    def write_file(self, path: str, content: str) -> None:
        if self.fail_writes:
            raise OSError(f"EACCES: {path}")
        self.files[path] = content
        self.written.append((path, content))

    def exists(self, path: str) -> bool:
        return path in self.files

    def ensure_parent_dir(self, path: str) -> None:
        self.dirs.append(path)


class FakeStatusReporter:
    """StatusReporter collecting messages."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def show_status_message(self, message: str, hide_after_ms: int = 5000) -> None:
        self.messages.append(message)


@dataclass
class FakeKeymapClient:
    """Scripted KeymapClient recording every call."""

    analyze_result: AnalyzeEditorConfigResponse = field(
        default_factory=lambda: AnalyzeEditorConfigResponse(make_keymap(), make_changes(add=1))
    )
    generate_keymap_result: GenerateKeymapResponse = field(
        default_factory=lambda: GenerateKeymapResponse('{"keymaps":[]}')
    )
    parse_keymap_result: ParseKeymapResponse = field(
        default_factory=lambda: ParseKeymapResponse(make_keymap())
    )
    generate_editor_config_result: GenerateEditorConfigResponse = field(
        default_factory=lambda: GenerateEditorConfigResponse("[]")
    )
    error: Exception | None = None

    analyze_calls: list[tuple[str, Keymap | None]] = field(default_factory=list)
    generate_keymap_calls: list[Keymap] = field(default_factory=list)
    parse_keymap_calls: list[str] = field(default_factory=list)
    generate_editor_config_calls: list[tuple[Keymap, str]] = field(default_factory=list)

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error

    async def analyze_editor_config(self, content, original_config=None):
        self.analyze_calls.append((content, original_config))
        self._maybe_fail()
        return self.analyze_result

    async def generate_editor_config(self, keymap, original_content):
        self.generate_editor_config_calls.append((keymap, original_content))
        self._maybe_fail()
        return self.generate_editor_config_result

    async def parse_keymap(self, content):
        self.parse_keymap_calls.append(content)
        self._maybe_fail()
        return self.parse_keymap_result

    async def generate_keymap(self, keymap):
        self.generate_keymap_calls.append(keymap)
        self._maybe_fail()
        return self.generate_keymap_result

    @property
    def call_count(self) -> int:
        return (
            len(self.analyze_calls)
            + len(self.generate_keymap_calls)
            + len(self.parse_keymap_calls)
            + len(self.generate_editor_config_calls)
        )


@pytest.fixture
def hash_state() -> HashState:
    """Create a fresh HashState instance for testing."""
    return HashState()


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def fake_status() -> FakeStatusReporter:
    return FakeStatusReporter()


@pytest.fixture
def fake_client() -> FakeKeymapClient:
    return FakeKeymapClient()


@pytest.fixture
def coordinator(
    fake_fs: FakeFileSystem, fake_status: FakeStatusReporter, fake_client: FakeKeymapClient
) -> SyncCoordinator:
    """Create a coordinator wired to the fake collaborators."""
    return SyncCoordinator(NATIVE_PATH, SHARED_PATH, fake_client, fake_fs, fake_status)
