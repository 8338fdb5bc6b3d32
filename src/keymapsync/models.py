#!/usr/bin/env python3
"""Data exchanged with the translation service.

Every response field the service may leave out is optional here. Consumers
must check for None before using a keymap or a change set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class Keymap:
    """Opaque unified keymap as produced by the translation service.

    The sync coordinator never looks inside; the client only passes the
    underlying mapping back to the service unchanged.

    Attributes:
        data: The JSON object the service returned for this keymap.
    """

    data: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict suitable for JSON encoding."""
        return dict(self.data)


@dataclass(frozen=True)
class KeymapUpdate:
    """One updated entry, pairing the old and new form of an action."""

    origin: Mapping[str, Any] | None = None
    updated: Mapping[str, Any] | None = None


@dataclass
class KeymapChanges:
    """Diff between a baseline keymap and a newly analyzed one.

    Attributes:
        add: Entries present only in the new keymap.
        remove: Entries present only in the baseline.
        update: Entries present in both with different bindings.
    """

    add: list[Mapping[str, Any]] = field(default_factory=list)
    remove: list[Mapping[str, Any]] = field(default_factory=list)
    update: list[KeymapUpdate] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True if no entry was added, removed or updated."""
        return not self.add and not self.remove and not self.update

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KeymapChanges:
        updates = [
            KeymapUpdate(origin=item.get("origin"), updated=item.get("updated"))
            for item in data.get("update") or []
        ]
        return cls(
            add=list(data.get("add") or []),
            remove=list(data.get("remove") or []),
            update=updates,
        )


def _optional_keymap(data: Mapping[str, Any]) -> Keymap | None:
    raw = data.get("keymap")
    if raw is None:
        return None
    return Keymap(raw)


@dataclass
class AnalyzeEditorConfigResponse:
    """Result of analyzing native editor content against a baseline."""

    keymap: Keymap | None = None
    changes: KeymapChanges | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalyzeEditorConfigResponse:
        raw_changes = data.get("changes")
        return cls(
            keymap=_optional_keymap(data),
            changes=KeymapChanges.from_dict(raw_changes) if raw_changes is not None else None,
        )


@dataclass
class GenerateKeymapResponse:
    """Shared keymap file content generated from a keymap."""

    content: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerateKeymapResponse:
        return cls(content=data.get("content") or "")


@dataclass
class ParseKeymapResponse:
    """Keymap parsed from shared keymap file content."""

    keymap: Keymap | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParseKeymapResponse:
        return cls(keymap=_optional_keymap(data))


@dataclass
class GenerateEditorConfigResponse:
    """Native editor content generated from a keymap.

    Attributes:
        content: Full native keybinding file content, including native
            entries that have no unified counterpart.
        diff: Optional textual diff against the original content.
    """

    content: str = ""
    diff: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GenerateEditorConfigResponse:
        return cls(content=data.get("content") or "", diff=data.get("diff") or "")
