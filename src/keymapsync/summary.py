"""Human-readable summary of a keymap change set."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from keymapsync.models import KeymapChanges


def format_change_summary(changes: KeymapChanges | None) -> str:
    """Describe a change set as e.g. "1 added, 2 removed, 3 updated".

    Clauses with a zero count are left out. An empty change set reads
    "no changes" and a missing one yields an empty string.

    Args:
        changes: The change set returned by the analyze call, or None.

    Returns:
        The summary text.
    """
    if changes is None:
        return ""
    parts: list[str] = []
    if changes.add:
        parts.append(f"{len(changes.add)} added")
    if changes.remove:
        parts.append(f"{len(changes.remove)} removed")
    if changes.update:
        parts.append(f"{len(changes.update)} updated")
    return ", ".join(parts) if parts else "no changes"
