#!/usr/bin/env python3
"""Local filesystem access for the sync coordinator."""

from __future__ import annotations

from pathlib import Path


class LocalFileSystem:
    """FileSystem implementation backed by the local disk, UTF-8 text only."""

    def read_file(self, path: str) -> str:
        """Read text at path.

        Raises:
            OSError: If the file is missing, unreadable or not valid UTF-8.
        """
        try:
            return Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise OSError(f"{path} is not valid UTF-8: {e}") from e

    def write_file(self, path: str, content: str) -> None:
        Path(path).write_text(content, encoding="utf-8")

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def ensure_parent_dir(self, path: str) -> None:
        """Create the parent directory of path, including missing ancestors."""
        Path(path).parent.mkdir(parents=True, exist_ok=True)
