#!/usr/bin/env python3
"""
Last-written hash table for loop prevention.

The table maps a file path to the hash of the content this process most
recently wrote there. A later read of that path yielding the same hash is an
echo of our own write and must not start a sync.

Entries live for the lifetime of the process and are never persisted.
"""
from dataclasses import dataclass, field


@dataclass
class HashState:
    """
    Track the hash of the last content written to each path.

    Attributes:
        last_written: Mapping of file path to SHA-256 hex digest of the
            content most recently written (or marked as seen) at that path.
    """

    last_written: dict[str, str] = field(default_factory=dict)

    def is_echo(self, path: str, current_hash: str) -> bool:
        """
        Check whether content read from path is an echo of our own write.

        Args:
            path: File path the content was read from.
            current_hash: SHA-256 hex digest of the content just read.

        Returns:
            True if current_hash matches the last hash recorded for path.
        """
        return self.last_written.get(path) == current_hash

    def record_written(self, path: str, hash_value: str) -> None:
        """
        Record hash of content about to be written to path.

        CRITICAL: Must be called BEFORE the write so the resulting change
        notification is recognized as an echo.

        Also used to mark native content as already analyzed when the
        translation service reports no structural change, and after a
        successful native -> shared sync.

        Args:
            path: File path being written.
            hash_value: SHA-256 hex digest of the content.
        """
        self.last_written[path] = hash_value
