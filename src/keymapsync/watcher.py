#!/usr/bin/env python3
"""Debounced file change detection.

This module provides FileWatcher, an owned resource that watches one path
with a watchdog observer on its parent directory and exposes a single
settled "changed" event. Raw events restart a debounce timer; the event is
only set once the file has been quiet for the debounce period, so editors
that save in several steps (truncate, write, rename) produce one
notification.

Usage:
    async with FileWatcher(path) as watcher:
        await watcher.changed.wait()
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable

from watchdog.events import (
    EVENT_TYPE_CLOSED,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

logger = logging.getLogger(__name__)

# Seconds a file must stay unchanged before the change is reported.
DEBOUNCE_SECONDS: float = 1.0

# Raw change kinds passed from the observer thread to the event loop.
CREATED = "created"
MODIFIED = "modified"
DELETED = "deleted"


class SinglePathHandler(FileSystemEventHandler):
    """Forward watchdog events that concern one file to a callback.

    Directory-level events are dropped, as are open/close-without-write
    events so that reading the file never counts as a change. A move onto
    the path (atomic save) is reported as CREATED, a move away as DELETED.
    """

    def __init__(self, path: str, callback: Callable[[str], None]) -> None:
        super().__init__()
        self.path = os.path.abspath(path)
        self.callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        kind = self.classify(event)
        if kind is not None:
            self.callback(kind)

    def classify(self, event: FileSystemEvent) -> str | None:
        """Map a watchdog event to a raw change kind, or None if unrelated."""
        src = os.path.abspath(os.fsdecode(event.src_path))
        dest_path = getattr(event, "dest_path", "")
        dest = os.path.abspath(os.fsdecode(dest_path)) if dest_path else ""

        if event.event_type == EVENT_TYPE_MOVED:
            if dest == self.path:
                return CREATED
            if src == self.path:
                return DELETED
            return None
        if src != self.path:
            return None
        if event.event_type == EVENT_TYPE_CREATED:
            return CREATED
        if event.event_type == EVENT_TYPE_DELETED:
            return DELETED
        if event.event_type in (EVENT_TYPE_MODIFIED, EVENT_TYPE_CLOSED):
            return MODIFIED
        return None


class FileWatcher:
    """Watch one file and signal settled changes.

    The path does not need to exist when watching starts; creation (and
    re-creation after an atomic save) counts as a change. Deletion is
    logged but not reported. The parent directory is created if missing
    so the observer has something to watch.

    Attributes:
        path: The watched file path, made absolute.
        changed: Set after each settled change. The consumer clears it.
    """

    def __init__(self, path: str, debounce: float = DEBOUNCE_SECONDS) -> None:
        self.path = os.path.abspath(path)
        self.debounce = debounce
        self.changed = asyncio.Event()
        self._observer: BaseObserver | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._timer: asyncio.TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        """Start the observer. Must be called from within a running event loop."""
        if self._observer is not None:
            return
        self._loop = asyncio.get_running_loop()
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)

        observer = Observer()
        observer.schedule(SinglePathHandler(self.path, self._from_observer), directory, recursive=False)
        observer.start()
        self._observer = observer
        logger.info("Started watching %s", self.path)

    async def stop(self) -> None:
        """Stop the observer and drop any pending notification. Safe to repeat."""
        self._cancel_timer()
        observer, self._observer = self._observer, None
        if observer is None:
            return
        observer.stop()
        await asyncio.get_running_loop().run_in_executor(None, observer.join)
        logger.info("Stopped watching %s", self.path)

    async def __aenter__(self) -> FileWatcher:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def handle_change(self, kind: str) -> None:
        """Debounce one raw change. Runs on the event loop."""
        if self._observer is None:
            return
        if kind == DELETED:
            logger.warning("%s no longer exists (deleted?)", self.path)
            self._cancel_timer()
            return
        if kind == CREATED:
            logger.info("%s created or replaced", self.path)
        else:
            logger.debug("Raw change on %s", self.path)
        self._reschedule()

    def _from_observer(self, kind: str) -> None:
        # Called on the observer thread
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self.handle_change, kind)

    def _reschedule(self) -> None:
        self._cancel_timer()
        self._timer = self._loop.call_later(self.debounce, self._fire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        logger.debug("Debounce finished, %s changed", self.path)
        self.changed.set()
