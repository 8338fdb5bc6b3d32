#!/usr/bin/env python3
"""Tests for run_sync_loop dispatching."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from keymapsync.sync_loop import run_sync_loop


@pytest.fixture
def mock_coordinator() -> MagicMock:
    coordinator = MagicMock()
    coordinator.on_native_file_changed = AsyncMock()
    coordinator.on_shared_file_changed = AsyncMock()
    return coordinator


@pytest.mark.asyncio
async def test_exits_immediately_when_shutdown_set(mock_coordinator: MagicMock) -> None:
    shutdown = asyncio.Event()
    shutdown.set()

    await asyncio.wait_for(
        run_sync_loop(mock_coordinator, asyncio.Event(), asyncio.Event(), shutdown), timeout=1.0
    )

    mock_coordinator.on_native_file_changed.assert_not_called()
    mock_coordinator.on_shared_file_changed.assert_not_called()


@pytest.mark.asyncio
async def test_dispatches_each_event(mock_coordinator: MagicMock) -> None:
    """Test each fired event runs its direction once and is cleared."""
    native_changed = asyncio.Event()
    shared_changed = asyncio.Event()
    shutdown = asyncio.Event()

    async def stop_after_shared() -> None:
        shutdown.set()

    mock_coordinator.on_shared_file_changed.side_effect = stop_after_shared
    native_changed.set()
    shared_changed.set()

    await asyncio.wait_for(
        run_sync_loop(mock_coordinator, native_changed, shared_changed, shutdown), timeout=1.0
    )

    mock_coordinator.on_native_file_changed.assert_awaited_once()
    mock_coordinator.on_shared_file_changed.assert_awaited_once()
    assert not native_changed.is_set()
    assert not shared_changed.is_set()


@pytest.mark.asyncio
async def test_transactions_do_not_overlap(mock_coordinator: MagicMock) -> None:
    """Test an event set during a transaction waits for it to finish."""
    native_changed = asyncio.Event()
    shared_changed = asyncio.Event()
    shutdown = asyncio.Event()
    active = 0
    max_active = 0
    calls: list[str] = []

    async def transaction(name: str) -> None:
        nonlocal active, max_active
        active += 1
        max_active = max(max_active, active)
        calls.append(name)
        if name == "native":
            shared_changed.set()
        await asyncio.sleep(0.01)
        active -= 1
        if name == "shared":
            shutdown.set()

    async def native_transaction() -> None:
        await transaction("native")

    async def shared_transaction() -> None:
        await transaction("shared")

    mock_coordinator.on_native_file_changed.side_effect = native_transaction
    mock_coordinator.on_shared_file_changed.side_effect = shared_transaction
    native_changed.set()

    await asyncio.wait_for(
        run_sync_loop(mock_coordinator, native_changed, shared_changed, shutdown), timeout=1.0
    )

    assert calls == ["native", "shared"]
    assert max_active == 1
