#!/usr/bin/env python3
"""Tests for service address parsing and connection retry logic."""
from unittest.mock import AsyncMock, patch

import pytest
from tenacity import wait_none

from keymapsync.client_constants import CONNECT_ATTEMPTS
from keymapsync.client_retry import connect_to_service, connect_with_retry, parse_address


def test_parse_tcp_address() -> None:
    assert parse_address("onekeymap.example.com:443") == ("onekeymap.example.com", 443)


def test_parse_unix_address() -> None:
    assert parse_address("unix:/tmp/onekeymap.sock") == ("/tmp/onekeymap.sock", None)


@pytest.mark.parametrize("address", ["localhost", "localhost:", ":443", "host:port", "unix:"])
def test_parse_invalid_address(address: str) -> None:
    with pytest.raises(ValueError):
        parse_address(address)


@pytest.mark.asyncio
async def test_connect_tcp_passes_ssl_context() -> None:
    mock_reader = AsyncMock()
    mock_writer = AsyncMock()
    context = object()

    with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_open:
        mock_open.return_value = (mock_reader, mock_writer)
        reader, writer = await connect_to_service("localhost:50051", context)

    mock_open.assert_called_once_with("localhost", 50051, ssl=context)
    assert reader is mock_reader
    assert writer is mock_writer


@pytest.mark.asyncio
async def test_connect_unix_socket() -> None:
    with patch("asyncio.open_unix_connection", new_callable=AsyncMock) as mock_open:
        mock_open.return_value = (AsyncMock(), AsyncMock())
        await connect_to_service("unix:/tmp/test.sock", None)

    mock_open.assert_called_once_with("/tmp/test.sock")


@pytest.mark.asyncio
async def test_connect_failure_raises_connection_error() -> None:
    with patch("asyncio.open_connection", new_callable=AsyncMock) as mock_open:
        mock_open.side_effect = OSError("Connection refused")

        with pytest.raises(ConnectionError) as exc_info:
            await connect_to_service("localhost:50051", None)

    assert "Connection refused" in str(exc_info.value)


@pytest.mark.asyncio
async def test_connect_with_retry_gives_up_after_attempts() -> None:
    connect = connect_with_retry.retry_with(wait=wait_none())

    with patch("keymapsync.client_retry.connect_to_service", new_callable=AsyncMock) as mock_conn:
        mock_conn.side_effect = ConnectionError("refused")
        with pytest.raises(ConnectionError):
            await connect("localhost:50051", None)

    assert mock_conn.await_count == CONNECT_ATTEMPTS


@pytest.mark.asyncio
async def test_connect_with_retry_recovers() -> None:
    connect = connect_with_retry.retry_with(wait=wait_none())
    connection = (AsyncMock(), AsyncMock())

    with patch("keymapsync.client_retry.connect_to_service", new_callable=AsyncMock) as mock_conn:
        mock_conn.side_effect = [ConnectionError("refused"), connection]
        result = await connect("localhost:50051", None)

    assert result == connection
    assert mock_conn.await_count == 2
