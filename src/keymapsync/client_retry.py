#!/usr/bin/env python3
"""Translation service connection and retry logic.

This module provides connection handling with automatic retry using
tenacity for exponential backoff. Used by the client module to open one
stream connection per request.
"""

from __future__ import annotations

import asyncio
import logging
import ssl

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from keymapsync.client_constants import CONNECT_ATTEMPTS, INITIAL_WAIT, MAX_WAIT, WAIT_MULTIPLIER

logger = logging.getLogger(__name__)

UNIX_PREFIX = "unix:"


def parse_address(address: str) -> tuple[str, int | None]:
    """Split a service address into host and port.

    Args:
        address: Either "host:port" or "unix:/path/to/socket".

    Returns:
        (host, port) for TCP addresses, or (socket_path, None) for Unix
        domain socket addresses.

    Raises:
        ValueError: If the address has no valid port.
    """
    if address.startswith(UNIX_PREFIX):
        path = address[len(UNIX_PREFIX):]
        if not path:
            raise ValueError(f"Missing socket path in address: {address}")
        return path, None
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Expected host:port or unix:PATH, got: {address}")
    return host, int(port)


async def connect_to_service(
    address: str,
    ssl_context: ssl.SSLContext | None,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Open a stream connection to the translation service.

    TLS is applied to TCP addresses when ssl_context is given. Unix domain
    socket addresses are always plaintext.

    Args:
        address: Service address, see parse_address().
        ssl_context: TLS context, or None for a plaintext connection.

    Returns:
        Tuple of (StreamReader, StreamWriter) for the connection.

    Raises:
        ConnectionError: If connection fails (refused, unreachable, TLS error).
    """
    host, port = parse_address(address)
    try:
        if port is None:
            return await asyncio.open_unix_connection(host)
        return await asyncio.open_connection(host, port, ssl=ssl_context)
    except OSError as e:
        raise ConnectionError(f"Failed to connect to {address}: {e}") from e


@retry(
    wait=wait_exponential(
        multiplier=WAIT_MULTIPLIER,
        min=INITIAL_WAIT,
        max=MAX_WAIT,
    ),
    retry=retry_if_exception_type(ConnectionError),
    stop=stop_after_attempt(CONNECT_ATTEMPTS),
    reraise=True,
)
async def connect_with_retry(
    address: str,
    ssl_context: ssl.SSLContext | None,
) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Connect to the service, retrying transient connection failures.

    Only establishing the connection is retried. A request that fails once
    connected is never repeated.

    Args:
        address: Service address, see parse_address().
        ssl_context: TLS context, or None for a plaintext connection.

    Returns:
        Tuple of (StreamReader, StreamWriter) for the connection.

    Raises:
        ConnectionError: After CONNECT_ATTEMPTS failed attempts.
    """
    logger.debug("Connecting to translation service at %s", address)
    try:
        return await connect_to_service(address, ssl_context)
    except ConnectionError:
        logger.warning("Connection to %s failed, will retry", address)
        raise
