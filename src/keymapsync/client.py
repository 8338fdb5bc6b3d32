#!/usr/bin/env python3
"""Translation service client for keymapsync.

This module provides TranslationClient, the concrete KeymapClient used at
runtime. Each operation opens a connection (see client_retry.py), sends one
netstring-framed JSON request and reads one response (see protocol.py).

The client enforces its own deadline per request; the sync coordinator
relies on that and never times out calls itself.
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any

from keymapsync.client_constants import CHECK_TIMEOUT, DEFAULT_EDITOR_TYPE, REQUEST_TIMEOUT
from keymapsync.client_retry import connect_to_service, connect_with_retry
from keymapsync.models import (
    AnalyzeEditorConfigResponse,
    GenerateEditorConfigResponse,
    GenerateKeymapResponse,
    Keymap,
    ParseKeymapResponse,
)
from keymapsync.protocol import decode_response, encode_request, read_netstring

logger = logging.getLogger(__name__)


def create_ssl_context(root_cert: bytes | None = None) -> ssl.SSLContext:
    """Create a client TLS context.

    Args:
        root_cert: PEM-encoded CA certificate(s) to trust instead of the
            system store, e.g. a development CA.

    Returns:
        An SSLContext that verifies the server certificate.
    """
    if root_cert is not None:
        return ssl.create_default_context(cadata=root_cert.decode("ascii"))
    return ssl.create_default_context()


class TranslationClient:
    """Client for the keymap translation service.

    Args:
        address: "host:port" or "unix:/path/to/socket".
        ssl_context: TLS context for TCP addresses, or None for plaintext.
        editor_type: Editor identifier sent with editor-specific calls.
        timeout: Deadline in seconds for each request.
    """

    def __init__(
        self,
        address: str,
        ssl_context: ssl.SSLContext | None = None,
        editor_type: str = DEFAULT_EDITOR_TYPE,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.address = address
        self.ssl_context = ssl_context
        self.editor_type = editor_type
        self.timeout = timeout

    async def check_connection(self, timeout: float = CHECK_TIMEOUT) -> bool:
        """Probe the service once within timeout seconds.

        Returns:
            True if the service answered a ConfigDetect call, else False.
        """
        try:
            await asyncio.wait_for(
                self._exchange("ConfigDetect", {"editorType": self.editor_type}, retry=False),
                timeout=timeout,
            )
        except Exception as e:
            logger.error("Connection to %s failed: %s", self.address, e)
            return False
        logger.info("Connected to translation service at %s", self.address)
        return True

    async def analyze_editor_config(
        self, content: str, original_config: Keymap | None = None
    ) -> AnalyzeEditorConfigResponse:
        params: dict[str, Any] = {
            "editorType": self.editor_type,
            "sourceContent": content,
            "baseContent": "",
        }
        if original_config is not None:
            params["originalConfig"] = original_config.to_dict()
        result = await self._call("AnalyzeEditorConfig", params)
        return AnalyzeEditorConfigResponse.from_dict(result)

    async def generate_editor_config(
        self, keymap: Keymap, original_content: str
    ) -> GenerateEditorConfigResponse:
        params = {
            "editorType": self.editor_type,
            "keymap": keymap.to_dict(),
            "originalContent": original_content,
            "diffType": "DIFF_TYPE_UNSPECIFIED",
            "filePath": "",
        }
        result = await self._call("GenerateEditorConfig", params)
        return GenerateEditorConfigResponse.from_dict(result)

    async def parse_keymap(self, content: str) -> ParseKeymapResponse:
        result = await self._call("ParseKeymap", {"content": content, "includeAllActions": False})
        return ParseKeymapResponse.from_dict(result)

    async def generate_keymap(self, keymap: Keymap) -> GenerateKeymapResponse:
        result = await self._call("GenerateKeymap", {"keymap": keymap.to_dict()})
        return GenerateKeymapResponse.from_dict(result)

    async def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Run one exchange under the request deadline."""
        return await asyncio.wait_for(self._exchange(method, params), timeout=self.timeout)

    async def _exchange(
        self, method: str, params: dict[str, Any], retry: bool = True
    ) -> dict[str, Any]:
        """Send one request on a fresh connection and return its result.

        Raises:
            ConnectionError: If the service cannot be reached.
            ProtocolError: On malformed framing or JSON.
            ServiceError: If the service reported an error.
        """
        connect = connect_with_retry if retry else connect_to_service
        reader, writer = await connect(self.address, self.ssl_context)
        try:
            writer.write(encode_request(method, params))
            await writer.drain()
            payload = await read_netstring(reader)
        finally:
            writer.close()
            await writer.wait_closed()
        logger.debug("%s answered with %d bytes", method, len(payload))
        return decode_response(method, payload)
