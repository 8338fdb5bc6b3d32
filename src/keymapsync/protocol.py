#!/usr/bin/env python3
"""
Netstring-framed JSON messages for the translation service.

Netstrings provide a simple, reliable framing format for transmitting
arbitrary binary data over a stream connection. Format: <length>:<content>,
where length is ASCII decimal digits, followed by a colon, the raw content
bytes, and a trailing comma.

Example: "12:Hello world!," encodes the 12-byte string "Hello world!".

Each exchange is one request frame followed by one response frame, both
carrying a UTF-8 JSON object:

    request:  {"method": "ParseKeymap", "params": {...}}
    response: {"result": {...}}  or  {"error": {"message": "..."}}

Payloads are limited to 10 MB to prevent memory exhaustion.
"""
import asyncio
import json
from typing import Any

# Maximum size of a message payload in bytes (10 MB).
MAX_CONTENT_SIZE: int = 10485760

# Maximum digits in the length field (8 digits allows up to 99999999 bytes).
# Enforced during parsing to prevent denial of service from huge length values.
MAX_LENGTH_DIGITS: int = 8


class ProtocolError(Exception):
    """
    Exception raised for protocol-level errors.

    Raised when netstring parsing fails due to invalid format, size
    violations, or connection issues during message reading, and when a
    payload is not the expected JSON object.
    """

    pass


class ServiceError(Exception):
    """
    Exception raised when the translation service answers with an error.

    Attributes:
        method: The method whose call failed.
    """

    def __init__(self, method: str, message: str) -> None:
        super().__init__(f"{method} failed: {message}")
        self.method = method


def encode_netstring(data: bytes) -> bytes:
    """
    Encode raw bytes as a netstring.

    Args:
        data: Raw payload bytes to encode.

    Returns:
        Netstring-encoded bytes in format "<length>:<content>,".
    """
    length = len(data)
    return f"{length}:".encode("ascii") + data + b","


def validate_content_size(data: bytes) -> bool:
    """
    Check if payload size is within the allowed limit.

    Args:
        data: Raw payload bytes to validate.

    Returns:
        True if len(data) <= MAX_CONTENT_SIZE, False otherwise.
    """
    return len(data) <= MAX_CONTENT_SIZE


async def read_netstring(reader: asyncio.StreamReader) -> bytes:
    """
    Read and decode a netstring from an async stream.

    Args:
        reader: asyncio StreamReader to read from.

    Returns:
        Decoded content bytes.

    Raises:
        ProtocolError: On invalid format, size violation, or connection closed.
    """
    length_bytes = b""
    while len(length_bytes) < MAX_LENGTH_DIGITS + 1:
        byte = await reader.read(1)
        if not byte:
            raise ProtocolError("Connection closed while reading length field")
        if byte == b":":
            break
        if not byte.isdigit():
            raise ProtocolError(f"Invalid character in length field: {byte!r}")
        length_bytes += byte
    else:
        raise ProtocolError("Length field exceeds maximum digits")
    if not length_bytes:
        raise ProtocolError("Empty length field")
    length = int(length_bytes.decode("ascii"))
    if length > MAX_CONTENT_SIZE:
        raise ProtocolError(f"Content size {length} exceeds limit {MAX_CONTENT_SIZE}")
    try:
        content = await reader.readexactly(length)
    except asyncio.IncompleteReadError as e:
        raise ProtocolError(f"Connection closed after {len(e.partial)} bytes") from e
    comma = await reader.read(1)
    if comma != b",":
        raise ProtocolError(f"Expected comma terminator, got {comma!r}")
    return content


def encode_request(method: str, params: dict[str, Any]) -> bytes:
    """
    Encode a method call as a netstring-framed JSON request.

    Args:
        method: Service method name, e.g. "AnalyzeEditorConfig".
        params: JSON-serializable request parameters.

    Returns:
        The framed request bytes.

    Raises:
        ProtocolError: If the encoded request exceeds MAX_CONTENT_SIZE.
    """
    payload = json.dumps({"method": method, "params": params}).encode("utf-8")
    if not validate_content_size(payload):
        raise ProtocolError(f"{method} request exceeds {MAX_CONTENT_SIZE} bytes")
    return encode_netstring(payload)


def decode_response(method: str, payload: bytes) -> dict[str, Any]:
    """
    Decode a response payload and unwrap its result.

    Args:
        method: The method the response answers, used in error messages.
        payload: The raw netstring content.

    Returns:
        The "result" object; an empty dict when the result is null.

    Raises:
        ProtocolError: If the payload is not a JSON object.
        ServiceError: If the service reported an error.
    """
    try:
        message = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ProtocolError(f"Invalid {method} response: {e}") from e
    if not isinstance(message, dict):
        raise ProtocolError(f"Invalid {method} response: expected a JSON object")

    error = message.get("error")
    if error is not None:
        text = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
        raise ServiceError(method, text)

    result = message.get("result")
    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ProtocolError(f"Invalid {method} response: result is not an object")
    return result
