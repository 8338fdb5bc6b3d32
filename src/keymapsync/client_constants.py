#!/usr/bin/env python3
"""Constants for the translation service client.

These constants control connection retry backoff and the deadlines applied
to each request.
"""

# Retry parameters for exponential backoff when opening a connection.
# Initial delay between connection attempts in seconds.
INITIAL_WAIT: float = 0.5

# Maximum delay between connection attempts in seconds.
MAX_WAIT: float = 4.0

# Multiplier for exponential backoff (delay = initial * multiplier^attempt).
WAIT_MULTIPLIER: float = 2.0

# Connection attempts per request before giving up.
CONNECT_ATTEMPTS: int = 3

# Deadline for one request/response exchange in seconds.
REQUEST_TIMEOUT: float = 30.0

# Deadline for the startup connection probe in seconds.
CHECK_TIMEOUT: float = 5.0

# Editor identifier sent with editor-specific calls.
DEFAULT_EDITOR_TYPE: str = "VSCODE"
