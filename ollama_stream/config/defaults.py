"""ollama_stream.config.defaults
=============================

Central place for small, stable default values. These can be overridden via
environment variables, an external config file, or explicit arguments.

Only plain constants live here; no I/O and no imports from other packages.
"""

from __future__ import annotations

# Base URL of the local Ollama daemon.
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

# Per-request timeout in seconds handed to the transport.
OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0

# Whether callers log the outbound payload and the final result.
OLLAMA_DEFAULT_VERBOSE = True

# Endpoint suffixes appended to the host.
CHAT_ENDPOINT = "/api/chat"
GENERATE_ENDPOINT = "/api/generate"

# Error text used for 401 responses; the body is not parsed.
UNAUTHORIZED_MESSAGE = "Unauthorized"

# Prefix of ``complete_response`` for a failed asynchronous call.
ASYNC_FAILURE_PREFIX = "[FAILED] "

__all__ = [
    "OLLAMA_DEFAULT_HOST",
    "OLLAMA_DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "OLLAMA_DEFAULT_VERBOSE",
    "CHAT_ENDPOINT",
    "GENERATE_ENDPOINT",
    "UNAUTHORIZED_MESSAGE",
    "ASYNC_FAILURE_PREFIX",
]
