"""ollama_stream.config.env
========================

Environment variable names and the credential lookup helper.

Failure Modes
-------------
``resolve_basic_auth`` never raises; it returns ``None`` unless both the
username and the password variables are set to non-empty values.
"""

from __future__ import annotations

import os
from typing import Optional

from ..base.auth import BasicAuth

HOST_ENV = "OLLAMA_HOST"
REQUEST_TIMEOUT_ENV = "OLLAMA_REQUEST_TIMEOUT_SECONDS"
VERBOSE_ENV = "OLLAMA_VERBOSE"
USERNAME_ENV = "OLLAMA_USERNAME"
PASSWORD_ENV = "OLLAMA_PASSWORD"  # pragma: allowlist secret - env name, not a secret
CONFIG_FILE_ENV = "OLLAMA_STREAM_CONFIG_FILE"


def resolve_basic_auth() -> Optional[BasicAuth]:
    """Build a :class:`BasicAuth` from ``OLLAMA_USERNAME``/``OLLAMA_PASSWORD``.

    Returns
    -------
    Optional[BasicAuth]
        The credential pair, or ``None`` when either variable is unset or empty.
    """
    username = os.environ.get(USERNAME_ENV)
    password = os.environ.get(PASSWORD_ENV)
    if not username or not password:
        return None
    return BasicAuth(username=username, password=password)


__all__ = [
    "HOST_ENV",
    "REQUEST_TIMEOUT_ENV",
    "VERBOSE_ENV",
    "USERNAME_ENV",
    "PASSWORD_ENV",
    "CONFIG_FILE_ENV",
    "resolve_basic_auth",
]
