"""Basic-Auth credential holder.

The credential pair is supplied by the caller and never mutated; the header
value is derived on demand so the password is not kept in a second form.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class BasicAuth:
    """Immutable username/password pair for HTTP Basic authentication."""

    username: str
    password: str

    def header_value(self) -> str:
        """Return the ``Authorization`` header value (``Basic <base64(user:pass)>``)."""
        raw = f"{self.username}:{self.password}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"BasicAuth(username={self.username!r}, password='***')"


__all__ = ["BasicAuth"]
