from __future__ import annotations

import socket


def current_hostname() -> str:
    """Return this machine's hostname.

    Raises LookupError when the OS can't tell us.
    """
    try:
        name = socket.gethostname()
    except OSError as exc:
        raise LookupError(f"hostname unavailable: {exc}") from exc
    if not name:
        raise LookupError("hostname unavailable: empty name")
    return name


def short_hostname(name: str) -> str:
    """Keep the leading label: "web-1.example.com" → "web-1"."""
    head, _, _ = name.partition(".")
    return head or name
