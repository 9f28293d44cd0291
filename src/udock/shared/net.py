"""Host networking helpers."""

from __future__ import annotations

import socket


def get_free_port(host: str = "127.0.0.1") -> int:
    """Return a TCP port that is currently free on ``host``.

    The port is found by binding an ephemeral listener and releasing it
    immediately, so another process may still claim it before it is used.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        port: int = sock.getsockname()[1]
    return port
