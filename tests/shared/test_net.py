"""Tests for host networking helpers."""

from __future__ import annotations

import socket

from udock.shared.net import get_free_port


def test_free_port_is_bindable() -> None:
    port = get_free_port()

    assert 0 < port <= 65535
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", port))
