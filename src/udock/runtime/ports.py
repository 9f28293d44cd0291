"""Translation of host→container port maps into runtime port bindings."""

from __future__ import annotations

from collections.abc import Mapping

from udock.shared.exceptions import PortMappingInvalid
from udock.shared.models import BIND_ALL_INTERFACES, PortBinding

PROTOCOL = "tcp"
_MAX_PORT = 65535


def _parse_port(raw: str, *, minimum: int) -> int:
    # str.isdigit() accepts non-ASCII digits, which the daemon would reject
    if not raw or not raw.isascii() or not raw.isdigit():
        raise PortMappingInvalid(raw, "not a decimal port number")
    port = int(raw)
    if not minimum <= port <= _MAX_PORT:
        raise PortMappingInvalid(raw, f"out of range {minimum}-{_MAX_PORT}")
    return port


def container_port_token(raw: str) -> str:
    """Return the protocol-qualified token for a container port, e.g. ``"5678/tcp"``."""
    return f"{_parse_port(raw, minimum=1)}/{PROTOCOL}"


def translate_port_bindings(ports: Mapping[str, str]) -> dict[str, list[PortBinding]]:
    """Build runtime port bindings from a host-port → container-port map.

    Every container port is published on all host interfaces at exactly one
    host port. Any malformed entry aborts the whole translation.

    Raises:
        PortMappingInvalid: If a port string is malformed or a container port
            is targeted by more than one host port.
    """
    bindings: dict[str, list[PortBinding]] = {}
    for host_port, container_port in ports.items():
        token = container_port_token(container_port)
        host = str(_parse_port(host_port, minimum=0))
        if token in bindings:
            raise PortMappingInvalid(container_port, "container port bound to more than one host port")
        bindings[token] = [PortBinding(host_ip=BIND_ALL_INTERFACES, host_port=host)]
    return bindings
