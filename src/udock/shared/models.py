"""Frozen Pydantic value models exchanged with the runtime client."""

from __future__ import annotations

from pydantic import BaseModel, Field

# Host IP used for every port binding: all interfaces.
BIND_ALL_INTERFACES = "0.0.0.0"


class PortBinding(BaseModel):
    """One host-side endpoint a container port is published on."""

    model_config = {"frozen": True}

    host_ip: str = BIND_ALL_INTERFACES
    host_port: str


class ContainerConfig(BaseModel):
    """Container-side creation settings."""

    model_config = {"frozen": True}

    image: str
    tty: bool = False


class HostConfig(BaseModel):
    """Host-side creation settings.

    ``port_bindings`` maps protocol-qualified container ports (``"5678/tcp"``)
    to the host endpoints they are published on.
    """

    model_config = {"frozen": True}

    port_bindings: dict[str, list[PortBinding]] = Field(default_factory=dict)
    auto_remove: bool = True


class ImageSummary(BaseModel):
    """A locally stored image as reported by the runtime."""

    model_config = {"frozen": True}

    id: str
    repo_tags: list[str] = Field(default_factory=list)


class ContainerState(BaseModel):
    """Snapshot of a container's runtime state."""

    model_config = {"frozen": True}

    id: str
    status: str = ""
    running: bool = False
