"""Hierarchical exception types for udock.

Every error raised by a session operation is one of the kinds below, except the
removal operations which let the runtime client's own error through. Wrapping
errors are always raised ``from`` the underlying cause.
"""

from __future__ import annotations


class UdockError(Exception):
    """Base exception for all udock errors."""


# ── Session lifecycle ───────────────────────────────────────────


class ClientConstructionFailed(UdockError):
    """The runtime client could not be built (malformed environment, bad host URL)."""

    def __init__(self) -> None:
        super().__init__("error creating docker client")


class ConnectivityFailed(UdockError):
    """The runtime daemon did not answer the liveness probe."""

    def __init__(self) -> None:
        super().__init__("error connecting to docker")


class OperationTimedOut(UdockError):
    """An operation did not complete within its deadline."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"{operation} timed out after {timeout:g}s")
        self.operation = operation
        self.timeout = timeout


# ── Images ──────────────────────────────────────────────────────


class ImageListingFailed(UdockError):
    """Local images could not be listed, so presence is unknown."""

    def __init__(self, image_ref: str) -> None:
        super().__init__(f"error listing docker images: {image_ref}")
        self.image_ref = image_ref


class ImageNotPresent(UdockError):
    """The image is definitely absent from the local store."""

    def __init__(self, image_ref: str) -> None:
        super().__init__(f"docker image is not present: {image_ref}")
        self.image_ref = image_ref


class ImagePullFailed(UdockError):
    """The pull request was rejected or could not be sent."""

    def __init__(self, image_ref: str) -> None:
        super().__init__(f"error pulling image: {image_ref}")
        self.image_ref = image_ref


class ImageStreamReadFailed(UdockError):
    """The pull progress stream broke or reported an error before completing."""

    def __init__(self, image_ref: str) -> None:
        super().__init__(f"error reading image during pull: {image_ref}")
        self.image_ref = image_ref


# ── Containers ──────────────────────────────────────────────────


class PortMappingInvalid(UdockError, ValueError):
    """A host or container port string is not a valid TCP port."""

    def __init__(self, port: str, reason: str) -> None:
        super().__init__(f"portmap error: {port!r}: {reason}")
        self.port = port


class ContainerCreationFailed(UdockError):
    """The runtime refused to create the container."""

    def __init__(self, image_ref: str, name: str | None) -> None:
        super().__init__(f"error creating container {name or '<unnamed>'} from {image_ref}")
        self.image_ref = image_ref
        self.name = name


class ContainerStartFailed(UdockError):
    """The start call or a state inspection failed."""

    def __init__(self, container_id: str) -> None:
        super().__init__(f"error starting container: {container_id}")
        self.container_id = container_id
