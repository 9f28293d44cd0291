"""Protocol interface for the container runtime client."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from udock.shared.models import ContainerConfig, ContainerState, HostConfig, ImageSummary


@runtime_checkable
class RuntimeClient(Protocol):
    """Blocking client for a container runtime daemon.

    Methods raise on failure; the session enforces deadlines around each call
    and maps failures to domain errors.
    """

    def ping(self) -> None:
        """Probe the daemon for liveness.

        Raises:
            Exception: If the daemon cannot be reached
        """
        ...

    def list_images(self, reference: str) -> list[ImageSummary]:
        """List local images whose reference matches exactly.

        Args:
            reference: Image reference, e.g. ``repo:tag``

        Returns:
            Matching images, empty when none are stored locally
        """
        ...

    def pull_image(self, reference: str) -> Iterator[Any]:
        """Request a pull and return its progress stream.

        The pull has only completed once the returned iterator is exhausted.

        Args:
            reference: Image reference to pull

        Returns:
            Iterator over progress messages
        """
        ...

    def create_container(self, config: ContainerConfig, host_config: HostConfig, name: str | None) -> str:
        """Create a container.

        Args:
            config: Container-side settings
            host_config: Host-side settings (port bindings, auto-remove)
            name: Container name, or None for a runtime-assigned one

        Returns:
            The new container's ID
        """
        ...

    def start_container(self, container_id: str) -> None:
        """Start a created container."""
        ...

    def inspect_container(self, container_id: str) -> ContainerState:
        """Return the current state of a container."""
        ...

    def remove_container(self, container_id: str, *, force: bool, remove_volumes: bool) -> None:
        """Remove a container.

        Args:
            container_id: Container to remove
            force: Kill the container first if it is running
            remove_volumes: Also remove anonymous volumes attached to it
        """
        ...

    def remove_image(self, reference: str) -> None:
        """Remove a local image."""
        ...

    def close(self) -> None:
        """Release connections held by the client."""
        ...
