"""Session owning one runtime client, with deadline-bounded operations."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from types import TracebackType
from typing import Any

from udock.config import Settings, get_settings
from udock.runtime.deadline import bounded, run_blocking
from udock.runtime.docker_client import DockerRuntimeClient
from udock.runtime.interfaces import RuntimeClient
from udock.runtime.ports import translate_port_bindings
from udock.runtime.startup import ContainerStartup
from udock.shared.exceptions import (
    ClientConstructionFailed,
    ConnectivityFailed,
    ContainerCreationFailed,
    ImageListingFailed,
    ImageNotPresent,
    ImagePullFailed,
    ImageStreamReadFailed,
    OperationTimedOut,
)
from udock.shared.models import ContainerConfig, ContainerState, HostConfig

logger = logging.getLogger(__name__)

ClientFactory = Callable[[Settings], RuntimeClient]


def _require_image_ref(image_ref: str) -> None:
    if not image_ref:
        raise ValueError("image reference must not be empty")


def _drain(stream: Iterable[Any], stop: threading.Event) -> int:
    count = 0
    for _ in stream:
        # set when the awaiting pull is cancelled
        if stop.is_set():
            break
        count += 1
    return count


class Session:
    """Single entry point for driving a container runtime.

    Every operation is awaited to completion and bounded by its own deadline
    from ``Settings``; deadlines are never shared between operations. No call
    is retried. A session is meant to be used by one task at a time.

    Usage::

        async with await Session.create() as session:
            await session.pull_image("hashicorp/http-echo:latest")
            container_id = await session.create_container(
                "hashicorp/http-echo:latest", "echo", {"8080": "5678"}
            )
            await session.start_container(container_id)
            ...
            await session.remove_container(container_id)
    """

    def __init__(self, client: RuntimeClient, settings: Settings | None = None) -> None:
        self.client = client
        self._settings = settings or get_settings()

    @classmethod
    async def create(
        cls,
        settings: Settings | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> Session:
        """Build a runtime client and verify the daemon answers.

        Args:
            settings: Configuration; read from the environment when omitted.
            client_factory: Builds the runtime client. Defaults to the Docker client.

        Raises:
            ClientConstructionFailed: If the client cannot be built.
            ConnectivityFailed: If the daemon does not answer within the connect timeout.
        """
        settings = settings or get_settings()
        factory = client_factory or DockerRuntimeClient.from_settings
        try:
            client = factory(settings)
        except Exception as exc:
            raise ClientConstructionFailed() from exc

        try:
            await bounded("connect", settings.connect_timeout_seconds, run_blocking(client.ping))
        except Exception as exc:
            try:
                await run_blocking(client.close)
            except Exception as close_exc:
                logger.warning("failed to close runtime client after failed ping: %s", close_exc)
            raise ConnectivityFailed() from exc

        logger.debug("connected to container runtime")
        return cls(client, settings)

    async def close(self) -> None:
        """Release the runtime client. Call exactly once per created session."""
        await run_blocking(self.client.close)

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ── Images ──────────────────────────────────────────────────

    async def verify_have_image(self, image_ref: str) -> None:
        """Return if the image is stored locally.

        Raises:
            ImageNotPresent: If no local image matches the reference.
            ImageListingFailed: If presence could not be determined.
            OperationTimedOut: If listing exceeds the verify timeout.
        """
        _require_image_ref(image_ref)
        try:
            images = await bounded(
                "verify image",
                self._settings.image_verify_timeout_seconds,
                run_blocking(self.client.list_images, image_ref),
            )
        except OperationTimedOut:
            raise
        except Exception as exc:
            raise ImageListingFailed(image_ref) from exc

        if not images:
            raise ImageNotPresent(image_ref)

    async def pull_image(self, image_ref: str) -> None:
        """Pull an image unless it is already stored locally.

        Only a definite ``ImageNotPresent`` leads to a pull; listing failures
        and verify timeouts propagate because presence is unknown.

        Raises:
            ImagePullFailed: If the pull request fails.
            ImageStreamReadFailed: If the progress stream breaks before completion.
            OperationTimedOut: If verifying or pulling exceeds its timeout.
        """
        try:
            await self.verify_have_image(image_ref)
        except ImageNotPresent:
            logger.info("did not have image %s, pulling", image_ref)
        else:
            logger.info("already have image %s, not pulling", image_ref)
            return

        await bounded("pull image", self._settings.pull_timeout_seconds, self._pull_and_drain(image_ref))
        logger.info("done pulling image %s", image_ref)

    async def _pull_and_drain(self, image_ref: str) -> None:
        try:
            stream = await run_blocking(self.client.pull_image, image_ref)
        except Exception as exc:
            raise ImagePullFailed(image_ref) from exc

        # The daemon reports completion only by ending the stream.
        stop = threading.Event()
        try:
            messages = await run_blocking(_drain, stream, stop)
        except Exception as exc:
            raise ImageStreamReadFailed(image_ref) from exc
        finally:
            stop.set()
        logger.debug("pull of %s produced %d progress messages", image_ref, messages)

    async def remove_image(self, image_ref: str) -> None:
        """Remove a local image. Runtime errors pass through unchanged."""
        _require_image_ref(image_ref)
        await bounded(
            "remove image",
            self._settings.remove_image_timeout_seconds,
            run_blocking(self.client.remove_image, image_ref),
        )

    # ── Containers ──────────────────────────────────────────────

    async def create_container(self, image_ref: str, name: str | None, ports: Mapping[str, str]) -> str:
        """Create a container publishing ``ports`` (host port → container port).

        The container is removed automatically when it stops.

        Returns:
            The container ID.

        Raises:
            PortMappingInvalid: If a port string is malformed; nothing is sent to the runtime.
            ContainerCreationFailed: If the runtime refuses the create.
            OperationTimedOut: If the create exceeds its timeout.
        """
        _require_image_ref(image_ref)
        host_config = HostConfig(port_bindings=translate_port_bindings(ports), auto_remove=True)
        config = ContainerConfig(image=image_ref, tty=False)

        try:
            container_id = await bounded(
                "create container",
                self._settings.create_timeout_seconds,
                run_blocking(self.client.create_container, config, host_config, name),
            )
        except OperationTimedOut:
            raise
        except Exception as exc:
            raise ContainerCreationFailed(image_ref, name) from exc

        logger.info("created container %s (%s) from %s", name or "<unnamed>", container_id[:12], image_ref)
        return container_id

    async def start_container(self, container_id: str) -> None:
        """Start a created container and wait until it reports running.

        Raises:
            ContainerStartFailed: If the start call or an inspection fails.
            OperationTimedOut: If the container is not running within the start timeout.
        """
        startup = ContainerStartup(
            self.client,
            container_id,
            poll_interval=self._settings.start_poll_interval_seconds,
        )
        try:
            await bounded("start container", self._settings.start_timeout_seconds, startup.run())
        except OperationTimedOut:
            startup.mark_timed_out()
            logger.warning(
                "container %s not running after %gs (%d polls)",
                container_id[:12],
                self._settings.start_timeout_seconds,
                startup.polls,
            )
            raise
        logger.info("started container %s", container_id[:12])

    async def inspect_container(self, container_id: str) -> ContainerState:
        """Return the container's current state. Runtime errors pass through unchanged."""
        return await bounded(
            "inspect container",
            self._settings.inspect_timeout_seconds,
            run_blocking(self.client.inspect_container, container_id),
        )

    async def remove_container(self, container_id: str) -> None:
        """Force-remove a container and its volumes, stopping it first if running.

        Runtime errors pass through unchanged.
        """
        await bounded(
            "remove container",
            self._settings.remove_container_timeout_seconds,
            run_blocking(self.client.remove_container, container_id, force=True, remove_volumes=True),
        )
        logger.info("removed container %s", container_id[:12])
