"""Runtime client implementation using the Docker SDK's low-level API client."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import Any

from docker.constants import DEFAULT_DOCKER_API_VERSION
from docker.errors import DockerException
from docker.utils import kwargs_from_env

import docker
from udock.config import Settings
from udock.shared.models import ContainerConfig, ContainerState, HostConfig, ImageSummary

logger = logging.getLogger(__name__)

_AUTO_VERSION = "auto"


class DockerRuntimeClient:
    """Docker-based implementation of the RuntimeClient protocol.

    Construction performs no network I/O. With ``negotiate_version`` the API
    version is read from the daemon on the first ping and the underlying
    client is rebuilt at that version. A ping abandoned by its caller may still
    be negotiating when the client is closed; the rebuilt client is then
    closed instead of installed.
    """

    def __init__(
        self,
        api: Any,
        *,
        client_kwargs: dict[str, Any] | None = None,
        negotiate_version: bool = False,
    ) -> None:
        self._api = api
        self._client_kwargs = client_kwargs or {}
        self._negotiate = negotiate_version
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> DockerRuntimeClient:
        """Build a client from ``DOCKER_*`` environment variables and settings.

        Raises:
            DockerException: If the environment or host URL is malformed.
        """
        client_kwargs: dict[str, Any] = dict(kwargs_from_env())
        if settings.docker_host:
            client_kwargs["base_url"] = settings.docker_host
        client_kwargs["timeout"] = settings.request_timeout_seconds

        negotiate = settings.api_version.lower() == _AUTO_VERSION
        version = DEFAULT_DOCKER_API_VERSION if negotiate else settings.api_version
        api = docker.APIClient(version=version, **client_kwargs)
        return cls(api, client_kwargs=client_kwargs, negotiate_version=negotiate)

    def ping(self) -> None:
        if self._negotiate:
            # /version is unversioned, so it answers whatever API range the daemon supports
            server_version = self._api.version(api_version=False)["ApiVersion"]
            negotiated = docker.APIClient(version=server_version, **self._client_kwargs)
            with self._lock:
                if self._closed:
                    negotiated.close()
                    raise DockerException("client closed during api version negotiation")
                previous, self._api = self._api, negotiated
                self._negotiate = False
            previous.close()
            logger.debug("negotiated docker api version %s", server_version)
        self._api.ping()

    def list_images(self, reference: str) -> list[ImageSummary]:
        images = self._api.images(filters={"reference": reference})
        return [ImageSummary(id=image["Id"], repo_tags=image.get("RepoTags") or []) for image in images]

    def pull_image(self, reference: str) -> Iterator[dict[str, Any]]:
        # The request is sent here; only the progress stream is lazy.
        stream = self._api.pull(reference, stream=True, decode=True)
        return _checked_progress(stream, reference)

    def create_container(self, config: ContainerConfig, host_config: HostConfig, name: str | None) -> str:
        port_bindings = {
            token: [(binding.host_ip, binding.host_port) for binding in bindings]
            for token, bindings in host_config.port_bindings.items()
        }
        exposed = [tuple(token.split("/", 1)) for token in host_config.port_bindings]
        docker_host_config = self._api.create_host_config(
            port_bindings=port_bindings,
            auto_remove=host_config.auto_remove,
        )
        created = self._api.create_container(
            image=config.image,
            name=name or None,
            tty=config.tty,
            ports=exposed or None,
            host_config=docker_host_config,
        )
        container_id: str = created["Id"]
        for warning in created.get("Warnings") or []:
            logger.warning("create %s: %s", container_id[:12], warning)
        return container_id

    def start_container(self, container_id: str) -> None:
        self._api.start(container_id)

    def inspect_container(self, container_id: str) -> ContainerState:
        attrs = self._api.inspect_container(container_id)
        state = attrs.get("State") or {}
        return ContainerState(
            id=attrs.get("Id", container_id),
            status=state.get("Status", ""),
            running=bool(state.get("Running", False)),
        )

    def remove_container(self, container_id: str, *, force: bool, remove_volumes: bool) -> None:
        self._api.remove_container(container_id, v=remove_volumes, force=force)

    def remove_image(self, reference: str) -> None:
        self._api.remove_image(reference)

    def close(self) -> None:
        with self._lock:
            self._closed = True
            api = self._api
        api.close()


def _checked_progress(stream: Iterator[dict[str, Any]], reference: str) -> Iterator[dict[str, Any]]:
    """Yield pull progress messages, raising on an in-band error message."""
    for message in stream:
        error = message.get("error") if isinstance(message, dict) else None
        if error:
            raise DockerException(f"pull of {reference} failed: {error}")
        yield message
