"""Shared pytest fixtures for the udock test suite."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from udock.config import Settings
from udock.runtime.session import Session
from udock.shared.models import ContainerState, ImageSummary

IMAGE = "hashicorp/http-echo:latest"
CONTAINER_ID = "f00dfeedcafe0123456789abcdef"


@pytest.fixture()
def settings() -> Settings:
    """Return a Settings instance with deadlines short enough for unit tests."""
    return Settings(
        connect_timeout_seconds=0.5,
        image_verify_timeout_seconds=0.5,
        pull_timeout_seconds=0.5,
        create_timeout_seconds=0.5,
        start_timeout_seconds=0.3,
        start_poll_interval_seconds=0.01,
        inspect_timeout_seconds=0.5,
        remove_container_timeout_seconds=0.5,
        remove_image_timeout_seconds=0.5,
    )


@pytest.fixture()
def mock_client() -> MagicMock:
    """Runtime client double: image absent, container running on first inspect."""
    client = MagicMock()
    client.ping.return_value = None
    client.list_images.return_value = []
    client.pull_image.return_value = iter([{"status": "Pulling fs layer"}, {"status": "Download complete"}])
    client.create_container.return_value = CONTAINER_ID
    client.start_container.return_value = None
    client.inspect_container.return_value = ContainerState(id=CONTAINER_ID, status="running", running=True)
    client.remove_container.return_value = None
    client.remove_image.return_value = None
    client.close.return_value = None
    return client


@pytest.fixture()
def image_summary() -> ImageSummary:
    return ImageSummary(id="sha256:0123abcd", repo_tags=[IMAGE])


@pytest.fixture()
def session(mock_client: MagicMock, settings: Settings) -> Session:
    return Session(mock_client, settings)
