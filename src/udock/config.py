"""Centralised configuration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = {"env_prefix": "UDOCK_", "frozen": True}

    # Docker connection
    # Overrides DOCKER_HOST when set. TLS settings still come from DOCKER_TLS_VERIFY / DOCKER_CERT_PATH.
    docker_host: str | None = None
    # "auto" negotiates the API version on the first successful ping.
    api_version: str = "auto"
    # Socket timeout for individual HTTP requests to the daemon. Abandoned calls end when this fires.
    request_timeout_seconds: float = 60.0

    # Per-operation deadlines
    connect_timeout_seconds: float = 10.0
    image_verify_timeout_seconds: float = 10.0
    # Image downloads are bandwidth-bound
    pull_timeout_seconds: float = 60.0
    create_timeout_seconds: float = 10.0
    # Covers the start call and polling until the container reports running
    start_timeout_seconds: float = 10.0
    start_poll_interval_seconds: float = 0.1
    inspect_timeout_seconds: float = 10.0
    remove_container_timeout_seconds: float = 10.0
    remove_image_timeout_seconds: float = 10.0


def get_settings() -> Settings:
    """Factory, allows overriding in tests."""
    return Settings()
