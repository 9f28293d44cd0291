"""Start-and-poll state machine for a created container."""

from __future__ import annotations

import asyncio
import logging

from udock.runtime.deadline import run_blocking
from udock.runtime.interfaces import RuntimeClient
from udock.shared.enums import StartState
from udock.shared.exceptions import ContainerStartFailed

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1


class ContainerStartup:
    """Drive one container from a start request to an observed running state.

    ``run()`` issues the start call and then inspects the container every
    ``poll_interval`` seconds until it reports running. It has no deadline of
    its own; the caller bounds it and calls ``mark_timed_out()`` on expiry.
    Inspect failures are terminal and never retried.
    """

    def __init__(
        self,
        client: RuntimeClient,
        container_id: str,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._client = client
        self.container_id = container_id
        self._poll_interval = poll_interval
        self.state = StartState.REQUESTED
        self.polls = 0

    def _advance(self, state: StartState) -> None:
        logger.debug("container %s: %s -> %s", self.container_id[:12], self.state.value, state.value)
        self.state = state

    def mark_timed_out(self) -> None:
        if not self.state.is_terminal:
            self._advance(StartState.TIMED_OUT)

    async def run(self) -> None:
        """Start the container and wait until it is running.

        Raises:
            ContainerStartFailed: If the start call or an inspection fails.
        """
        try:
            await run_blocking(self._client.start_container, self.container_id)
        except Exception as exc:
            self._advance(StartState.FAILED)
            raise ContainerStartFailed(self.container_id) from exc
        self._advance(StartState.STARTING)

        while True:
            await asyncio.sleep(self._poll_interval)
            self.polls += 1
            try:
                state = await run_blocking(self._client.inspect_container, self.container_id)
            except Exception as exc:
                self._advance(StartState.FAILED)
                raise ContainerStartFailed(self.container_id) from exc
            if state.running:
                self._advance(StartState.RUNNING)
                return
