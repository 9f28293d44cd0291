"""Domain enumerations."""

from __future__ import annotations

from enum import Enum, unique


@unique
class StartState(str, Enum):
    """Progress of a container from start request to observed running state."""

    REQUESTED = "requested"
    STARTING = "starting"
    RUNNING = "running"
    TIMED_OUT = "timed_out"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (StartState.RUNNING, StartState.TIMED_OUT, StartState.FAILED)
