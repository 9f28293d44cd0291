"""Deadline enforcement for blocking runtime calls."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any, TypeVar

from udock.shared.exceptions import OperationTimedOut

T = TypeVar("T")


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking call in the loop's default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))


async def bounded(operation: str, timeout: float, work: Awaitable[T]) -> T:
    """Await ``work`` within ``timeout`` seconds.

    On expiry the awaiting coroutine is cancelled. A blocking call already
    running in the executor is abandoned and finishes on its own.

    Raises:
        OperationTimedOut: If the deadline passes first.
    """
    try:
        return await asyncio.wait_for(work, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise OperationTimedOut(operation, timeout) from exc
