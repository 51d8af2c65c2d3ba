"""
First-to-settle race combinator and tracked background tasks.

Used wherever a non-critical action must not gate a critical-path result:

    outcome = await first_settled(refresh_status(), timeout=3.0)
    if outcome.timed_out:
        ...  # refresh abandoned, nothing surfaced

    spawn_background(refresh_and_log(), name="subscription-refresh")
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Coroutine, Generic, Optional, Set, TypeVar

from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Strong references so the event loop does not garbage-collect running tasks
_background_tasks: Set[asyncio.Task] = set()


@dataclass(frozen=True)
class RaceOutcome(Generic[T]):
    """Result of a race. Exactly one of value, error or timed_out describes the winner."""

    value: Optional[T] = None
    error: Optional[BaseException] = None
    timed_out: bool = False
    winner_index: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return not self.timed_out and self.error is None


def _discard(task: asyncio.Task) -> None:
    """Cancel a losing task and swallow whatever it ends with."""
    if not task.done():
        task.cancel()
        return
    if not task.cancelled():
        # Retrieve so asyncio does not warn about an unobserved exception
        task.exception()


async def first_settled(
    *awaitables: Awaitable[T], timeout: Optional[float] = None
) -> RaceOutcome[T]:
    """
    Race awaitables (and an optional timeout); the first to settle wins.

    Losers are cancelled and discarded. A rejection of the winner is captured
    in the outcome instead of being raised, so callers never see an exception
    from the race itself.

    Args:
        *awaitables: Coroutines or futures to race
        timeout: Seconds before the timeout wins the race. None disables it.

    Returns:
        RaceOutcome describing the winner
    """
    if not awaitables:
        raise ValueError("first_settled requires at least one awaitable")

    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        done, pending = await asyncio.wait(
            tasks, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        for task in tasks:
            _discard(task)
        raise

    if not done:
        for task in pending:
            _discard(task)
        return RaceOutcome(timed_out=True)

    # Ties resolve in argument order
    winner_index = next(i for i, task in enumerate(tasks) if task in done)
    winner = tasks[winner_index]
    for task in tasks:
        if task is not winner:
            _discard(task)

    if winner.cancelled():
        return RaceOutcome(
            error=asyncio.CancelledError(), winner_index=winner_index
        )
    error = winner.exception()
    if error is not None:
        return RaceOutcome(error=error, winner_index=winner_index)
    return RaceOutcome(value=winner.result(), winner_index=winner_index)


def _on_background_done(task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.warning(
            f"Background task {task.get_name()} failed: {error}",
            extra={"task_name": task.get_name()},
        )


def spawn_background(coro: Coroutine[Any, Any, Any], name: str) -> asyncio.Task:
    """
    Schedule a coroutine without awaiting it.

    The task is tracked until completion and any exception it raises is
    logged and swallowed.
    """
    task = asyncio.create_task(coro, name=name)
    _background_tasks.add(task)
    task.add_done_callback(_on_background_done)
    return task
