"""Gather-with-per-task-fallback fan-out.

Spawns one task per item, waits for every task, and substitutes a fallback
for any task that raised. A failing task never cancels its siblings.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_with_fallback(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    fallback: Callable[[T, BaseException], R],
    *,
    label: str = "task",
) -> list[R]:
    """
    Run worker(item) for every item concurrently.

    Args:
        items: Inputs, one task each
        worker: Async function producing the result for one item
        fallback: Called with (item, error) when that item's worker raised
        label: Name used in log lines

    Returns:
        Results in input order, fallbacks in place of failures
    """
    if not items:
        return []

    outcomes = await asyncio.gather(
        *(worker(item) for item in items),
        return_exceptions=True,
    )

    results: list[R] = []
    failures = 0
    for item, outcome in zip(items, outcomes, strict=True):
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, BaseException):
            failures += 1
            logger.warning(f"{label} failed, using fallback: {type(outcome).__name__}: {outcome}")
            results.append(fallback(item, outcome))
        else:
            results.append(outcome)

    if failures:
        logger.info(f"{label}: {len(items) - failures}/{len(items)} succeeded, {failures} fell back")
    return results
