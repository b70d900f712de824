"""Bounded thread-pool fan-out that preserves input order."""

from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def map_bounded(fn: Callable[[T], R], items: Sequence[T], *, max_workers: int) -> list[R]:
    """Apply fn to every item on at most max_workers threads.

    Results are re-associated with their input index, so the returned list is in
    input order regardless of completion order. An exception raised by fn
    propagates once every submitted task has finished.

    Raises:
        ValueError: If max_workers is less than 1
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")
    if not items:
        return []

    results: list[R | None] = [None] * len(items)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        future_to_index = {executor.submit(fn, item): index for index, item in enumerate(items)}
        for future in as_completed(future_to_index):
            results[future_to_index[future]] = future.result()

    return results  # type: ignore[return-value]
