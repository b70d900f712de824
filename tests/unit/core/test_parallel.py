"""Tests for bounded fan-out."""

import threading
import time

import pytest

from depot_sync.core.parallel import map_bounded


def test_results_follow_input_order() -> None:
    # Later items finish first
    def slow_for_small(value: int) -> int:
        time.sleep(0.01 * (5 - value))
        return value * 10

    assert map_bounded(slow_for_small, [0, 1, 2, 3, 4], max_workers=5) == [0, 10, 20, 30, 40]


def test_concurrency_never_exceeds_limit() -> None:
    lock = threading.Lock()
    active = 0
    peak = 0

    def track(value: int) -> int:
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
        time.sleep(0.01)
        with lock:
            active -= 1
        return value

    map_bounded(track, list(range(12)), max_workers=3)

    assert 1 <= peak <= 3


def test_empty_input() -> None:
    assert map_bounded(lambda value: value, [], max_workers=4) == []


def test_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError, match="max_workers"):
        map_bounded(lambda value: value, [1], max_workers=0)


def test_exception_propagates() -> None:
    def boom(value: int) -> int:
        if value == 2:
            raise RuntimeError("boom")
        return value

    with pytest.raises(RuntimeError, match="boom"):
        map_bounded(boom, [1, 2, 3], max_workers=2)
