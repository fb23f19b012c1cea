"""Tests for the fan-out/join helpers."""

import threading
import time

import pytest

from imagetools.config import Settings
from imagetools.engine.parallel import parallel_rows, row_chunks, run_concurrently


@pytest.mark.parametrize(
    "rows,workers,expected",
    [
        (10, 3, [(0, 4), (4, 8), (8, 10)]),
        (3, 8, [(0, 1), (1, 2), (2, 3)]),
        (5, 1, [(0, 5)]),
        (5, 0, [(0, 5)]),
        (0, 4, []),
    ],
)
def test_row_chunks(rows, workers, expected):
    assert row_chunks(rows, workers) == expected


def test_parallel_rows_cover_every_row_once():
    config = Settings(imagetools_max_workers=4, imagetools_parallel_min_pixels=0)
    seen: list[int] = []
    lock = threading.Lock()

    def _rows(lo: int, hi: int) -> None:
        with lock:
            seen.extend(range(lo, hi))

    parallel_rows(_rows, 37, cost=10_000, config=config)
    assert sorted(seen) == list(range(37))


def test_cheap_jobs_run_inline():
    config = Settings(imagetools_max_workers=4, imagetools_parallel_min_pixels=1_000)
    calls: list[tuple[int, int, int]] = []

    def _rows(lo: int, hi: int) -> None:
        calls.append((lo, hi, threading.get_ident()))

    parallel_rows(_rows, 20, cost=999, config=config)
    assert calls == [(0, 20, threading.get_ident())]


def test_worker_errors_propagate():
    config = Settings(imagetools_max_workers=4, imagetools_parallel_min_pixels=0)

    def _rows(lo: int, hi: int) -> None:
        if lo > 0:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        parallel_rows(_rows, 8, config=config)


def test_run_concurrently_keeps_argument_order():
    def _slow():
        time.sleep(0.05)
        return "slow"

    assert run_concurrently(_slow, lambda: "fast") == ["slow", "fast"]
    assert run_concurrently(lambda: 1) == [1]
    assert run_concurrently() == []


def test_worker_count():
    assert Settings(imagetools_max_workers=3).worker_count == 3
    assert Settings(imagetools_max_workers=0).worker_count >= 1
