"""Data-parallel fan-out/join helpers.

Row work is split into contiguous chunks, one per worker, and run on a
ThreadPoolExecutor. NumPy releases the GIL inside its elementwise kernels, so
chunks genuinely overlap. Every helper joins on all of its futures before
returning; nothing outlives the call.
"""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from imagetools.config import Settings, settings


def row_chunks(rows: int, workers: int) -> list[tuple[int, int]]:
    """Split range(rows) into at most ``workers`` contiguous [start, stop) ranges."""
    if rows <= 0:
        return []
    workers = max(1, min(workers, rows))
    chunk = (rows + workers - 1) // workers
    return [(start, min(start + chunk, rows)) for start in range(0, rows, chunk)]


def parallel_rows(
    fn: Callable[[int, int], None],
    rows: int,
    *,
    cost: int | None = None,
    config: Settings | None = None,
) -> None:
    """Call ``fn(start, stop)`` over disjoint row ranges covering range(rows).

    ``cost`` is the number of samples the whole job touches; jobs cheaper than
    ``imagetools_parallel_min_pixels`` run inline since thread start-up would
    dominate. ``fn`` must only write rows in its own range.
    """
    config = config or settings
    ranges = row_chunks(rows, config.worker_count)
    if not ranges:
        return

    if len(ranges) == 1 or (cost is not None and cost < config.imagetools_parallel_min_pixels):
        fn(0, rows)
        return

    with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
        futures: list[Future[None]] = [pool.submit(fn, lo, hi) for lo, hi in ranges]
        for fut in futures:
            fut.result()


def run_concurrently(*tasks: Callable[[], Any]) -> list[Any]:
    """Run independent thunks concurrently; results come back in argument order."""
    if not tasks:
        return []
    if len(tasks) == 1:
        return [tasks[0]()]

    with ThreadPoolExecutor(max_workers=len(tasks)) as pool:
        futures = [pool.submit(task) for task in tasks]
        return [fut.result() for fut in futures]
