import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

T = TypeVar("T")


def resolve_workers(workers: int | None) -> int:
    """Return a concrete worker count, defaulting to the number of CPUs."""
    if workers is None:
        return os.cpu_count() or 1
    return max(1, workers)


def row_bands(rows: int, workers: int) -> list[tuple[int, int]]:
    """Split ``range(rows)`` into at most ``workers`` contiguous, disjoint bands."""
    count = max(1, min(workers, rows))
    base, extra = divmod(rows, count)
    bands = []
    start = 0
    for i in range(count):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


def map_bands(func: Callable[[int, int], T], rows: int, workers: int | None = None) -> list[T]:
    """Apply ``func(start, stop)`` to each row band and return results in band order.

    Every band covers a disjoint range of rows and ``func`` must only read shared
    inputs, so the joined result does not depend on the worker count.
    """
    n = resolve_workers(workers)
    bands = row_bands(rows, n)
    if n == 1 or len(bands) == 1:
        return [func(start, stop) for start, stop in bands]
    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures = [pool.submit(func, start, stop) for start, stop in bands]
        return [f.result() for f in futures]
