"""
Windowed Batch Utilities
========================

A sort run pushes every document through a rate-limited external API. The
control-flow pattern is always the same:

- Split the work into consecutive windows of at most ``window_size`` items.
- Process one window concurrently in a thread pool and wait for all of it.
- Pause before the next window so the remote API is not hammered.

Each item's result is captured individually and returned in input order, so
callers can fold results sequentially without sharing mutable state between
worker threads.
"""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, Sequence, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def iter_windows(items: Sequence[T], window_size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of ``items`` with at most ``window_size`` elements."""
    window_size = max(1, int(window_size))
    for start in range(0, len(items), window_size):
        yield list(items[start : start + window_size])


def run_windowed_threadpool(
    *,
    job_name: str,
    items: Sequence[T],
    process_item: Callable[[T], R],
    on_error: Callable[[T, Exception], R],
    window_size: int,
    pause_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> list[R]:
    """
    Process ``items`` window by window, returning one result per item.

    Windows run strictly one after another. Within a window every item gets its
    own worker, so at most ``window_size`` calls are in flight at any time.

    Args:
        job_name:
            Name used in log messages.
        items:
            The work items, processed in order.
        process_item:
            Processes a single work item and returns its result.
        on_error:
            Converts an exception escaping ``process_item`` into a result. A
            failing item never affects its siblings.
        window_size:
            Number of items per window and thread pool size.
        pause_seconds:
            Delay between windows. Not applied after the last window.
        sleep:
            Injectable sleep function (primarily for tests).
    """
    window_size = max(1, int(window_size))
    windows = list(iter_windows(items, window_size))
    results: list[R] = []

    for index, window in enumerate(windows, start=1):
        log.info(
            "Processing window",
            job=job_name,
            window=index,
            window_count=len(windows),
            item_count=len(window),
        )
        with ThreadPoolExecutor(max_workers=len(window)) as executor:
            futures = [executor.submit(process_item, item) for item in window]
            for item, future in zip(window, futures):
                try:
                    results.append(future.result())
                except Exception as exc:
                    log.exception("Work item failed", job=job_name, item=str(item))
                    results.append(on_error(item, exc))

        if index < len(windows) and pause_seconds > 0:
            sleep(pause_seconds)

    return results
