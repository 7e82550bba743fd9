"""Harvesting across adapters and first-occurrence deduplication."""

import contextvars
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterable, List, Sequence

from jobalert.adapters.base import BaseAdapter
from jobalert.domain.models import FilterCriteria, Posting
from jobalert.logging import get_logger

logger = get_logger(__name__, component="aggregator")


def harvest(
    adapters: Sequence[BaseAdapter],
    criteria: FilterCriteria,
    timeout: float = 60.0,
    max_workers: int = 4,
) -> List[List[Posting]]:
    """Run every adapter and return their outputs in declaration order.

    Adapters run concurrently, but the returned list is indexed like
    ``adapters`` regardless of completion order. An adapter still running
    when ``timeout`` seconds have passed, or one that raises despite the
    BaseAdapter contract, contributes an empty list.

    Args:
        adapters: Adapters in declaration order
        criteria: Criteria passed to each adapter's fetch()
        timeout: Time bound for the whole harvest, in seconds
        max_workers: Thread pool size

    Returns:
        One list of postings per adapter
    """
    if not adapters:
        return []

    started = time.monotonic()
    executor = ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(adapters))),
        thread_name_prefix="harvest",
    )
    try:
        # Each worker gets a copy of the caller's log context (run_id)
        futures = [
            executor.submit(contextvars.copy_context().run, adapter.fetch, criteria)
            for adapter in adapters
        ]
        done, _ = wait(futures, timeout=timeout)

        batches: List[List[Posting]] = []
        for adapter, future in zip(adapters, futures):
            if future not in done:
                future.cancel()
                logger.warning(
                    f"{adapter.name} did not finish within {timeout}s; treating as empty",
                    extra={"event": "source.fetch.timeout", "source": adapter.name},
                )
                batches.append([])
                continue
            try:
                batches.append(list(future.result()))
            except Exception as e:
                logger.error(
                    f"{adapter.name} raised instead of returning: {e}",
                    extra={
                        "event": "source.fetch.failed",
                        "source": adapter.name,
                        "error_type": type(e).__name__,
                    },
                    exc_info=True,
                )
                batches.append([])
    finally:
        # Do not block on adapters that overran the time bound
        executor.shutdown(wait=False, cancel_futures=True)

    logger.info(
        f"Harvested {sum(len(b) for b in batches)} postings from {len(adapters)} sources",
        extra={
            "event": "pipeline.harvest.completed",
            "source_count": len(adapters),
            "per_source": {a.name: len(b) for a, b in zip(adapters, batches)},
            "duration_ms": int((time.monotonic() - started) * 1000),
        },
    )
    return batches


def aggregate(batches: Iterable[Iterable[Posting]]) -> List[Posting]:
    """Concatenate adapter outputs and keep the first posting per identity.

    Order is the insertion order of first occurrences; nothing is re-ranked.

    Example:
        >>> [p.identity for p in aggregate([[a, b], [b2, c]])]
        ['A', 'B', 'C']
    """
    seen = set()
    unique: List[Posting] = []
    for batch in batches:
        for posting in batch:
            if posting.identity in seen:
                continue
            seen.add(posting.identity)
            unique.append(posting)
    return unique
