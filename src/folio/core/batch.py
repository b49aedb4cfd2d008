"""
Batch coordination for independent build items.

A coordinating stage (render every post, write every page) computes one
result per item and folds them with ``aggregate_values`` / ``aggregate``.
Items may run on a thread pool; results are always collected in input order
so the aggregate lists failures in the same order as the items.

Examples:
    >>> from folio.core.result import Ok, error
    >>> run_batch([1, 2, 3], lambda n: Ok(n * 10), "scaling")
    Ok([10, 20, 30])
    >>> result = check_batch(["a", "b"], lambda s: error(f"{s} broke"), "checking")
    >>> [child.error.text for child in result.error.errors]
    ['a broke', 'b broke']
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from folio.core.logging import LogContext, get_logger
from folio.core.result import Result, aggregate, aggregate_values, label_text, succeeded, try_result
from folio.core.settings import get_settings

logger = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


def _call(func: Callable[[T], Result[U]], item: T) -> Result[U]:
    # Exceptions from an item become that item's failure.
    return try_result(lambda: func(item)).flat_map(lambda inner: inner)


def _collect(
    items: Iterable[T],
    func: Callable[[T], Result[U]],
    label: Any,
    max_workers: int | None,
) -> list[Result[U]]:
    items = list(items)
    workers = max_workers if max_workers is not None else get_settings().max_workers
    if workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {workers}")

    with LogContext(batch=label_text(label)):
        logger.debug("batch_started", total=len(items), workers=workers)
        started = time.perf_counter()

        if workers == 1 or len(items) <= 1:
            results = [_call(func, item) for item in items]
        else:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                results = list(pool.map(lambda item: _call(func, item), items))

        failed = sum(1 for result in results if not succeeded(result))
        logger.info(
            "batch_finished",
            total=len(results),
            failed=failed,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
    return results


def run_batch(
    items: Iterable[T],
    func: Callable[[T], Result[U]],
    label: Any,
    *,
    max_workers: int | None = None,
) -> Result[list[U]]:
    """
    Apply ``func`` to every item and aggregate the values.

    Args:
        items: Independent inputs
        func: Returns a Result per item; raised exceptions count as failures
        label: Aggregate label for this stage
        max_workers: Thread count; defaults to ``FOLIO_MAX_WORKERS``

    Returns:
        Ok(values in input order) or Err(Aggregate(label, failures))
    """
    return aggregate_values(_collect(items, func, label, max_workers), label)


def check_batch(
    items: Iterable[T],
    func: Callable[[T], Result[Any]],
    label: Any,
    *,
    max_workers: int | None = None,
) -> Result[None]:
    """Like :func:`run_batch` but only reports pass/fail."""
    return aggregate(_collect(items, func, label, max_workers), label)


__all__ = ["run_batch", "check_batch"]
