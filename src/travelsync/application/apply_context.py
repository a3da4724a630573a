"""
Single-threaded context where completions are applied.

Network completions arrive on arbitrary worker threads. Anything they do to
shared state (cache reloads, caller callbacks) is funneled through one
dedicated thread so those effects never run concurrently.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApplyContext:
    """
    One-worker executor with helpers for blocking and non-blocking dispatch.

    Usage:
        apply = ApplyContext()
        apply.submit(cache.reload)          # fire and forget
        outcome = apply.call(build_outcome) # run there, wait for the result
    """

    def __init__(self) -> None:
        self._thread_id: int | None = None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="apply",
            initializer=self._remember_thread,
        )

    def _remember_thread(self) -> None:
        self._thread_id = threading.get_ident()

    def is_current(self) -> bool:
        """True when called from the apply thread itself."""
        return self._thread_id == threading.get_ident()

    def submit(self, fn: Callable[..., T], *args: Any) -> "Future[T]":
        """Queue `fn` on the apply thread."""
        return self._executor.submit(fn, *args)

    def call(self, fn: Callable[..., T], *args: Any) -> T:
        """Run `fn` on the apply thread and wait for it (inline if already there)."""
        if self.is_current():
            return fn(*args)
        return self._executor.submit(fn, *args).result()

    def shutdown(self) -> None:
        """Finish queued work and stop the thread."""
        self._executor.shutdown(wait=True)
        logger.debug("Apply context stopped")
