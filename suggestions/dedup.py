"""Per-job-role de-duplication of question generation requests."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RequestDeduplicator(Generic[T]):
    """At most one in-flight request per key; every caller shares its future.

    Successful results stay cached for the life of the instance, so a role that
    is viewed repeatedly costs one model call. Failed entries are evicted as soon
    as they fail, so asking again starts a fresh attempt. Nothing else is ever
    evicted; memory grows with the number of distinct roles.
    """

    def __init__(self, fetch: Callable[[str], T], *, max_workers: int = 4) -> None:
        self._fetch = fetch
        self._entries: Dict[str, Future] = {}
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="suggestions")

    def get_or_start(self, key: str) -> "Future[T]":
        with self._lock:
            future = self._entries.get(key)
            if future is None or _failed(future):
                logger.info("Starting generation request key=%s", key)
                future = self._executor.submit(self._fetch, key)
                self._entries[key] = future
                future.add_done_callback(partial(self._evict_failed, key))
            return future

    def _evict_failed(self, key: str, future: Future) -> None:
        if _failed(future):
            with self._lock:
                if self._entries.get(key) is future:
                    del self._entries[key]
            logger.info("Evicted failed generation request key=%s", key)

    def cached_keys(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def clear(self, key: Optional[str] = None) -> None:
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)


def _failed(future: Future) -> bool:
    return future.done() and (future.cancelled() or future.exception() is not None)


__all__ = ["RequestDeduplicator"]
