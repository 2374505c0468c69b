# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Cache store used to persist the corp access token.

:class:`TokenCache` describes the collaborator the token manager needs. Any
object with these methods works, for example a thin adapter over Redis or a
web framework cache. :class:`MemoryTokenCache` is the in-process default.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class TokenCache(Protocol):
    """Key/value store with per-entry time-to-live."""

    def put(self, key: str, value: Any, ttl_seconds: float) -> None: ...

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Any: ...

    def forget(self, key: str) -> None: ...


class MemoryTokenCache:
    """
    Thread-safe in-memory :class:`TokenCache`.

    Entries expire ``ttl_seconds`` after :meth:`put`, measured on a monotonic
    clock. Expired entries are evicted lazily on access.

    :param clock: Time source in seconds. Defaults to :func:`time.monotonic`.
    :type clock: callable or None
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or time.monotonic
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def put(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            if ttl_seconds <= 0:
                self._entries.pop(key, None)
                return
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live(key) is not None

    def get(self, key: str) -> Any:
        """Return the live value for ``key`` or ``None``."""
        with self._lock:
            entry = self._live(key)
            return entry[0] if entry is not None else None

    def forget(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def _live(self, key: str) -> Optional[Tuple[Any, float]]:
        # caller holds the lock
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry[1] <= self._clock():
            del self._entries[key]
            return None
        return entry


__all__ = ["TokenCache", "MemoryTokenCache"]
