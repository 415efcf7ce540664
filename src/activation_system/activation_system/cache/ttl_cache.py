from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Optional

from ..core.constants import DEFAULT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class _Entry:
    value: Any
    stored_at: float


class TTLCache:
    """Time-boxed key/value cache.

    Entries older than ``ttl_seconds`` are treated as absent. Writers call
    ``invalidate`` for the keys they touch; nothing else evicts entries.
    ``clock`` is injectable so tests can move time forward.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS, *, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._entries: dict[Hashable, _Entry] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        value = self._lookup(key)
        if value is not _MISSING:
            logger.debug("cache hit: %s", key)
            return value
        logger.debug("cache miss: %s", key)
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def is_fresh(self, key: Hashable) -> bool:
        return self._lookup(key) is not _MISSING

    def summary(self) -> dict[str, str]:
        """Size of each fresh entry, for debugging."""
        out: dict[str, str] = {}
        for key in list(self._entries):
            value = self._lookup(key)
            if value is _MISSING:
                continue
            out[str(key)] = f"{len(value)} items" if isinstance(value, (list, tuple)) else type(value).__name__
        return out

    def _lookup(self, key: Hashable) -> Any:
        entry: Optional[_Entry] = self._entries.get(key)
        if entry is None:
            return _MISSING
        if self._clock() - entry.stored_at >= self._ttl:
            self._entries.pop(key, None)
            return _MISSING
        return entry.value
