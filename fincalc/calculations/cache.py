"""
Calculation result cache.

A bounded LRU keyed by calculator name and input tuple. Calculations are
pure, so a cached result is identical to a fresh one; the cache is passed
in explicitly rather than living in module state.
"""

import logging
from collections import OrderedDict
from threading import Lock
from typing import Any, Callable, Hashable, Tuple

logger = logging.getLogger(__name__)


class CalculationCache:
    """Least-recently-used cache for calculation results."""

    def __init__(self, maxsize: int = 100):
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self.maxsize = maxsize
        self._entries: "OrderedDict[Tuple[str, Hashable], Any]" = OrderedDict()
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, kind: str, args: Hashable, compute: Callable[[], Any]) -> Any:
        """
        Return the cached result for (kind, args), computing it on a miss.

        Exceptions from ``compute`` propagate and nothing is stored.
        """
        key = (kind, args)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]
            self.misses += 1

        result = compute()

        if self.maxsize == 0:
            return result

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cached {evicted[0]} result")

        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Tuple[str, Hashable]) -> bool:
        with self._lock:
            return key in self._entries
