"""Time-based cache for backend list responses."""

from __future__ import annotations

import copy
import time
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class TtlCache(Generic[T]):
    """Single-slot cache whose value expires ``ttl`` seconds after it was stored.

    Expiry is checked on read; nothing is evicted in the background. A
    ``ttl`` of ``0`` disables caching entirely.
    """

    def __init__(self, ttl: float, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._value: T | None = None
        self._stored_at: float | None = None

    @property
    def ttl(self) -> float:
        return self._ttl

    def is_valid(self) -> bool:
        if self._value is None or self._stored_at is None:
            return False
        return (self._clock() - self._stored_at) < self._ttl

    def get(self) -> T | None:
        """Return a copy of the cached value, or ``None`` when empty or expired."""
        if not self.is_valid():
            return None
        return copy.copy(self._value)

    def set(self, value: T) -> None:
        self._value = copy.copy(value)
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._value = None
        self._stored_at = None
