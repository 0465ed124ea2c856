"""Affine transforms and the per-engine cache that stores them."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

PairKey = Tuple[str, str]


@dataclass(frozen=True)
class Transform:
    """The map ``y = x * factor + offset``."""

    factor: float
    offset: float = 0.0

    def convert(self, value):
        return value * self.factor + self.offset

    def invert(self) -> "Transform":
        return Transform(1.0 / self.factor, -self.offset / self.factor)


class ConversionCache:
    """Transforms keyed by ``(source identifier, target identifier)``.

    A lookup that misses the requested direction falls back to the reverse
    entry and inverts it. All access goes through one lock; resolution through
    :meth:`get_or_compute` runs under it, so each pair is computed once.
    Entries are never invalidated because units and scales are immutable.
    """

    def __init__(self, *, store_inverse: bool = True) -> None:
        self.store_inverse = store_inverse
        self._lock = threading.RLock()
        self._entries: Dict[PairKey, Transform] = {}
        self.hits = 0
        self.misses = 0

    def lookup(self, source_id: str, target_id: str) -> Optional[Transform]:
        with self._lock:
            transform = self._entries.get((source_id, target_id))
            if transform is not None:
                self.hits += 1
                return transform
            reverse = self._entries.get((target_id, source_id))
            if reverse is not None:
                self.hits += 1
                transform = reverse.invert()
                if self.store_inverse:
                    self._entries[(source_id, target_id)] = transform
                return transform
            self.misses += 1
            return None

    def store(self, source_id: str, target_id: str, transform: Transform) -> None:
        with self._lock:
            self._entries[(source_id, target_id)] = transform

    def get_or_compute(
        self, source_id: str, target_id: str, compute: Callable[[], Transform]
    ) -> Transform:
        with self._lock:
            cached = self.lookup(source_id, target_id)
            if cached is not None:
                logger.debug("Cache hit for %s -> %s", source_id, target_id)
                return cached
            logger.debug("Cache miss for %s -> %s", source_id, target_id)
            transform = compute()
            self._entries[(source_id, target_id)] = transform
            return transform

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["ConversionCache", "Transform"]
