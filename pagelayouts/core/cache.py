# pagelayouts/core/cache.py
"""In-memory cache of rendered pages, invalidated by source file signature."""

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import structlog

from pagelayouts.core.context import FileSignature

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    signature: FileSignature
    rendered: str


@dataclass(frozen=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    entries: int = 0


class RenderCache:
    """
    Memoizes rendered output keyed by page identity.

    Disabled caches hold no entries: get always misses and put does nothing.
    Every operation takes a single lock for its own duration only, so two
    threads may both render the same page on a miss and both put; the last
    put wins.
    """

    def __init__(self, enabled: bool = False):
        self._lock = threading.Lock()
        self._entries: Optional[Dict[str, CacheEntry]] = None
        self._hits = self._misses = self._evictions = 0
        self.enable(enabled)

    def enable(self, on: bool) -> None:
        # enabling always starts from an empty cache.
        with self._lock:
            self._entries = {} if on else None
            self._hits = self._misses = self._evictions = 0
        log.debug("render_cache_toggled", enabled=on)

    @property
    def enabled(self) -> bool:
        return self._entries is not None

    def get(self, identity: str, signature: FileSignature) -> Tuple[Optional[str], bool]:
        with self._lock:
            if self._entries is None:
                return None, False
            entry = self._entries.get(identity)
            if entry is None:
                self._misses += 1
                return None, False
            if entry.signature != signature:
                del self._entries[identity]
                self._evictions += 1
                self._misses += 1
                log.debug("render_cache_entry_stale", identity=identity)
                return None, False
            self._hits += 1
            return entry.rendered, True

    def put(self, identity: str, signature: FileSignature, rendered: str) -> None:
        with self._lock:
            if self._entries is None:
                return
            self._entries[identity] = CacheEntry(signature, rendered)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                entries=len(self._entries) if self._entries is not None else 0,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries) if self._entries is not None else 0
