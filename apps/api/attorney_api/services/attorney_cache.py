"""
Attorney Result Cache
In-process store of finished attorney lists keyed by a quantized
(lat, lng, radius) query.

Coordinates are rounded to `precision` decimals (3 ≈ 111 m) and the radius to
whole kilometres, so nearby repeat searches share one entry. Entries expire
after their TTL (checked lazily on read, and by a periodic sweep task), and
the oldest entries are evicted once the store grows past `max_size`.

Single-process only: concurrent writers for the same key simply overwrite
each other. Each mutation is one dict operation on the event loop thread.
"""
from __future__ import annotations

import asyncio
import logging
import math
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from attorney_api.schemas.attorney import AttorneyRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL = 24 * 60 * 60
DEFAULT_MAX_SIZE = 1000
DEFAULT_CLEANUP_INTERVAL = 60 * 60


class CacheEntry:
    def __init__(self, key: str, data: list[AttorneyRecord], timestamp: float, expires_at: float):
        self.key = key
        self.data = data
        self.timestamp = timestamp
        self.expires_at = expires_at

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


def _ts(value: float) -> str:
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


class AttorneyCache:
    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        max_size: int = DEFAULT_MAX_SIZE,
        cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL,
        precision: int = 3,
        clock: Callable[[], float] = time.time,
    ):
        self.default_ttl = default_ttl
        self.max_size = max_size
        self.cleanup_interval = cleanup_interval
        self.precision = precision
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._sweeper: Optional[asyncio.Task] = None
        self.hits = 0
        self.misses = 0

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    def make_key(self, lat: float, lng: float, radius: float) -> str:
        # + 0.0 folds -0.0 into 0.0; radius rounds half up
        return (
            f"attorneys_{round(lat, self.precision) + 0.0}_"
            f"{round(lng, self.precision) + 0.0}_{math.floor(radius + 0.5)}"
        )

    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            logger.debug(f"[Cache] expired: {key}")
            del self._entries[key]
            return None
        return entry

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def get(self, lat: float, lng: float, radius: float) -> Optional[list[AttorneyRecord]]:
        key = self.make_key(lat, lng, radius)
        entry = self._live_entry(key)
        if entry is None:
            self.misses += 1
            logger.debug(f"[Cache] miss: {key}")
            return None
        self.hits += 1
        logger.debug(f"[Cache] hit: {key}")
        return entry.data

    def set(
        self,
        lat: float,
        lng: float,
        radius: float,
        data: list[AttorneyRecord],
        ttl: Optional[float] = None,
    ) -> None:
        key = self.make_key(lat, lng, radius)
        now = self._clock()
        expires_at = now + (ttl if ttl is not None else self.default_ttl)
        self._entries[key] = CacheEntry(key, data, now, expires_at)
        logger.debug(f"[Cache] stored {len(data)} attorneys under {key}, expires {_ts(expires_at)}")

        if len(self._entries) > self.max_size:
            self._enforce_capacity()

    def preload(self, lat: float, lng: float, radius: float, data: list[AttorneyRecord]) -> None:
        self.set(lat, lng, radius, data)

    def has(self, lat: float, lng: float, radius: float) -> bool:
        return self._live_entry(self.make_key(lat, lng, radius)) is not None

    def delete(self, lat: float, lng: float, radius: float) -> bool:
        return self._entries.pop(self.make_key(lat, lng, radius), None) is not None

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"[Cache] cleared {count} entries")
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def get_with_metadata(self, lat: float, lng: float, radius: float) -> dict:
        entry = self._live_entry(self.make_key(lat, lng, radius))
        if entry is None:
            return {"data": None, "metadata": {"cached": False}}
        return {
            "data": entry.data,
            "metadata": {
                "cached": True,
                "timestamp": _ts(entry.timestamp),
                "expires_at": _ts(entry.expires_at),
                "age": self._clock() - entry.timestamp,
            },
        }

    def stats(self) -> dict:
        lookups = self.hits + self.misses
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": round(self.hits / lookups, 3) if lookups else 0.0,
            "entries": [
                {
                    "key": e.key,
                    "timestamp": _ts(e.timestamp),
                    "expires_at": _ts(e.expires_at),
                    "data_count": len(e.data),
                }
                for e in self._entries.values()
            ],
        }

    def is_healthy(self) -> bool:
        return len(self._entries) < self.max_size * 0.9

    # ------------------------------------------------------------------
    # Expiry / eviction
    # ------------------------------------------------------------------

    def purge_expired(self) -> int:
        now = self._clock()
        stale = [k for k, e in self._entries.items() if e.is_expired(now)]
        for k in stale:
            self._entries.pop(k, None)
        if stale:
            logger.info(f"[Cache] purged {len(stale)} expired entries")
        return len(stale)

    def _enforce_capacity(self) -> None:
        self.purge_expired()
        overflow = len(self._entries) - self.max_size
        if overflow <= 0:
            return
        oldest = sorted(self._entries.values(), key=lambda e: e.timestamp)[:overflow]
        for entry in oldest:
            self._entries.pop(entry.key, None)
        logger.info(f"[Cache] evicted {len(oldest)} oldest entries to stay under {self.max_size}")

    # ------------------------------------------------------------------
    # Background sweep
    # ------------------------------------------------------------------

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval)
            self.purge_expired()

    def start(self) -> None:
        """Start the periodic sweep. Needs a running event loop."""
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.get_running_loop().create_task(self._sweep_loop())

    @property
    def running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    def destroy(self) -> None:
        """Stop the sweep task; entries are left in place."""
        if self._sweeper is not None:
            self._sweeper.cancel()
            self._sweeper = None
