"""
In-memory TTL cache and entry point for thumbnail resolution.

Entries are keyed by the exact input URL (no canonicalization) and only
successful resolutions are stored. Store access is guarded by a lock so the
synchronous maintenance calls (stats, clear, prune) can run from a worker
thread while the event loop resolves.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import httpx

from .fetchers import fetch_peertube_thumbnail, fetch_vimeo_thumbnail, fetch_youtube_thumbnail
from .images import ThumbnailResult
from .platforms import Platform, detect_platform

logger = logging.getLogger(__name__)

# 24 hours, in seconds
CACHE_TTL: float = 60 * 60 * 24


@dataclass
class CacheEntry:
    result: ThumbnailResult
    timestamp: float


@dataclass(frozen=True)
class CacheStats:
    size: int
    keys: Tuple[str, ...]


class ThumbnailCache:
    """Resolve video thumbnails and keep successful results for ``CACHE_TTL`` seconds."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        # Fetches in progress, keyed like the store; concurrent callers share one task
        self._inflight: Dict[str, asyncio.Future[Optional[ThumbnailResult]]] = {}

    async def resolve(self, url: str) -> Optional[ThumbnailResult]:
        with self._lock:
            entry = self._entries.get(url)
            if entry is not None:
                if self._clock() - entry.timestamp < CACHE_TTL:
                    logger.debug("Thumbnail cache hit for %s", url)
                    return dataclasses.replace(entry.result, cached=True)
                del self._entries[url]
                logger.debug("Thumbnail cache entry expired for %s", url)

        platform = detect_platform(url)
        if platform is None:
            logger.debug("Unsupported video URL: %s", url)
            return None

        task = self._inflight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(platform, url))
            self._inflight[url] = task
        # Shielded so one cancelled caller does not abort the fetch for the others
        return await asyncio.shield(task)

    async def _fetch_and_store(self, platform: Platform, url: str) -> Optional[ThumbnailResult]:
        try:
            result = await self._fetch(platform, url)
            if result is not None:
                with self._lock:
                    self._entries[url] = CacheEntry(result=result, timestamp=self._clock())
                logger.info("Resolved %s thumbnail for %s -> %s", platform.value, url, result.url)
            else:
                logger.info("No %s thumbnail found for %s", platform.value, url)
            return result
        finally:
            self._inflight.pop(url, None)

    async def _fetch(self, platform: Platform, url: str) -> Optional[ThumbnailResult]:
        if platform is Platform.youtube:
            return await fetch_youtube_thumbnail(url, client=self._client)
        if platform is Platform.vimeo:
            return await fetch_vimeo_thumbnail(url, client=self._client)
        if platform is Platform.peertube:
            return await fetch_peertube_thumbnail(url, client=self._client)
        raise ValueError(f"Unhandled platform: {platform!r}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(size=len(self._entries), keys=tuple(self._entries))

    def prune_expired(self) -> int:
        """Remove entries whose age is at least ``CACHE_TTL``; return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if now - e.timestamp >= CACHE_TTL]
            for k in expired:
                del self._entries[k]
        if expired:
            logger.info("Pruned %d expired thumbnail cache entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
