"""Per-platform thumbnail fetchers.

Each fetcher turns a page URL into a ``ThumbnailResult`` using the platform's
public endpoints:

- YouTube: HEAD probes against the static ``img.youtube.com`` images, best first.
- Vimeo: the oEmbed JSON endpoint.
- PeerTube: the instance's ``/api/v1/videos/{id}`` endpoint.

Fetchers never raise. Transport errors, non-2xx responses and malformed or
incomplete JSON all come back as ``None``.

All fetchers accept an optional shared ``httpx.AsyncClient``; without one a
short-lived client is opened per call using the configured timeout.
"""
from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Dict, Optional

import httpx

try:
    from ..core.config import settings  # type: ignore
except Exception:  # pragma: no cover
    from core.config import settings  # type: ignore
from .images import (
    PEERTUBE_THUMBNAIL_SIZE,
    VIMEO_DEFAULT_SIZE,
    ThumbnailResult,
    join_origin,
    peertube_api_url,
    positive_int,
    vimeo_oembed_url,
    youtube_thumbnail_candidates,
)
from .platforms import Platform, extract_peertube_id, instance_origin

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Accept": "application/json"}


def build_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.http_timeout,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    )


@contextlib.asynccontextmanager
async def _client_scope(client: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the shared client as-is, or a temporary one closed on exit."""
    if client is not None:
        yield client
        return
    async with build_http_client() as own:
        yield own


async def _get_json(client: httpx.AsyncClient, url: str) -> Optional[Dict[str, Any]]:
    resp = await client.get(url, headers=_JSON_HEADERS)
    if not resp.is_success:
        logger.debug("GET %s -> HTTP %s", url, resp.status_code)
        return None
    data = resp.json()
    if not isinstance(data, dict):
        logger.debug("GET %s returned non-object JSON", url)
        return None
    return data


async def fetch_youtube_thumbnail(url: str, client: Optional[httpx.AsyncClient] = None) -> Optional[ThumbnailResult]:
    candidates = youtube_thumbnail_candidates(url)
    if not candidates:
        return None

    try:
        async with _client_scope(client) as http:
            for cand in candidates:
                try:
                    resp = await http.head(cand.url)
                except Exception as e:
                    # A failed probe only rules out this resolution
                    logger.debug("YouTube probe %s failed: %s", cand.url, e)
                    continue
                if resp.is_success:
                    return ThumbnailResult(
                        url=cand.url,
                        width=cand.width,
                        height=cand.height,
                        platform=Platform.youtube,
                        cached=False,
                    )
                logger.debug("YouTube probe %s -> HTTP %s", cand.url, resp.status_code)
    except Exception as e:
        logger.debug("YouTube thumbnail lookup failed for %s: %s", url, e)
    return None


async def fetch_vimeo_thumbnail(url: str, client: Optional[httpx.AsyncClient] = None) -> Optional[ThumbnailResult]:
    try:
        async with _client_scope(client) as http:
            data = await _get_json(http, vimeo_oembed_url(url))
        if not data or not data.get("thumbnail_url"):
            return None
        default_w, default_h = VIMEO_DEFAULT_SIZE
        return ThumbnailResult(
            url=str(data["thumbnail_url"]),
            width=positive_int(data.get("thumbnail_width"), default_w),
            height=positive_int(data.get("thumbnail_height"), default_h),
            platform=Platform.vimeo,
            cached=False,
        )
    except Exception as e:
        logger.debug("Vimeo oEmbed lookup failed for %s: %s", url, e)
        return None


async def fetch_peertube_thumbnail(url: str, client: Optional[httpx.AsyncClient] = None) -> Optional[ThumbnailResult]:
    origin = instance_origin(url)
    video_id = extract_peertube_id(url)
    if not origin or not video_id:
        return None

    try:
        async with _client_scope(client) as http:
            data = await _get_json(http, peertube_api_url(origin, video_id))
        if not data:
            return None
        # Missing thumbnailPath falls back to previewPath
        path = data.get("thumbnailPath")
        if path is None:
            path = data.get("previewPath")
        image_url = join_origin(origin, path)
        if not image_url:
            return None
        width, height = PEERTUBE_THUMBNAIL_SIZE
        return ThumbnailResult(
            url=image_url,
            width=width,
            height=height,
            platform=Platform.peertube,
            cached=False,
        )
    except Exception as e:
        logger.debug("PeerTube lookup failed for %s: %s", url, e)
        return None
