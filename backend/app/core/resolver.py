from __future__ import annotations

import logging

from fastapi import FastAPI, Request

try:
    from ..utils.fetchers import build_http_client  # type: ignore
    from ..utils.thumbnail_cache import ThumbnailCache  # type: ignore
except Exception:  # pragma: no cover
    from utils.fetchers import build_http_client  # type: ignore
    from utils.thumbnail_cache import ThumbnailCache  # type: ignore

logger = logging.getLogger(__name__)


def init_thumbnail_cache(app: FastAPI) -> ThumbnailCache:
    """Create the application's cache and its shared HTTP client (once per app)."""
    cache = getattr(app.state, "thumbnail_cache", None)
    if cache is None:
        app.state.http_client = build_http_client()
        cache = ThumbnailCache(client=app.state.http_client)
        app.state.thumbnail_cache = cache
    return cache


async def close_thumbnail_cache(app: FastAPI) -> None:
    client = getattr(app.state, "http_client", None)
    app.state.thumbnail_cache = None
    app.state.http_client = None
    if client is not None:
        await client.aclose()
        logger.debug("Closed shared thumbnail HTTP client")


def get_thumbnail_cache(request: Request) -> ThumbnailCache:
    return init_thumbnail_cache(request.app)
