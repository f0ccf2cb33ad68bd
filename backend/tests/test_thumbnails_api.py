"""HTTP surface of the resolver, with the cache dependency pointed at a mocked upstream."""
import pytest
from httpx import ASGITransport, AsyncClient

try:
    from backend.app.main import app
    from backend.app.core.resolver import get_thumbnail_cache
except Exception:  # pragma: no cover
    from app.main import app
    from core.resolver import get_thumbnail_cache

from backend.app.utils.thumbnail_cache import CACHE_TTL

YT_URL = "https://www.youtube.com/watch?v=abc123"
YT_MAXRES = "https://img.youtube.com/vi/abc123/maxresdefault.jpg"


@pytest.fixture
async def ac(cache):
    app.dependency_overrides[get_thumbnail_cache] = lambda: cache
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_thumbnail_cache, None)


@pytest.mark.asyncio
async def test_resolve_endpoint_then_cached(ac, upstream):
    upstream.add("HEAD", YT_MAXRES, 200)

    r1 = await ac.get("/api/v1/thumbnails", params={"url": YT_URL})
    assert r1.status_code == 200, r1.text
    assert r1.json() == {
        "url": YT_MAXRES,
        "width": 1280,
        "height": 720,
        "platform": "youtube",
        "cached": False,
    }

    r2 = await ac.get("/api/v1/thumbnails", params={"url": YT_URL})
    assert r2.status_code == 200
    assert r2.json()["cached"] is True
    assert len(upstream.calls) == 1


@pytest.mark.asyncio
async def test_resolve_endpoint_not_found(ac, upstream):
    r = await ac.get("/api/v1/thumbnails", params={"url": "https://example.com/video"})
    assert r.status_code == 404
    assert r.json() == {"detail": "No thumbnail found for URL"}
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_resolve_endpoint_requires_url(ac):
    r = await ac.get("/api/v1/thumbnails")
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_detect_endpoint(ac, upstream):
    r = await ac.get("/api/v1/thumbnails/detect", params={"url": "https://youtu.be/abc123"})
    assert r.json() == {"platform": "youtube", "video_id": "abc123"}

    r = await ac.get("/api/v1/thumbnails/detect", params={"url": "https://pt.example.com/w/uuid-1"})
    assert r.json() == {"platform": "peertube", "video_id": "uuid-1"}

    r = await ac.get("/api/v1/thumbnails/detect", params={"url": "https://vimeo.com/1"})
    assert r.json() == {"platform": "vimeo", "video_id": None}

    r = await ac.get("/api/v1/thumbnails/detect", params={"url": "https://example.com/video"})
    assert r.json() == {"platform": None, "video_id": None}
    assert upstream.calls == []


@pytest.mark.asyncio
async def test_cache_stats_clear_and_prune(ac, upstream, clock):
    upstream.add("HEAD", YT_MAXRES, 200)
    await ac.get("/api/v1/thumbnails", params={"url": YT_URL})

    stats = (await ac.get("/api/v1/thumbnails/cache")).json()
    assert stats == {"size": 1, "keys": [YT_URL]}

    r = await ac.post("/api/v1/thumbnails/cache/prune")
    assert r.json() == {"removed": 0}

    clock.advance(CACHE_TTL)
    r = await ac.post("/api/v1/thumbnails/cache/prune")
    assert r.json() == {"removed": 1}

    await ac.get("/api/v1/thumbnails", params={"url": YT_URL})
    r = await ac.delete("/api/v1/thumbnails/cache")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert (await ac.get("/api/v1/thumbnails/cache")).json() == {"size": 0, "keys": []}
