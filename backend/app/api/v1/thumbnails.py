from fastapi import APIRouter, Depends, HTTPException, Query

try:
    from ...core.resolver import get_thumbnail_cache  # type: ignore
    from ...schemas.thumbnails import CacheStatsRead, PlatformDetection, PruneResult, ThumbnailRead  # type: ignore
    from ...utils.platforms import Platform, detect_platform, extract_peertube_id, extract_youtube_id  # type: ignore
    from ...utils.thumbnail_cache import ThumbnailCache  # type: ignore
except Exception:  # pragma: no cover
    from core.resolver import get_thumbnail_cache  # type: ignore
    from schemas.thumbnails import CacheStatsRead, PlatformDetection, PruneResult, ThumbnailRead  # type: ignore
    from utils.platforms import Platform, detect_platform, extract_peertube_id, extract_youtube_id  # type: ignore
    from utils.thumbnail_cache import ThumbnailCache  # type: ignore


router = APIRouter(prefix="/thumbnails", tags=["thumbnails"])


@router.get("", response_model=ThumbnailRead)
async def resolve_thumbnail(
    url: str = Query(..., min_length=1, description="Public video page URL"),
    cache: ThumbnailCache = Depends(get_thumbnail_cache),
):
    result = await cache.resolve(url)
    if result is None:
        raise HTTPException(status_code=404, detail="No thumbnail found for URL")
    return ThumbnailRead.model_validate(result)


@router.get("/detect", response_model=PlatformDetection)
def detect(url: str = Query(..., min_length=1, description="Public video page URL")):
    """Classify a URL without any network call."""
    platform = detect_platform(url)
    video_id = None
    if platform == Platform.youtube:
        video_id = extract_youtube_id(url)
    elif platform == Platform.peertube:
        video_id = extract_peertube_id(url)
    return PlatformDetection(platform=platform, video_id=video_id)


@router.get("/cache", response_model=CacheStatsRead)
def cache_stats(cache: ThumbnailCache = Depends(get_thumbnail_cache)):
    stats = cache.stats()
    return CacheStatsRead(size=stats.size, keys=list(stats.keys))


@router.delete("/cache")
def clear_cache(cache: ThumbnailCache = Depends(get_thumbnail_cache)):
    cache.clear()
    return {"status": "ok"}


@router.post("/cache/prune", response_model=PruneResult)
def prune_cache(cache: ThumbnailCache = Depends(get_thumbnail_cache)):
    return PruneResult(removed=cache.prune_expired())
