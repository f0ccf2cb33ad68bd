from fastapi import APIRouter

try:
    from ...core.config import settings  # type: ignore
    from ...utils.platforms import Platform  # type: ignore
    from ...utils.thumbnail_cache import CACHE_TTL  # type: ignore
except Exception:  # pragma: no cover
    from core.config import settings  # type: ignore
    from utils.platforms import Platform  # type: ignore
    from utils.thumbnail_cache import CACHE_TTL  # type: ignore

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/info")
def info():
    """Service name and version, plus what the resolver supports."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "platforms": [p.value for p in Platform],
        "cache_ttl_seconds": int(CACHE_TTL),
    }
