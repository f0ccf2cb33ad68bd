from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import quote

from .platforms import Platform, extract_youtube_id


YOUTUBE_IMAGE_BASE = "https://img.youtube.com/vi"
VIMEO_OEMBED_ENDPOINT = "https://vimeo.com/api/oembed.json"

# (file name, width, height), best quality first
YOUTUBE_THUMBNAIL_VARIANTS: List[Tuple[str, int, int]] = [
    ("maxresdefault.jpg", 1280, 720),
    ("hqdefault.jpg", 480, 360),
    ("mqdefault.jpg", 320, 180),
]

VIMEO_DEFAULT_SIZE = (640, 360)
# PeerTube's API does not report thumbnail dimensions
PEERTUBE_THUMBNAIL_SIZE = (560, 315)

# Characters left unescaped by JavaScript's encodeURIComponent besides [A-Za-z0-9_.-~]
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class ThumbnailResult:
    url: str
    width: int
    height: int
    platform: Platform
    cached: bool = False


@dataclass(frozen=True)
class ThumbnailCandidate:
    url: str
    width: int
    height: int


def youtube_thumbnail_candidates(url_or_id: str) -> List[ThumbnailCandidate]:
    """Return the static YouTube thumbnail URLs for a video, highest resolution first.

    Not every video has a ``maxresdefault`` image, so callers are expected to probe
    the candidates in order and keep the first one that exists.
    """
    vid = extract_youtube_id(url_or_id)
    if not vid:
        return []
    return [
        ThumbnailCandidate(url=f"{YOUTUBE_IMAGE_BASE}/{vid}/{name}", width=w, height=h)
        for name, w, h in YOUTUBE_THUMBNAIL_VARIANTS
    ]


def vimeo_oembed_url(video_url: str) -> str:
    return f"{VIMEO_OEMBED_ENDPOINT}?url={quote(video_url, safe=_URI_COMPONENT_SAFE)}"


def peertube_api_url(origin: str, video_id: str) -> str:
    return f"{origin}/api/v1/videos/{video_id}"


def positive_int(value: object, default: int) -> int:
    """Coerce an upstream dimension to int; falsy values (None, 0, "") fall back to default."""
    if not value:
        return default
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


def join_origin(origin: str, path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return f"{origin}{path}"
