"""Platform detection and video id extraction for supported video hosts."""
from __future__ import annotations

import re
from enum import Enum
from typing import Optional
from urllib.parse import SplitResult, urlsplit


class Platform(str, Enum):
    youtube = "youtube"
    vimeo = "vimeo"
    peertube = "peertube"


_YT_ID_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&?/]+)"),
    re.compile(r"youtube\.com/v/([^&?/]+)"),
    re.compile(r"youtube\.com/shorts/([^&?/]+)"),
]

# PeerTube ids are UUIDs (36 chars) or short UUIDs (22 chars)
_PEERTUBE_ID_PATTERN = re.compile(r"/(?:videos/watch|w)/([a-zA-Z0-9-]{1,36})(?![a-zA-Z0-9-])")

_PEERTUBE_PATH_MARKERS = ("/videos/watch/", "/w/")

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _parse_url(url: str) -> Optional[SplitResult]:
    """Split an absolute URL; return None for anything without scheme and host."""
    if not url:
        return None
    try:
        parts = urlsplit(url.strip())
        # Accessing .port validates it (raises ValueError when out of range)
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    return parts


def detect_platform(url: str) -> Optional[Platform]:
    parts = _parse_url(url)
    if parts is None:
        return None

    hostname = (parts.hostname or "").lower()
    if "youtube.com" in hostname or "youtu.be" in hostname:
        return Platform.youtube
    if "vimeo.com" in hostname:
        return Platform.vimeo
    # Self-hosted PeerTube instances can live on any domain, so match on the raw path shape
    if any(marker in url for marker in _PEERTUBE_PATH_MARKERS):
        return Platform.peertube
    return None


def extract_youtube_id(url: str) -> Optional[str]:
    if not url:
        return None
    for pat in _YT_ID_PATTERNS:
        m = pat.search(url)
        if m and m.group(1):
            return m.group(1)
    return None


def extract_peertube_id(url: str) -> Optional[str]:
    if not url:
        return None
    m = _PEERTUBE_ID_PATTERN.search(url)
    return m.group(1) if m else None


def instance_origin(url: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` for a URL, like a browser's ``URL.origin``.

    Credentials are dropped and the port is omitted when it is the scheme default.
    """
    parts = _parse_url(url)
    if parts is None:
        return None
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"
