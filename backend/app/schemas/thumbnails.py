from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

try:
    from ..utils.platforms import Platform
except Exception:  # pragma: no cover
    from utils.platforms import Platform  # type: ignore


class ThumbnailRead(BaseModel):
    url: str
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    platform: Platform
    cached: bool = False

    class Config:
        from_attributes = True


class PlatformDetection(BaseModel):
    platform: Optional[Platform] = None
    video_id: Optional[str] = None


class CacheStatsRead(BaseModel):
    size: int
    keys: List[str]


class PruneResult(BaseModel):
    removed: int
