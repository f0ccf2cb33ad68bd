from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel
try:
    from ..app_meta import __version__, __app_name__, __description__  # type: ignore
except Exception:  # pragma: no cover
    from app_meta import __version__, __app_name__, __description__  # type: ignore


# Load environment variables from .env files without overriding existing env vars.
# Priority: backend/.env first (co-located with app), then project-root/.env as fallback.
from pathlib import Path
_backend_env = Path(__file__).resolve().parents[2] / ".env"
_root_env = Path(__file__).resolve().parents[3] / ".env"
load_dotenv(dotenv_path=str(_backend_env), override=False)
load_dotenv(dotenv_path=str(_root_env), override=False)


def _split_csv(value: str | None) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


class Settings(BaseModel):
    # Name and version are sourced from code, not environment
    app_name: str = __app_name__
    version: str = __version__
    description: str = __description__

    # CORS
    cors_origins: List[str] = _split_csv(os.environ.get("CORS_ORIGINS")) or [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    log_level: str = os.environ.get("APP_LOG_LEVEL", "INFO").upper()

    # Outbound requests to YouTube / Vimeo / PeerTube instances.
    # The cache TTL is a module constant in utils.thumbnail_cache and is not configurable.
    http_timeout: float = _float_env("THUMBNAIL_HTTP_TIMEOUT", 10.0)
    user_agent: str = os.environ.get("THUMBNAIL_USER_AGENT") or f"{__app_name__}/{__version__}"


settings = Settings()
