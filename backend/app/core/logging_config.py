from __future__ import annotations

from typing import Any, Dict
import logging
from logging.config import dictConfig

# Loggers that share the application handler; uvicorn.access gets its own format
_APP_LOGGERS = ("uvicorn", "uvicorn.error", "backend", "backend.app")


def _coerce_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def get_uvicorn_log_config(level: int | str = logging.INFO, use_colors: bool = True) -> Dict[str, Any]:
    """Return a logging dictConfig for uvicorn and the resolver loggers.

    Timestamps are HH:MM:SS; uvicorn's formatters provide the colored level prefix.
    """
    lvl = _coerce_level(level)
    time_format = "%H:%M:%S"

    def _handler(formatter: str) -> Dict[str, Any]:
        return {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "level": lvl,
            "stream": "ext://sys.stdout",
        }

    loggers: Dict[str, Any] = {
        name: {"handlers": ["default"], "level": lvl, "propagate": False} for name in _APP_LOGGERS
    }
    loggers["uvicorn.access"] = {"handlers": ["access"], "level": lvl, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(asctime)s %(levelprefix)s [%(name)s] %(message)s",
                "datefmt": time_format,
                "use_colors": use_colors,
            },
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": "%(asctime)s %(levelprefix)s %(client_addr)s - \"%(request_line)s\" %(status_code)s",
                "datefmt": time_format,
                "use_colors": use_colors,
            },
        },
        "handlers": {"default": _handler("default"), "access": _handler("access")},
        "loggers": loggers,
        "root": {"handlers": ["default"], "level": lvl},
    }


def configure_logging(level: int | str = logging.INFO) -> None:
    """Apply the dictConfig, falling back to basicConfig when uvicorn's formatters are unavailable."""
    try:
        dictConfig(get_uvicorn_log_config(level))
    except (ImportError, ValueError):
        logging.basicConfig(
            level=_coerce_level(level),
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )
