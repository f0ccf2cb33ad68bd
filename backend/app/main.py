from fastapi import FastAPI
import logging
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

# Support both execution modes:
# - "uvicorn backend.app.main:app" (package-relative imports)
# - "uvicorn main:app" with sys.path pointing to backend/app (flat imports)
try:
    from .core.config import settings  # type: ignore
    from .core.logging_config import configure_logging  # type: ignore
    from .core.resolver import init_thumbnail_cache, close_thumbnail_cache  # type: ignore
    from .api.v1.health import router as health_router  # type: ignore
    from .api.v1.thumbnails import router as thumbnails_router  # type: ignore
except Exception:  # pragma: no cover
    from core.config import settings  # type: ignore
    from core.logging_config import configure_logging  # type: ignore
    from core.resolver import init_thumbnail_cache, close_thumbnail_cache  # type: ignore
    from api.v1.health import router as health_router  # type: ignore
    from api.v1.thumbnails import router as thumbnails_router  # type: ignore

# Apply logging configuration as early as possible (module import time)
configure_logging(settings.log_level)
logger = logging.getLogger("backend.app")

tags_metadata = [
    {"name": "health", "description": "Health checks and basic service info."},
    {"name": "thumbnails", "description": "Resolve video thumbnails and manage the resolution cache."},
]

app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description=settings.description,
    openapi_tags=tags_metadata,
    # Serve docs under /api/* to match API prefix
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    contact={"name": settings.app_name},
    license_info={
        "name": "MIT",
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    init_thumbnail_cache(app)
    logger.info(
        "%s %s started (http_timeout=%.1fs)", settings.app_name, settings.version, settings.http_timeout
    )


@app.on_event("shutdown")
async def on_shutdown():
    await close_thumbnail_cache(app)


# Routes
app.include_router(health_router, prefix="/api/v1")
app.include_router(thumbnails_router, prefix="/api/v1")


@app.get("/api")
def api_root():
    return {"name": settings.app_name, "version": settings.version}


# Convenience redirects for default FastAPI docs paths
@app.get("/docs", include_in_schema=False)
async def docs_redirect():
    return RedirectResponse(url="/api/docs")


@app.get("/redoc", include_in_schema=False)
async def redoc_redirect():
    return RedirectResponse(url="/api/redoc")
