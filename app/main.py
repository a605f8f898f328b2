from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from pathlib import Path
import aiohttp
import uvicorn
import logging

from app.core.config import Settings, settings
from app.api.api import api_router
from app.core.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    app_settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting up {app_settings.APP_NAME} on port {app_settings.PORT}")
    logger.info(f"Static root: {Path(app_settings.STATIC_DIR).resolve()}")
    if not app_settings.hub_configured:
        logger.warning("Local hub disabled: HA_BASE_URL, HA_TOKEN or HA_ENTITY_ID is empty")
    if not app_settings.smartthings_configured:
        logger.warning("SMARTTHINGS_TOKEN is empty: cloud registry disabled")

    app.state.http_session = aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=app_settings.UPSTREAM_TIMEOUT_SECONDS)
    )
    logger.info(f"{app_settings.APP_NAME} startup complete")

    yield

    # Shutdown
    logger.info(f"Shutting down {app_settings.APP_NAME}...")
    await app.state.http_session.close()
    app.state.http_session = None


def _resolve_static(static_dir: Path, full_path: str):
    """Return the file to serve for a non-API path, or None"""
    if not static_dir.is_dir():
        return None
    root = static_dir.resolve()
    candidate = (root / full_path).resolve()
    if full_path and candidate.is_file() and root in candidate.parents:
        return candidate
    index = root / "index.html"
    return index if index.is_file() else None


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the ASGI application around one immutable settings object"""
    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Normalized smart-home room status for the dashboard",
        version=app_settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = app_settings
    app.state.http_session = None

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=app_settings.ALLOWED_HOSTS
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    # Include API routes
    app.include_router(api_router, prefix="/api")

    static_dir = Path(app_settings.STATIC_DIR)

    # SPA fallback: every non-API GET serves a static file or index.html
    @app.get("/{full_path:path}", include_in_schema=False)
    async def spa_fallback(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"error": "Not found"})

        target = _resolve_static(static_dir, full_path)
        if target is None:
            return JSONResponse(status_code=404, content={"error": "Not found"})
        return FileResponse(target)

    return app


# Create FastAPI app
setup_logging(settings)
app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
