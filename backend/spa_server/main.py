"""FastAPI application serving the frontend bundle with SPA fallback."""

import argparse
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from spa_server.assets import AssetIndex
from spa_server.config import Settings, settings
from spa_server.database import build_engine, init_db
from spa_server.middleware import CacheControlMiddleware
from spa_server.router import FallbackRouter

logger = logging.getLogger(__name__)

# The catch-all answers every method, like a router-level fallback
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    app_settings: Optional[Settings] = None,
    asset_index: Optional[AssetIndex] = None,
) -> FastAPI:
    """Build the application.

    The asset index is loaded here, before anything listens; a missing
    bundle raises AssetBundleError and the process never starts serving.
    """
    app_settings = app_settings or settings
    if asset_index is None:
        asset_index = AssetIndex.from_directory(app_settings.ASSET_DIR, app_settings.ENTRY_DOCUMENT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application startup and shutdown events."""
        engine = None
        if app_settings.INIT_DATABASE:
            logger.info(f"Using database URL: {app_settings.DATABASE_URL}")
            engine = build_engine(app_settings)
            await init_db(engine)
        app.state.db_engine = engine
        yield
        if engine is not None:
            await engine.dispose()

    # No docs/openapi routes: every extensionless path belongs to the SPA
    app = FastAPI(
        title="SPA Server",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.asset_index = asset_index

    app.add_middleware(GZipMiddleware, minimum_size=app_settings.GZIP_MINIMUM_SIZE)
    app.add_middleware(CacheControlMiddleware, value=app_settings.CACHE_CONTROL)

    # Plain directory service under /assets, outside the fallback router
    static_path = Path(app_settings.STATIC_DIR)
    if static_path.is_dir():
        app.mount("/assets", StaticFiles(directory=str(static_path)), name="assets")
    else:
        logger.warning(f"Static directory {static_path} not found; /assets is not mounted")

    router = FallbackRouter(asset_index, entry_document=app_settings.ENTRY_DOCUMENT)
    app.state.fallback_router = router
    app.add_api_route(
        "/{full_path:path}",
        router.handle,
        methods=FALLBACK_METHODS,
        include_in_schema=False,
    )
    return app


def run(argv=None):
    parser = argparse.ArgumentParser(description="Serve the frontend bundle with SPA fallback.")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
