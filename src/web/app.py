"""
Application FastAPI de CloudVid.

Initialise l'application web avec le Container DI, configure le CORS,
le cache de vignettes servi en statique et monte les routes.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from ..container import Container
from ..utils.constants import FALLBACK_THUMBNAIL_URL, THUMBNAIL_ROUTE
from .routes.api import router as api_router
from .routes.home import router as home_router
from .routes.video import router as video_router

_WEB_DIR = Path(__file__).parent
_DEFAULT_THUMBNAIL = _WEB_DIR / "static" / "default-thumbnail.png"


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application FastAPI.

    Args:
        container: Container DI à utiliser (un nouveau par défaut).
            Les tests passent un container dont les adaptateurs sont surchargés.
    """
    container = container or Container()
    settings = container.config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Crée les répertoires du cache au démarrage."""
        settings.ensure_directories()
        logger.info(
            "CloudVid démarré",
            bucket=settings.bucket_name,
            public=settings.public_enabled,
        )
        yield

    app = FastAPI(title="CloudVid", lifespan=lifespan)
    app.state.container = container

    # Le catalogue est consommé par des clients d'autres origines (application mobile)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Vignettes du cache local
    app.mount(
        THUMBNAIL_ROUTE,
        StaticFiles(directory=settings.thumbnail_cache_dir, check_dir=False),
        name="thumbnails",
    )

    @app.get(FALLBACK_THUMBNAIL_URL, include_in_schema=False)
    async def default_thumbnail():
        """Vignette de repli servie quand aucune vignette n'est disponible."""
        return FileResponse(_DEFAULT_THUMBNAIL, media_type="image/png")

    # Routes
    app.include_router(home_router)
    app.include_router(api_router)
    app.include_router(video_router)
    return app


app = create_app()
