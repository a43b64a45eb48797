"""
Dépendances partagées de l'application web.

Fournit les templates Jinja2 et l'accès aux services du Container DI
(stocké dans app.state.container) sous forme de dépendances FastAPI.
"""

from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..config import APP_VERSION, Settings
from ..container import Container
from ..services.catalog import CatalogService
from ..services.streaming import StreamingService

_WEB_DIR = Path(__file__).parent

templates = Jinja2Templates(directory=_WEB_DIR / "templates")

# Version dynamique, disponible dans tous les templates
templates.env.globals["app_version"] = f"CloudVid v{APP_VERSION}"


def get_container(request: Request) -> Container:
    """Container DI de l'application courante."""
    return request.app.state.container


def get_settings(request: Request) -> Settings:
    return get_container(request).config()


def get_catalog_service(request: Request) -> CatalogService:
    return get_container(request).catalog_service()


def get_streaming_service(request: Request) -> StreamingService:
    return get_container(request).streaming_service()
