"""
Routes JSON du catalogue consommées par les clients (application mobile, page web).

Les routes de listing ne renvoient jamais d'erreur amont : un bucket
injoignable donne un tableau vide.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ...config import Settings
from ...services.catalog import CatalogService
from ..deps import get_catalog_service, get_settings

router = APIRouter(prefix="/api")


@router.get("/app_version")
async def app_version(settings: Settings = Depends(get_settings)):
    """Dernière version publiée de l'application cliente."""
    return {"latest_version": settings.latest_app_version}


@router.get("/show_update_dialog_command")
async def show_update_dialog_command(settings: Settings = Depends(get_settings)):
    return {"show_dialog": settings.show_update_dialog}


@router.get("/videos")
async def list_videos(
    series_title: Optional[str] = None,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Toutes les vidéos, les plus récentes d'abord, filtrables par série."""
    records = await catalog.videos(series_title)
    return [record.to_dict() for record in records]


@router.get("/series")
async def list_series(catalog: CatalogService = Depends(get_catalog_service)):
    """Séries agrégées, les plus récemment mises à jour d'abord."""
    return [aggregate.to_dict() for aggregate in await catalog.series()]


@router.get("/series/{series_title}")
async def series_videos(
    series_title: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Episodes d'une série dans l'ordre de lecture."""
    records = await catalog.series_videos(series_title)
    return [record.to_dict() for record in records]


@router.get("/search")
async def search(
    q: str = "",
    catalog: CatalogService = Depends(get_catalog_service),
):
    records = await catalog.search(q)
    return [record.to_dict() for record in records]
