"""
Route de la page d'accueil.

Liste les vidéos du bucket, les plus récentes d'abord.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from ...services.catalog import CatalogService
from ..deps import get_catalog_service, templates

router = APIRouter()


@router.get("/")
async def home(request: Request, catalog: CatalogService = Depends(get_catalog_service)):
    """Page d'accueil : liste des vidéos avec vignettes."""
    records = await catalog.videos()
    if not records:
        return PlainTextResponse("No videos found in the bucket.", status_code=404)

    return templates.TemplateResponse(
        request,
        "index.html",
        {"videos": records},
    )
