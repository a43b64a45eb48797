"""
Route de streaming vidéo.

Sert une vidéo du bucket complète (200) ou par plage d'octets (206),
ou redirige vers l'URL publique quand le déploiement en dispose.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import PlainTextResponse, RedirectResponse, StreamingResponse
from loguru import logger

from ...core.exceptions import ObjectStoreError, RangeNotSatisfiableError, VideoNotFoundError
from ...services.streaming import StreamingService
from ...utils.constants import VIDEO_ROUTE
from ..deps import get_streaming_service

router = APIRouter()


@router.get(VIDEO_ROUTE + "/{filename}")
async def stream_video(
    filename: str,
    range_header: Optional[str] = Header(default=None, alias="Range"),
    streaming: StreamingService = Depends(get_streaming_service),
):
    """Flux d'une vidéo, avec support de l'en-tête Range."""
    try:
        video = await streaming.locate(filename)
    except VideoNotFoundError:
        return PlainTextResponse("File not found", status_code=404)
    except ObjectStoreError as e:
        logger.error(f"Listing impossible pour {filename}: {e}")
        return PlainTextResponse("Error streaming video", status_code=500)

    redirect = streaming.redirect_url(video)
    if redirect:
        return RedirectResponse(redirect)

    try:
        stream = await streaming.open(video, range_header)
    except VideoNotFoundError:
        return PlainTextResponse("File not found", status_code=404)
    except RangeNotSatisfiableError as e:
        logger.warning(f"{e} pour {filename}")
        return PlainTextResponse(
            "Range not satisfiable",
            status_code=416,
            headers={"Content-Range": f"bytes */{e.total}"},
        )
    except ObjectStoreError as e:
        logger.error(f"Erreur de streaming pour {filename}: {e}")
        return PlainTextResponse("Error streaming video", status_code=500)

    return StreamingResponse(
        stream.body,
        status_code=stream.status_code,
        headers=stream.headers,
    )
