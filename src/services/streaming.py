"""
Proxy de streaming vidéo avec support des requêtes HTTP Range.

Traduit un nom de fichier et un en-tête Range optionnel en lecture
(complète ou partielle) depuis le stockage objet, sans jamais charger
l'objet entier en mémoire.
"""

import re
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from loguru import logger

from src.core.entities import VideoObject
from src.core.exceptions import ObjectStoreError, RangeNotSatisfiableError, VideoNotFoundError
from src.core.ports.object_store import IObjectStore
from src.core.value_objects import ByteRange
from src.services.catalog import CatalogService
from src.utils.constants import VIDEO_CONTENT_TYPE

# Une plage "start-end" ; start obligatoire, end optionnel
_RANGE_SPEC = re.compile(r"^\s*(\d+)\s*-\s*(\d*)\s*$")


def parse_range_header(header: str, total: int) -> ByteRange:
    """
    Parse un en-tête Range de la forme "bytes=<start>-<end>".

    Seule la première plage d'une requête multi-plages est prise en compte.
    `end` vaut total - 1 s'il est absent et est borné à total - 1.

    Args:
        header: Valeur brute de l'en-tête Range
        total: Taille totale de l'objet en octets

    Returns:
        ByteRange satisfiable

    Raises:
        RangeNotSatisfiableError: Unité inconnue, start absent (forme suffixe),
            start > end, ou start au-delà de la fin de l'objet
    """
    unit, sep, ranges = header.partition("=")
    if not sep or unit.strip().lower() != "bytes":
        raise RangeNotSatisfiableError(header, total)

    match = _RANGE_SPEC.match(ranges.split(",")[0])
    if not match:
        raise RangeNotSatisfiableError(header, total)

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else total - 1
    end = min(end, total - 1)
    if start >= total or start > end:
        raise RangeNotSatisfiableError(header, total)
    return ByteRange(start=start, end=end)


@dataclass
class VideoStream:
    """Réponse de streaming prête à être servie : statut, en-têtes, corps."""

    status_code: int
    headers: dict[str, str]
    body: AsyncIterator[bytes]


class StreamingService:
    """
    Proxy entre le client HTTP et le stockage objet.

    Deux modes exclusifs, choisis au déploiement :
    - URL publique configurée : redirection vers le bucket (aucune bande passante serveur)
    - sinon : les octets transitent par le serveur, morceau par morceau
    """

    def __init__(
        self,
        catalog: CatalogService,
        object_store: IObjectStore,
        public_enabled: bool = False,
    ) -> None:
        self._catalog = catalog
        self._store = object_store
        self._public_enabled = public_enabled

    async def locate(self, filename: str) -> VideoObject:
        """
        Résout un nom de fichier en objet via un listing frais.

        Raises:
            VideoNotFoundError: Fichier absent du listing courant
            ObjectStoreError: Listing impossible
        """
        return await self._catalog.find_video(filename)

    def redirect_url(self, video: VideoObject) -> Optional[str]:
        """URL de redirection si le déploiement sert les vidéos publiquement."""
        if not self._public_enabled:
            return None
        return self._store.public_url(video.key)

    async def open(self, video: VideoObject, range_header: Optional[str] = None) -> VideoStream:
        """
        Ouvre le flux d'une vidéo, complet (200) ou partiel (206).

        Raises:
            VideoNotFoundError: L'objet a disparu depuis le listing
            RangeNotSatisfiableError: Plage invalide
            ObjectStoreError: Echec amont avant le premier octet
        """
        metadata = await self._store.head_object(video.key)
        if metadata is None:
            raise VideoNotFoundError(video.filename)
        total = metadata.content_length

        if not range_header or not range_header.strip():
            stream = await self._store.open_object(video.key)
            headers = {
                "Content-Length": str(total),
                "Content-Type": VIDEO_CONTENT_TYPE,
                "Accept-Ranges": "bytes",
            }
            return VideoStream(200, headers, guard_stream(stream.chunks, video.filename))

        byte_range = parse_range_header(range_header, total)
        stream = await self._store.open_object(video.key, byte_range)
        headers = {
            "Content-Range": byte_range.content_range(total),
            "Accept-Ranges": "bytes",
            "Content-Length": str(byte_range.length),
            "Content-Type": VIDEO_CONTENT_TYPE,
        }
        return VideoStream(206, headers, guard_stream(stream.chunks, video.filename))


async def guard_stream(chunks: AsyncIterator[bytes], filename: str) -> AsyncIterator[bytes]:
    """
    Relaie les morceaux et journalise une coupure amont en cours de réponse.

    Les octets déjà envoyés ne sont pas rejoués : l'erreur remonte et la
    connexion est interrompue.
    """
    try:
        async for chunk in chunks:
            yield chunk
    except ObjectStoreError as e:
        logger.error(f"Flux interrompu pour {filename}: {e}")
        raise
    finally:
        aclose = getattr(chunks, "aclose", None)
        if aclose is not None:
            await aclose()
