"""
Service de cache des vignettes (cache-aside à trois niveaux).

Pour chaque vidéo, dans l'ordre et en s'arrêtant au premier succès :
1. LOCAL_HIT   : l'image est déjà dans le cache disque local
2. REMOTE_HIT  : l'image existe dans le bucket sous thumbnails/ → téléchargée
3. GENERATED   : la vidéo est téléchargée dans un fichier temporaire et ffmpeg
                 en extrait une image à 5 secondes
4. FALLBACK    : tout a échoué → vignette statique par défaut

Une seule génération est en cours à la fois pour un même fichier
(single-flight) ; les appelants concurrents partagent son résultat.
"""

import asyncio
import os
import tempfile
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import AsyncIterator, Optional

from loguru import logger

from src.core.entities import VideoObject
from src.core.exceptions import ObjectStoreError
from src.core.ports.object_store import IObjectStore
from src.core.ports.thumbnails import IThumbnailExtractor
from src.utils.constants import (
    FALLBACK_THUMBNAIL_URL,
    THUMBNAIL_CONTENT_TYPE,
    THUMBNAIL_EXTENSION,
    THUMBNAIL_ROUTE,
)


class ThumbnailState(Enum):
    """Etat final de la résolution d'une vignette."""

    LOCAL_HIT = "local_hit"
    REMOTE_HIT = "remote_hit"
    GENERATED = "generated"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ThumbnailResult:
    """Résultat de résolution : état atteint et référence à servir au client."""

    state: ThumbnailState
    url: str


def thumbnail_name(filename: str) -> str:
    """Nom déterministe de la vignette : même nom de base, extension image."""
    return f"{PurePath(filename).stem}{THUMBNAIL_EXTENSION}"


class ThumbnailService:
    """
    Résout la vignette d'une vidéo sans jamais lever d'exception.

    Le cache local est le seul emplacement qui fait foi pour thumbnail_url ;
    la copie distante évite seulement de régénérer l'image. Un échec ne laisse
    jamais de fichier partiel dans le cache, pour que la prochaine requête
    retente la génération.
    """

    def __init__(
        self,
        object_store: IObjectStore,
        extractor: IThumbnailExtractor,
        cache_dir: Path,
        remote_prefix: str = "thumbnails/",
        timestamp: float = 5.0,
        size: str = "320x240",
        upload_generated: bool = False,
        temp_dir: Optional[Path] = None,
        max_concurrent_generations: int = 2,
    ) -> None:
        self._store = object_store
        self._extractor = extractor
        self._cache_dir = Path(cache_dir)
        self._remote_prefix = remote_prefix
        self._timestamp = timestamp
        self._size = size
        self._upload_generated = upload_generated
        # hors du répertoire servi en statique : aucun fichier partiel n'est exposé
        self._work_dir = Path(temp_dir) if temp_dir else self._cache_dir.parent
        self._generation_slots = asyncio.Semaphore(max_concurrent_generations)
        self._inflight: dict[str, asyncio.Task] = {}

    def cache_path(self, filename: str) -> Path:
        return self._cache_dir / thumbnail_name(filename)

    def remote_key(self, filename: str) -> str:
        return f"{self._remote_prefix}{thumbnail_name(filename)}"

    @staticmethod
    def local_url(filename: str) -> str:
        return f"{THUMBNAIL_ROUTE}/{thumbnail_name(filename)}"

    async def resolve(self, video: VideoObject) -> ThumbnailResult:
        """
        Retourne la référence de vignette d'une vidéo.

        Args:
            video: Objet vidéo issu du listing

        Returns:
            ThumbnailResult ; url vaut FALLBACK_THUMBNAIL_URL en cas d'échec.
        """
        path = self.cache_path(video.filename)
        if await asyncio.to_thread(path.exists):
            return ThumbnailResult(ThumbnailState.LOCAL_HIT, self.local_url(video.filename))

        name = path.name
        task = self._inflight.get(name)
        if task is None:
            task = asyncio.create_task(self._populate(video, path))
            self._inflight[name] = task
            task.add_done_callback(lambda _t, n=name: self._inflight.pop(n, None))
        # shield : l'annulation d'un appelant n'interrompt pas les autres
        return await asyncio.shield(task)

    async def _populate(self, video: VideoObject, path: Path) -> ThumbnailResult:
        """Niveaux 2 à 4 : bucket, génération, fallback."""
        url = self.local_url(video.filename)

        # une génération précédente a pu se terminer depuis le test d'existence de l'appelant
        if await asyncio.to_thread(path.exists):
            return ThumbnailResult(ThumbnailState.LOCAL_HIT, url)

        if await self._fetch_remote(video.filename, path):
            logger.info(f"Vignette téléchargée depuis le bucket pour {video.filename}")
            return ThumbnailResult(ThumbnailState.REMOTE_HIT, url)

        logger.info(f"Génération de la vignette pour {video.filename}...")
        try:
            async with self._generation_slots:
                await self._generate(video, path)
        except Exception as e:
            logger.error(f"Impossible de générer la vignette de {video.filename}: {e}")
            return ThumbnailResult(ThumbnailState.FALLBACK, FALLBACK_THUMBNAIL_URL)

        if self._upload_generated:
            await self._upload(video.filename, path)
        return ThumbnailResult(ThumbnailState.GENERATED, url)

    async def _fetch_remote(self, filename: str, path: Path) -> bool:
        """Télécharge la vignette depuis le bucket. Tout échec vaut absence."""
        key = self.remote_key(filename)
        try:
            if await self._store.head_object(key) is None:
                return False
            async with self._staged_file(path) as staging:
                await self._store.download_file(key, staging)
        except (ObjectStoreError, OSError) as e:
            logger.warning(f"Vignette distante {key} inutilisable: {e}")
            return False
        return True

    async def _generate(self, video: VideoObject, path: Path) -> None:
        """Télécharge la vidéo puis en extrait une image vers le cache."""
        async with self._temporary_video(video) as video_path:
            await self._store.download_file(video.key, video_path)
            async with self._staged_file(path) as staging:
                await self._extractor.extract(video_path, staging, self._timestamp, self._size)
        logger.info(f"Vignette générée pour {video.filename} dans {path}")

    async def _upload(self, filename: str, path: Path) -> None:
        key = self.remote_key(filename)
        try:
            await self._store.upload_file(path, key, content_type=THUMBNAIL_CONTENT_TYPE)
        except ObjectStoreError as e:
            logger.warning(f"Envoi de la vignette {key} vers le bucket impossible: {e}")

    @asynccontextmanager
    async def _temporary_video(self, video: VideoObject) -> AsyncIterator[Path]:
        """Fichier temporaire pour la vidéo, supprimé sur tous les chemins de sortie."""
        await asyncio.to_thread(self._work_dir.mkdir, parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            dir=self._work_dir, prefix="temp_", suffix=PurePath(video.filename).suffix
        )
        os.close(fd)
        temp_path = Path(name)
        try:
            yield temp_path
        finally:
            await asyncio.to_thread(temp_path.unlink, missing_ok=True)

    @asynccontextmanager
    async def _staged_file(self, final_path: Path) -> AsyncIterator[Path]:
        """
        Fichier d'écriture dans le répertoire de travail, renommé vers la cible en cas de succès.

        En cas d'erreur le fichier intermédiaire est supprimé : la cible reste absente.
        Le nom intermédiaire ne reprend pas celui de la vidéo, qui peut contenir
        des caractères interprétés par ffmpeg (``%``).
        """
        await asyncio.to_thread(final_path.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(self._work_dir.mkdir, parents=True, exist_ok=True)
        fd, name = tempfile.mkstemp(
            dir=self._work_dir, prefix="thumb_", suffix=final_path.suffix
        )
        os.close(fd)
        staging = Path(name)
        try:
            yield staging
            await asyncio.to_thread(os.replace, staging, final_path)
        finally:
            await asyncio.to_thread(staging.unlink, missing_ok=True)
