"""
Service de catalogue : listing du bucket, enrichissement et agrégation par série.

Transforme le listing brut du stockage objet en fiches VideoRecord
(métadonnées + vignette + URL de lecture) puis fournit les vues servies
par l'API : liste récente, séries, épisodes d'une série, recherche.

Le listing est refait à chaque appel (aucun cache inter-requêtes).
"""

import asyncio
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Iterable, Optional

from loguru import logger

from src.core.entities import SeriesAggregate, VideoObject, VideoRecord
from src.core.exceptions import ObjectStoreError, VideoNotFoundError
from src.core.ports.object_store import IObjectStore
from src.core.ports.repositories import ISeriesMetadataStore
from src.core.value_objects import DEFAULT_DESCRIPTION, MetadataRecord, StoredObject
from src.services.metadata import MetadataService
from src.services.thumbnails import ThumbnailService
from src.utils.constants import VIDEO_EXTENSIONS, VIDEO_ROUTE
from src.utils.helpers import basename_from_key

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ----------------------------------------------------------------------
# Vues pures sur les fiches enrichies
# ----------------------------------------------------------------------


def sort_newest_first(records: Iterable[VideoRecord]) -> list[VideoRecord]:
    """Tri par date de modification décroissante."""
    return sorted(records, key=lambda r: r.last_modified, reverse=True)


def sort_by_episode(records: Iterable[VideoRecord]) -> list[VideoRecord]:
    """Tri par numéro d'épisode puis nom de fichier ; épisodes inconnus en dernier."""
    return sorted(
        records,
        key=lambda r: (
            r.episode_number is None,
            r.episode_number or 0,
            r.filename.casefold(),
            r.filename,
        ),
    )


def filter_by_series(records: Iterable[VideoRecord], series_title: str) -> list[VideoRecord]:
    """Fiches dont le titre de série correspond exactement (insensible à la casse)."""
    wanted = series_title.casefold()
    return [r for r in records if r.series_title and r.series_title.casefold() == wanted]


def search_records(records: Iterable[VideoRecord], query: Optional[str]) -> list[VideoRecord]:
    """
    Recherche par sous-chaîne, insensible à la casse.

    Le texte cherché concatène nom de fichier, titre affiché, titre de série
    et description. Une requête vide retourne toutes les fiches.
    """
    needle = (query or "").casefold()
    results = []
    for record in records:
        haystack = (
            f"{record.filename} {record.display_title} "
            f"{record.series_title} {record.description}"
        ).casefold()
        if needle in haystack:
            results.append(record)
    return results


def group_by_series(
    records: Iterable[VideoRecord],
    overrides: Optional[dict[str, dict[str, Any]]] = None,
) -> list[SeriesAggregate]:
    """
    Agrège les fiches par titre de série.

    Les fiches sont repliées dans l'ordre reçu : la vignette d'une série est
    la première rencontrée ; date et description suivent la fiche la plus
    récente. Les surcharges de série (description, thumbnail_url) remplacent
    les valeurs dérivées. Résultat trié par date décroissante.
    """
    groups: dict[str, SeriesAggregate] = {}
    for record in records:
        if not record.series_title:
            continue
        aggregate = groups.get(record.series_title)
        if aggregate is None:
            aggregate = SeriesAggregate(
                series_title=record.series_title,
                video_count=0,
                thumbnail_url=None,
                last_modified=_EPOCH,
                description=DEFAULT_DESCRIPTION,
            )
            groups[record.series_title] = aggregate

        aggregate.video_count += 1
        if not aggregate.thumbnail_url:
            aggregate.thumbnail_url = record.thumbnail_url
        if record.last_modified > aggregate.last_modified:
            aggregate.last_modified = record.last_modified
            aggregate.description = record.description

    for title, override in (overrides or {}).items():
        aggregate = groups.get(title)
        if aggregate is None:
            continue
        if isinstance(override.get("description"), str) and override["description"]:
            aggregate.description = override["description"]
        if isinstance(override.get("thumbnail_url"), str) and override["thumbnail_url"]:
            aggregate.thumbnail_url = override["thumbnail_url"]

    return sorted(groups.values(), key=lambda a: a.last_modified, reverse=True)


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------


class CatalogService:
    """
    Orchestration listing → métadonnées → vignettes → URL de lecture.

    Coordonne:
    - Le stockage objet (IObjectStore) pour le listing et les URLs signées
    - Le MetadataService pour les titres et numéros d'épisode
    - Le ThumbnailService pour les vignettes
    - Le store des surcharges de série (lecture seule)
    """

    def __init__(
        self,
        object_store: IObjectStore,
        metadata_service: MetadataService,
        thumbnail_service: ThumbnailService,
        series_store: ISeriesMetadataStore,
        thumbnail_prefix: str = "thumbnails/",
        signed_url_expiry: int = 3600,
    ) -> None:
        self._store = object_store
        self._metadata = metadata_service
        self._thumbnails = thumbnail_service
        self._series_store = series_store
        self._thumbnail_prefix = thumbnail_prefix
        self._signed_url_expiry = signed_url_expiry

    # -- Listing ---------------------------------------------------------

    def _is_video(self, obj: StoredObject) -> bool:
        key = obj.key
        if self._thumbnail_prefix and (
            key.startswith(self._thumbnail_prefix) or f"/{self._thumbnail_prefix}" in key
        ):
            return False
        return PurePath(key).suffix.lower() in VIDEO_EXTENSIONS

    async def fetch_videos(self) -> list[VideoObject]:
        """
        Listing frais des vidéos du bucket.

        Raises:
            ObjectStoreError: Si le listing échoue
        """
        objects = await self._store.list_objects()
        return [
            VideoObject(
                key=obj.key,
                filename=basename_from_key(obj.key),
                last_modified=_as_utc(obj.last_modified),
                size=obj.size,
            )
            for obj in objects
            if self._is_video(obj)
        ]

    async def list_videos(self) -> list[VideoObject]:
        """Listing des vidéos ; un échec amont donne une liste vide."""
        try:
            return await self.fetch_videos()
        except ObjectStoreError as e:
            logger.error(f"Erreur de listing du bucket: {e}")
            return []

    async def find_video(self, filename: str) -> VideoObject:
        """
        Recherche une vidéo par nom de fichier dans un listing frais.

        Raises:
            VideoNotFoundError: Si aucun objet ne porte ce nom
            ObjectStoreError: Si le listing échoue
        """
        for video in await self.fetch_videos():
            if video.filename == filename:
                return video
        raise VideoNotFoundError(filename)

    # -- Enrichissement --------------------------------------------------

    async def enrich(
        self, videos: list[VideoObject], mapping: dict[str, MetadataRecord]
    ) -> list[VideoRecord]:
        """
        Enrichit chaque vidéo en parallèle.

        Le résultat suit l'ordre du listing. Les métadonnées dérivées du
        listing sont enregistrées en une seule écriture. Une vidéo en échec
        est journalisée et écartée sans affecter les autres.
        """
        metadata = await self._metadata.resolve_all((v.filename for v in videos), mapping)
        results = await asyncio.gather(
            *(self._enrich_one(video, metadata[video.filename]) for video in videos),
            return_exceptions=True,
        )
        records = []
        for video, result in zip(videos, results):
            if isinstance(result, BaseException):
                logger.warning(f"Enrichissement impossible pour {video.filename}: {result}")
                continue
            records.append(result)
        return records

    async def _enrich_one(self, video: VideoObject, metadata: MetadataRecord) -> VideoRecord:
        thumbnail = await self._thumbnails.resolve(video)
        url = await self._playback_url(video)

        return VideoRecord(
            filename=video.filename,
            url=url,
            thumbnail_url=thumbnail.url,
            last_modified=video.last_modified,
            display_title=metadata.display_title or "",
            episode_number=metadata.episode_number,
            series_title=metadata.series_title or "",
            description=metadata.description_or_default,
            key=video.key,
            size=video.size,
        )

    async def _playback_url(self, video: VideoObject) -> str:
        """URL publique ou signée ; à défaut, la route de streaming interne."""
        try:
            url = await self._store.signed_url(video.key, self._signed_url_expiry)
        except ObjectStoreError as e:
            logger.warning(f"URL directe indisponible pour {video.filename}: {e}")
            url = None
        return url or f"{VIDEO_ROUTE}/{video.filename}"

    async def all_records(self) -> list[VideoRecord]:
        """Listing frais + chargement des métadonnées + enrichissement."""
        videos = await self.list_videos()
        if not videos:
            return []
        mapping = await self._metadata.load()
        return await self.enrich(videos, mapping)

    # -- Vues de l'API ---------------------------------------------------

    async def videos(self, series_title: Optional[str] = None) -> list[VideoRecord]:
        """Toutes les vidéos, les plus récentes d'abord, filtrables par série."""
        records = sort_newest_first(await self.all_records())
        if series_title:
            records = filter_by_series(records, series_title)
        return records

    async def series(self) -> list[SeriesAggregate]:
        """
        Agrégats par série, les plus récemment modifiées d'abord.

        Les fiches sont repliées dans l'ordre du listing : la vignette d'une
        série est celle de son premier épisode listé.
        """
        records = await self.all_records()
        overrides = await self._series_store.load()
        return group_by_series(records, overrides)

    async def series_videos(self, series_title: str) -> list[VideoRecord]:
        """Episodes d'une série, par numéro d'épisode puis nom de fichier."""
        return sort_by_episode(filter_by_series(await self.all_records(), series_title))

    async def search(self, query: Optional[str]) -> list[VideoRecord]:
        """Recherche plein texte simple, résultats les plus récents d'abord."""
        return sort_newest_first(search_records(await self.all_records(), query))
