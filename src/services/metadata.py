"""
Service de résolution des métadonnées vidéo.

Complète les métadonnées d'un fichier depuis son nom quand elles sont
absentes, sans jamais écraser une valeur existante (surcharge manuelle
ou valeur dérivée précédemment), et persiste les ajouts : une écriture par
résolution isolée, une seule pour un listing complet.
"""

import asyncio
from typing import Iterable, Optional

from loguru import logger

from src.core.ports.parser import IFilenameParser
from src.core.ports.repositories import IMetadataStore
from src.core.value_objects import MetadataRecord, ParsedFilename


class MetadataService:
    """
    Résolution des MetadataRecord avec remplissage des champs manquants.

    Les écritures sont sérialisées par un verrou : l'écrivain relit le
    document courant et n'y ajoute que les champs manquants, si bien que
    deux premières résolutions concurrentes ne perdent jamais d'entrée.
    """

    def __init__(self, store: IMetadataStore, parser: IFilenameParser) -> None:
        self._store = store
        self._parser = parser
        self._write_lock = asyncio.Lock()

    async def load(self) -> dict[str, MetadataRecord]:
        """Charge le mapping complet (vide si absent ou corrompu)."""
        return await self._store.load()

    async def resolve(
        self, filename: str, mapping: dict[str, MetadataRecord]
    ) -> MetadataRecord:
        """
        Retourne les métadonnées d'un fichier, complétées si nécessaire.

        Args:
            filename: Nom du fichier vidéo (clé du document)
            mapping: Mapping chargé pour la requête courante (mis à jour en place)

        Returns:
            Le MetadataRecord, dont la description n'est PAS remplacée par
            la valeur par défaut (voir MetadataRecord.description_or_default).
        """
        record, parsed = self._fill(filename, mapping)
        if parsed is not None:
            await self._persist({filename: parsed})
        return record

    async def resolve_all(
        self, filenames: Iterable[str], mapping: dict[str, MetadataRecord]
    ) -> dict[str, MetadataRecord]:
        """
        Résout un listing entier avec une seule écriture du document.

        Un échec d'écriture est journalisé : les valeurs dérivées restent
        utilisables pour la requête et seront redérivées à la suivante.
        """
        resolved: dict[str, MetadataRecord] = {}
        derived: dict[str, ParsedFilename] = {}
        for filename in filenames:
            record, parsed = self._fill(filename, mapping)
            resolved[filename] = record
            if parsed is not None:
                derived[filename] = parsed

        if derived:
            try:
                await self._persist(derived)
            except OSError as e:
                logger.error(f"Enregistrement des métadonnées dérivées impossible: {e}")
        return resolved

    def _fill(
        self, filename: str, mapping: dict[str, MetadataRecord]
    ) -> tuple[MetadataRecord, Optional[ParsedFilename]]:
        """Complète l'entrée en mémoire ; retourne aussi le parsing s'il a servi."""
        current = mapping.get(filename) or MetadataRecord()
        if not current.missing_fields():
            return current, None

        parsed = self._parser.parse(filename)
        filled = current.fill_missing(parsed.series_title, parsed.episode_number)
        if filled is current:
            return current, None

        mapping[filename] = filled
        return filled, parsed

    async def _persist(self, derived: dict[str, ParsedFilename]) -> None:
        """Fusionne les champs dérivés dans le document le plus récent."""
        async with self._write_lock:
            latest = await self._store.load()
            changed = []
            for filename, parsed in derived.items():
                existing = latest.get(filename) or MetadataRecord()
                merged = existing.fill_missing(parsed.series_title, parsed.episode_number)
                if merged is existing and filename in latest:
                    continue
                latest[filename] = merged
                changed.append(filename)
            if not changed:
                return
            await self._store.save(latest)
        logger.debug(f"Métadonnées dérivées enregistrées pour {len(changed)} fichier(s)")
