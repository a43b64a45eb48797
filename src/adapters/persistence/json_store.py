"""
Documents JSON clé-valeur sur disque.

Implémente IMetadataStore et ISeriesMetadataStore sur des fichiers JSON plats.
Chaque sauvegarde remplace le document complet via un fichier temporaire
renommé atomiquement : un lecteur voit l'ancien ou le nouveau document,
jamais un document partiel.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from loguru import logger

from src.core.ports.repositories import IMetadataStore, ISeriesMetadataStore
from src.core.value_objects import MetadataRecord


class JsonDocument:
    """
    Document JSON (objet racine) lu et écrit en entier.

    Un document absent, illisible ou dont la racine n'est pas un objet
    est lu comme un dictionnaire vide, avec un avertissement.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict[str, Any]:
        """Lit le document (synchrone)."""
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"{self._path} est vide ou malformé, document ignoré: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"{self._path} n'est pas un objet JSON, document ignoré")
            return {}
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Remplace le document complet (synchrone, atomique)."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class JsonMetadataStore(IMetadataStore):
    """
    Store des métadonnées vidéo : nom de fichier → MetadataRecord.

    Les lectures/écritures disque s'exécutent dans un thread pour ne pas
    bloquer la boucle d'événements.
    """

    def __init__(self, path: Path) -> None:
        self._document = JsonDocument(path)

    async def load(self) -> dict[str, MetadataRecord]:
        raw = await asyncio.to_thread(self._document.read)
        mapping: dict[str, MetadataRecord] = {}
        for filename, entry in raw.items():
            if not isinstance(entry, dict):
                logger.warning(f"Entrée de métadonnées ignorée pour {filename} (pas un objet)")
                continue
            mapping[filename] = MetadataRecord.from_dict(entry)
        return mapping

    async def save(self, mapping: dict[str, MetadataRecord]) -> None:
        data = {filename: record.to_dict() for filename, record in mapping.items()}
        await asyncio.to_thread(self._document.write, data)


class JsonSeriesMetadataStore(ISeriesMetadataStore):
    """Store des surcharges par série : titre de série → champs libres."""

    def __init__(self, path: Path) -> None:
        self._document = JsonDocument(path)

    async def load(self) -> dict[str, dict[str, Any]]:
        raw = await asyncio.to_thread(self._document.read)
        return {title: entry for title, entry in raw.items() if isinstance(entry, dict)}

    async def save(self, mapping: dict[str, dict[str, Any]]) -> None:
        await asyncio.to_thread(self._document.write, dict(mapping))
