"""
Interfaces ports pour la persistance des métadonnées.

Documents clé-valeur plats : nom de fichier → MetadataRecord pour les vidéos,
titre de série → surcharges pour les séries. L'abstraction permet de
remplacer le fichier JSON par une base clé-valeur embarquée sans toucher
aux appelants.
"""

from abc import ABC, abstractmethod
from typing import Any

from src.core.value_objects import MetadataRecord


class IMetadataStore(ABC):
    """
    Interface de stockage des métadonnées vidéo.

    Le store est l'unique propriétaire de son document sur disque.
    """

    @abstractmethod
    async def load(self) -> dict[str, MetadataRecord]:
        """
        Charge le document complet.

        Retourne :
            Mapping nom de fichier → MetadataRecord. Un document absent ou
            corrompu donne un mapping vide (jamais d'exception).
        """
        ...

    @abstractmethod
    async def save(self, mapping: dict[str, MetadataRecord]) -> None:
        """
        Remplace le document complet.

        Un lecteur concurrent ne doit jamais observer un document partiel.
        """
        ...


class ISeriesMetadataStore(ABC):
    """
    Interface de stockage des surcharges au niveau série.

    Aucune route n'écrit ce document : seul le primitif de stockage existe.
    """

    @abstractmethod
    async def load(self) -> dict[str, dict[str, Any]]:
        """Charge les surcharges (mapping titre de série → champs)."""
        ...

    @abstractmethod
    async def save(self, mapping: dict[str, dict[str, Any]]) -> None:
        """Remplace le document complet des surcharges."""
        ...
