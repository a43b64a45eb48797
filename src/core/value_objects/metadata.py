"""
Objet valeur pour les métadonnées persistées d'une vidéo.

Un MetadataRecord distingue explicitement un champ absent (None) d'une
chaîne vide, et conserve les clés inconnues du document JSON pour ne
jamais perdre une surcharge saisie à la main.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from loguru import logger

DEFAULT_DESCRIPTION = "No description available."

_KNOWN_FIELDS = ("display_title", "series_title", "episode_number", "description")


def _as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_episode(value: Any) -> Optional[int]:
    # bool est un sous-type de int
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


@dataclass(frozen=True)
class MetadataRecord:
    """
    Métadonnées d'une vidéo, indexées par nom de fichier dans le Metadata Store.

    Attributs :
        display_title : Titre affiché (surchargeable)
        series_title : Titre de série (surchargeable)
        episode_number : Numéro d'épisode (None = absent, 0 est valide)
        description : Description ; None = absente (valeur par défaut à la lecture)
        extra : Clés inconnues du document, réécrites telles quelles
    """

    display_title: Optional[str] = None
    series_title: Optional[str] = None
    episode_number: Optional[int] = None
    description: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def description_or_default(self) -> str:
        """Description à afficher ; le défaut n'est jamais persisté."""
        return self.description or DEFAULT_DESCRIPTION

    def missing_fields(self) -> list[str]:
        """Champs remplissables depuis le parser (titres vides ou épisode absent)."""
        missing = []
        if not self.series_title:
            missing.append("series_title")
        if not self.display_title:
            missing.append("display_title")
        if self.episode_number is None:
            missing.append("episode_number")
        return missing

    def fill_missing(
        self, series_title: str, episode_number: Optional[int]
    ) -> "MetadataRecord":
        """
        Complète uniquement les champs manquants.

        Un champ déjà renseigné n'est jamais écrasé. Retourne la même instance
        si rien n'a été complété.
        """
        changes: dict[str, Any] = {}
        missing = self.missing_fields()
        if "series_title" in missing and series_title:
            changes["series_title"] = series_title
        if "display_title" in missing and series_title:
            changes["display_title"] = series_title
        if "episode_number" in missing and episode_number is not None:
            changes["episode_number"] = episode_number
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Document JSON persisté (les champs absents sont omis)."""
        data = dict(self.extra)
        for name in _KNOWN_FIELDS:
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MetadataRecord":
        """
        Construit un record depuis un document JSON.

        Les valeurs de type inattendu sont traitées comme absentes.
        """
        for name in ("display_title", "series_title", "description"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                logger.warning(f"Champ {name} ignoré (type {type(value).__name__})")
        return cls(
            display_title=_as_text(data.get("display_title")),
            series_title=_as_text(data.get("series_title")),
            episode_number=_as_episode(data.get("episode_number")),
            description=_as_text(data.get("description")),
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )
