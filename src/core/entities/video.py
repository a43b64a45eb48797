"""
Entités vidéo.

Entités représentant les vidéos du bucket distant : l'instantané brut d'un
listing (VideoObject), la fiche enrichie servie aux clients (VideoRecord)
et l'agrégat par série (SeriesAggregate).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from src.utils.helpers import format_timestamp


@dataclass(frozen=True)
class VideoObject:
    """
    Objet vidéo tel que retourné par un listing du stockage objet.

    Instantané immutable, valable le temps d'une requête uniquement.

    Attributs :
        key : Clé distante (unique, opaque)
        filename : Dernier segment de la clé
        last_modified : Date de dernière modification (UTC)
        size : Taille en octets
    """

    key: str
    filename: str
    last_modified: datetime
    size: int = 0


@dataclass
class VideoRecord:
    """
    Fiche vidéo enrichie : objet distant + métadonnées + vignette + URL de lecture.

    Attributs :
        filename : Nom du fichier vidéo
        url : URL de lecture (publique, signée, ou route de streaming interne)
        thumbnail_url : Référence de la vignette (cache local ou fallback statique)
        last_modified : Date de dernière modification de l'objet
        display_title : Titre affiché
        episode_number : Numéro d'épisode (None si inconnu)
        series_title : Titre de la série
        description : Description (valeur par défaut si absente)
        key : Clé distante de l'objet
        size : Taille en octets
    """

    filename: str
    url: str
    thumbnail_url: str
    last_modified: datetime
    display_title: str
    episode_number: Optional[int]
    series_title: str
    description: str
    key: str = ""
    size: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Représentation JSON exposée par l'API."""
        return {
            "filename": self.filename,
            "url": self.url,
            "thumbnail_url": self.thumbnail_url,
            "last_modified": format_timestamp(self.last_modified),
            "display_title": self.display_title,
            "episode_number": self.episode_number,
            "series_title": self.series_title,
            "description": self.description,
        }


@dataclass
class SeriesAggregate:
    """
    Agrégat dérivé (non persisté) de toutes les vidéos d'une même série.

    Reconstruit à chaque requête depuis le listing courant.
    """

    series_title: str
    video_count: int
    thumbnail_url: Optional[str]
    last_modified: datetime
    description: str

    def to_dict(self) -> dict[str, Any]:
        """Représentation JSON exposée par l'API."""
        return {
            "series_title": self.series_title,
            "video_count": self.video_count,
            "thumbnail_url": self.thumbnail_url,
            "last_modified": format_timestamp(self.last_modified),
            "description": self.description,
        }
