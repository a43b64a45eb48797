"""
Objet valeur pour les informations de parsing de noms de fichiers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedFilename:
    """
    Informations extraites du parsing d'un nom de fichier video.

    Attributs:
        series_title: Titre de serie candidat (toujours renseigne, eventuellement vide)
        episode_number: Numero d'episode, ou None si aucun motif d'episode trouve
    """

    series_title: str
    episode_number: Optional[int] = None
