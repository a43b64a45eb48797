"""
Implementation du parser de noms de fichiers par expression reguliere.

Ce module fournit RegexFilenameParser qui implemente IFilenameParser
pour extraire un titre de serie et un numero d'episode depuis des noms
du type "My.Show.E05.mp4", "My_Show - EP 12.mp4" ou "My Show Episode3.mp4".
"""

import re
from pathlib import PurePath

from src.core.ports.parser import IFilenameParser
from src.core.value_objects.parsed_info import ParsedFilename
from src.utils.helpers import clean_title

# <titre><separateur>(E|EP|Episode)<separateur?><chiffres>
EPISODE_PATTERN = re.compile(
    r"(.+?)[-._ ](?:E|EP|Episode)[-._ ]?(\d+)",
    re.IGNORECASE,
)

# Separateurs remplaces par des espaces dans le titre
_TITLE_SEPARATORS = re.compile(r"[._]")


class RegexFilenameParser(IFilenameParser):
    """
    Parser heuristique de noms de fichiers.

    Best-effort : un nom qui ne correspond pas au motif donne le nom complet
    (normalise) comme titre, sans numero d'episode. Ne leve jamais d'exception.
    """

    def parse(self, filename: str) -> ParsedFilename:
        """
        Parse un nom de fichier video.

        Args:
            filename: Nom du fichier (un chemin est accepte, seul le dernier
                      segment est utilise)

        Returns:
            ParsedFilename avec le titre et le numero d'episode eventuel.
        """
        base_name = self._base_name(filename or "")

        match = EPISODE_PATTERN.search(base_name)
        if match:
            return ParsedFilename(
                series_title=self._normalize(match.group(1)),
                episode_number=int(match.group(2)),
            )

        return ParsedFilename(series_title=self._normalize(base_name))

    @staticmethod
    def _base_name(filename: str) -> str:
        """Nom sans le chemin ni l'extension."""
        name = PurePath(filename.replace("\\", "/")).name
        return PurePath(name).stem

    @staticmethod
    def _normalize(title: str) -> str:
        """Remplace les points et underscores par des espaces puis nettoie."""
        return clean_title(_TITLE_SEPARATORS.sub(" ", title))
