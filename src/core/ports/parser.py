"""
Interface port pour le parsing de noms de fichiers video.
"""

from abc import ABC, abstractmethod

from src.core.value_objects.parsed_info import ParsedFilename


class IFilenameParser(ABC):
    """
    Interface pour le parsing de noms de fichiers video.

    Definit le contrat pour extraire un titre de serie et un numero
    d'episode depuis un nom de fichier. Fonction pure : aucune I/O.
    """

    @abstractmethod
    def parse(self, filename: str) -> ParsedFilename:
        """
        Parse un nom de fichier video.

        Args:
            filename: Nom du fichier a parser (sans le chemin)

        Retourne:
            ParsedFilename. Ne leve jamais d'exception : un nom ambigu
            donne le nom complet comme titre, sans numero d'episode.
        """
        ...
