"""
Exceptions du domaine CloudVid.

Hiérarchie unique pour que les couches web et CLI puissent traduire
les erreurs métier en réponses (404, 416, 500) sans connaître les adaptateurs.
"""

from typing import Optional


class CloudVidError(Exception):
    """Exception de base de l'application."""


class ObjectStoreError(CloudVidError):
    """
    Echec d'une opération sur le stockage objet distant.

    Levée par l'adaptateur S3 pour toute erreur réseau, d'authentification
    ou de politique du bucket. La clé concernée est conservée si connue.
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        self.key = key
        super().__init__(message)


class VideoNotFoundError(CloudVidError):
    """Le fichier demandé n'apparaît pas dans le listing courant du bucket."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Vidéo introuvable : {filename}")


class RangeNotSatisfiableError(CloudVidError):
    """
    En-tête Range invalide ou hors des bornes de l'objet.

    Attributes:
        total: Taille totale de l'objet (pour l'en-tête Content-Range: bytes */total)
    """

    def __init__(self, header: str, total: int) -> None:
        self.header = header
        self.total = total
        super().__init__(f"Range non satisfiable : {header!r} (taille {total})")


class ThumbnailExtractionError(CloudVidError):
    """L'extraction d'une vignette depuis une vidéo a échoué."""
