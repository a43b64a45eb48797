"""
Interface port pour l'extraction de vignettes.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IThumbnailExtractor(ABC):
    """
    Interface d'extraction d'une image depuis un fichier video.

    L'implementation typique delegue a ffmpeg.
    """

    @abstractmethod
    async def extract(
        self, video_path: Path, output_path: Path, timestamp: float, size: str
    ) -> None:
        """
        Extrait une image de la video et l'ecrit dans output_path.

        Args:
            video_path: Fichier video local
            output_path: Fichier image a produire (ecrase s'il existe)
            timestamp: Position dans la video, en secondes
            size: Dimensions de sortie au format "LxH" (ex: "320x240")

        Raises:
            ThumbnailExtractionError: Si l'extraction echoue ou ne produit rien
        """
        ...
