"""
Implementation de l'extracteur de vignettes avec ffmpeg.

Ce module fournit FfmpegThumbnailExtractor qui implemente IThumbnailExtractor
en lancant ffmpeg dans un sous-processus asynchrone.
"""

import asyncio
from pathlib import Path

from loguru import logger

from src.core.exceptions import ThumbnailExtractionError
from src.core.ports.thumbnails import IThumbnailExtractor


class FfmpegThumbnailExtractor(IThumbnailExtractor):
    """
    Extracteur de vignettes utilisant ffmpeg.

    Une seule image est extraite a la position demandee puis
    redimensionnee. Le processus est tue s'il depasse le timeout.
    """

    def __init__(self, ffmpeg_path: str = "ffmpeg", timeout: int = 60) -> None:
        """
        Args:
            ffmpeg_path: Executable ffmpeg (nom dans le PATH ou chemin complet)
            timeout: Duree maximale d'une extraction en secondes
        """
        self._ffmpeg_path = ffmpeg_path
        self._timeout = timeout

    def build_command(
        self, video_path: Path, output_path: Path, timestamp: float, size: str
    ) -> list[str]:
        """Construit la ligne de commande ffmpeg (seek avant -i : rapide)."""
        return [
            self._ffmpeg_path,
            "-ss", f"{timestamp:.3f}",
            "-i", str(video_path),
            "-frames:v", "1",
            # image unique : pas de motif de séquence (%d) dans le nom de sortie
            "-update", "1",
            "-s", size,
            "-y",
            "-loglevel", "error",
            str(output_path),
        ]

    async def extract(
        self, video_path: Path, output_path: Path, timestamp: float, size: str
    ) -> None:
        cmd = self.build_command(video_path, output_path, timestamp, size)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ThumbnailExtractionError(f"ffmpeg introuvable ({self._ffmpeg_path}): {e}") from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise ThumbnailExtractionError(
                f"Timeout ffmpeg ({self._timeout}s) pour {video_path.name}"
            ) from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise ThumbnailExtractionError(
                f"ffmpeg a echoue pour {video_path.name} (code {process.returncode}): {message}"
            )

        # Video plus courte que le timestamp : ffmpeg sort sans rien ecrire
        if not output_path.exists() or output_path.stat().st_size == 0:
            raise ThumbnailExtractionError(f"Aucune image produite pour {video_path.name}")

        logger.debug(f"Vignette extraite de {video_path.name} vers {output_path}")
