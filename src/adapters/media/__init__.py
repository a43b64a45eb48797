"""
Adaptateurs media (extraction de vignettes).
"""

from src.adapters.media.ffmpeg_extractor import FfmpegThumbnailExtractor

__all__ = ["FfmpegThumbnailExtractor"]
