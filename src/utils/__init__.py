"""
Utilitaires et constantes pour CloudVid.

Ce module contient les constantes et fonctions utilitaires partagees.
"""

from src.utils.constants import (
    FALLBACK_THUMBNAIL_URL,
    THUMBNAIL_EXTENSION,
    VIDEO_CONTENT_TYPE,
    VIDEO_EXTENSIONS,
)

__all__ = [
    "VIDEO_EXTENSIONS",
    "VIDEO_CONTENT_TYPE",
    "THUMBNAIL_EXTENSION",
    "FALLBACK_THUMBNAIL_URL",
]
