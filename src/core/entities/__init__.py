"""
Entités métier du catalogue vidéo.

Exports :
- VideoObject : Objet vidéo issu d'un listing du stockage objet
- VideoRecord : Fiche vidéo enrichie servie par l'API
- SeriesAggregate : Regroupement dérivé des vidéos d'une série
"""

from src.core.entities.video import SeriesAggregate, VideoObject, VideoRecord

__all__ = [
    "VideoObject",
    "VideoRecord",
    "SeriesAggregate",
]
