"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Les ports sont les frontières de l'architecture hexagonale. Ils définissent
ce dont le domaine a besoin du monde extérieur sans spécifier
comment ces besoins sont satisfaits.

- IObjectStore : Accès au bucket distant (listing, lecture, URL signées)
- IFilenameParser : Parsing des noms de fichiers
- IMetadataStore, ISeriesMetadataStore : Persistance clé-valeur des métadonnées
- IThumbnailExtractor : Extraction d'une vignette depuis une vidéo
"""

from src.core.ports.object_store import IObjectStore
from src.core.ports.parser import IFilenameParser
from src.core.ports.repositories import IMetadataStore, ISeriesMetadataStore
from src.core.ports.thumbnails import IThumbnailExtractor

__all__ = [
    "IObjectStore",
    "IFilenameParser",
    "IMetadataStore",
    "ISeriesMetadataStore",
    "IThumbnailExtractor",
]
