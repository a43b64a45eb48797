"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ParsedFilename : Titre de serie et numero d'episode extraits d'un nom de fichier
- MetadataRecord : Metadonnees persistees d'une video
- DEFAULT_DESCRIPTION : Description affichee quand aucune n'est renseignee
- ByteRange : Plage d'octets HTTP
- StoredObject, ObjectMetadata, ObjectStream : Description des objets distants
"""

from src.core.value_objects.byte_range import ByteRange
from src.core.value_objects.metadata import DEFAULT_DESCRIPTION, MetadataRecord
from src.core.value_objects.object_info import (
    ObjectMetadata,
    ObjectStream,
    StoredObject,
)
from src.core.value_objects.parsed_info import ParsedFilename

__all__ = [
    "ParsedFilename",
    "MetadataRecord",
    "DEFAULT_DESCRIPTION",
    "ByteRange",
    "StoredObject",
    "ObjectMetadata",
    "ObjectStream",
]
