"""
Objets valeur décrivant un objet du stockage distant.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Optional


@dataclass(frozen=True)
class StoredObject:
    """Entrée brute d'un listing du bucket."""

    key: str
    size: int
    last_modified: datetime


@dataclass(frozen=True)
class ObjectMetadata:
    """
    Métadonnées d'un objet (réponse à un HEAD).

    Attributs :
        content_length : Taille totale en octets
        last_modified : Date de dernière modification
        content_type : Type MIME déclaré, si connu
    """

    content_length: int
    last_modified: Optional[datetime] = None
    content_type: Optional[str] = None


@dataclass
class ObjectStream:
    """
    Contenu d'un objet (complet ou partiel) à consommer par morceaux.

    Le corps amont est libéré quand l'itérateur `chunks` est épuisé ou fermé.
    """

    content_length: int
    chunks: AsyncIterator[bytes]
