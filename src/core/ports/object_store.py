"""
Interface port pour le stockage objet distant.

Contrat consommé par le domaine pour accéder au bucket (S3, Cloudflare R2,
MinIO...). Toutes les opérations sont asynchrones : chacune est un point
de suspension de la boucle d'événements.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from src.core.value_objects import ByteRange, ObjectMetadata, ObjectStream, StoredObject


class IObjectStore(ABC):
    """
    Interface d'accès au bucket distant.

    Les implémentations lèvent ObjectStoreError pour toute défaillance amont.
    """

    @abstractmethod
    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        """
        Liste tous les objets du bucket sous un préfixe (toutes les pages).

        Raises :
            ObjectStoreError : Si le listing échoue
        """
        ...

    @abstractmethod
    async def head_object(self, key: str) -> Optional[ObjectMetadata]:
        """
        Récupère les métadonnées d'un objet.

        Retourne :
            ObjectMetadata, ou None si l'objet n'existe pas

        Raises :
            ObjectStoreError : Pour toute autre erreur que l'absence
        """
        ...

    @abstractmethod
    async def open_object(
        self, key: str, byte_range: Optional[ByteRange] = None
    ) -> ObjectStream:
        """
        Ouvre le contenu d'un objet, complet ou limité à une plage d'octets.

        Le corps n'est pas lu en mémoire : il est consommé morceau par morceau
        via ObjectStream.chunks.

        Raises :
            ObjectStoreError : Si la requête amont échoue
        """
        ...

    @abstractmethod
    async def download_file(self, key: str, destination: Path) -> None:
        """
        Télécharge un objet complet vers un fichier local.

        Raises :
            ObjectStoreError : Si le téléchargement échoue
        """
        ...

    @abstractmethod
    async def upload_file(
        self, source: Path, key: str, content_type: Optional[str] = None
    ) -> None:
        """
        Envoie un fichier local vers le bucket.

        Raises :
            ObjectStoreError : Si l'envoi échoue
        """
        ...

    @abstractmethod
    async def signed_url(self, key: str, expires_in: int = 3600) -> Optional[str]:
        """
        Génère une URL temporaire de lecture directe.

        Retourne :
            L'URL (publique si le bucket en expose une, signée sinon),
            ou None si la génération échoue
        """
        ...

    @abstractmethod
    def public_url(self, key: str) -> Optional[str]:
        """URL publique de l'objet si le déploiement en expose une, sinon None."""
        ...
