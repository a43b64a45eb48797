"""
Adaptateur S3 pour le stockage objet (Cloudflare R2, AWS S3, MinIO).

Implémentation concrète de IObjectStore au-dessus de boto3. Le client boto3
étant synchrone, chaque appel réseau est exécuté dans un thread via
asyncio.to_thread : la boucle d'événements n'est jamais bloquée.

Les erreurs boto3/botocore sont converties en ObjectStoreError.
"""

import asyncio
import re
from pathlib import Path
from typing import Any, AsyncIterator, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from src.config import Settings
from src.core.exceptions import ObjectStoreError
from src.core.ports.object_store import IObjectStore
from src.core.value_objects import ByteRange, ObjectMetadata, ObjectStream, StoredObject

# Codes d'erreur S3 signifiant "objet absent"
_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

# Taille par défaut des morceaux lus depuis le corps d'un objet (1 Mo)
DEFAULT_CHUNK_SIZE = 1024 * 1024


def _normalize_key(key: str) -> str:
    """
    Normalise une clé d'objet : sans slash initial, sans '//' ni '..'.

    Raises:
        ObjectStoreError: Si la clé est vide ou tente une traversée de chemin
    """
    k = str(key or "").strip().lstrip("/")
    k = re.sub(r"/{2,}", "/", k)
    if not k:
        raise ObjectStoreError("Clé de stockage vide")
    if ".." in k.split("/"):
        raise ObjectStoreError("Clé de stockage invalide (traversée de chemin)", key=k)
    return k


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class S3ObjectStore(IObjectStore):
    """
    Accès au bucket via boto3.

    Attributes:
        bucket: Nom du bucket
        client: Client boto3 "s3" (exposé pour les tests avec botocore Stubber)

    Example:
        store = S3ObjectStore.from_settings(settings)
        objects = await store.list_objects()
    """

    def __init__(
        self,
        bucket: str,
        client: Any,
        public_base_url: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.bucket = bucket
        self.client = client
        self._public_base = (public_base_url or "").rstrip("/")
        self._chunk_size = chunk_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        """
        Construit le client boto3 depuis la configuration.

        Timeouts courts et nombre de tentatives borné pour échouer vite.
        Sans identifiants explicites, boto3 utilise sa chaîne standard.
        """
        config = BotoConfig(
            signature_version="s3v4",
            retries={"max_attempts": 5, "mode": "standard"},
            connect_timeout=3,
            read_timeout=10,
        )
        client_kwargs: dict[str, Any] = {"config": config, "region_name": settings.s3_region}
        if settings.endpoint_url:
            client_kwargs["endpoint_url"] = settings.endpoint_url
        if settings.s3_access_key_id and settings.s3_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.s3_access_key_id
            client_kwargs["aws_secret_access_key"] = (
                settings.s3_secret_access_key.get_secret_value()
            )

        try:
            client = boto3.client("s3", **client_kwargs)
        except (BotoCoreError, ValueError) as e:
            raise ObjectStoreError(f"Impossible de créer le client S3: {e}") from e

        return cls(
            bucket=settings.bucket_name,
            client=client,
            public_base_url=settings.public_url,
            chunk_size=settings.stream_chunk_size,
        )

    def __repr__(self) -> str:
        return f"S3ObjectStore(bucket={self.bucket}, public={'yes' if self._public_base else 'no'})"

    # ------------------------------------------------------------------
    # Listing et métadonnées
    # ------------------------------------------------------------------

    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        try:
            return await asyncio.to_thread(self._list_all, prefix)
        except (BotoCoreError, ClientError) as e:
            raise ObjectStoreError(f"Echec du listing du bucket {self.bucket}: {e}") from e

    def _list_all(self, prefix: str) -> list[StoredObject]:
        paginator = self.client.get_paginator("list_objects_v2")
        objects: list[StoredObject] = []
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for item in page.get("Contents", []):
                objects.append(
                    StoredObject(
                        key=item["Key"],
                        size=int(item.get("Size", 0)),
                        last_modified=item["LastModified"],
                    )
                )
        return objects

    async def head_object(self, key: str) -> Optional[ObjectMetadata]:
        k = _normalize_key(key)
        try:
            response = await asyncio.to_thread(
                self.client.head_object, Bucket=self.bucket, Key=k
            )
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                return None
            raise ObjectStoreError(f"Echec HEAD {k}: {e}", key=k) from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"Echec HEAD {k}: {e}", key=k) from e

        return ObjectMetadata(
            content_length=int(response.get("ContentLength", 0)),
            last_modified=response.get("LastModified"),
            content_type=response.get("ContentType"),
        )

    # ------------------------------------------------------------------
    # Lecture / écriture
    # ------------------------------------------------------------------

    async def open_object(
        self, key: str, byte_range: Optional[ByteRange] = None
    ) -> ObjectStream:
        k = _normalize_key(key)
        params: dict[str, Any] = {"Bucket": self.bucket, "Key": k}
        if byte_range is not None:
            params["Range"] = byte_range.header_value()

        try:
            response = await asyncio.to_thread(self.client.get_object, **params)
        except (BotoCoreError, ClientError) as e:
            raise ObjectStoreError(f"Echec GET {k}: {e}", key=k) from e

        body = response["Body"]
        return ObjectStream(
            content_length=int(response.get("ContentLength", 0)),
            chunks=self._iter_body(body, k),
        )

    async def _iter_body(self, body: Any, key: str) -> AsyncIterator[bytes]:
        """Lit le corps par morceaux ; le ferme toujours en sortie."""
        try:
            while True:
                try:
                    chunk = await asyncio.to_thread(body.read, self._chunk_size)
                except (BotoCoreError, ClientError, OSError) as e:
                    raise ObjectStoreError(f"Lecture interrompue pour {key}: {e}", key=key) from e
                if not chunk:
                    break
                yield chunk
        finally:
            body.close()

    async def download_file(self, key: str, destination: Path) -> None:
        k = _normalize_key(key)
        try:
            await asyncio.to_thread(
                self.client.download_file, self.bucket, k, str(destination)
            )
        except (BotoCoreError, ClientError, OSError) as e:
            raise ObjectStoreError(f"Echec du téléchargement de {k}: {e}", key=k) from e
        logger.debug(f"Téléchargé {k} vers {destination}")

    async def upload_file(
        self, source: Path, key: str, content_type: Optional[str] = None
    ) -> None:
        k = _normalize_key(key)
        extra_args = {"ContentType": content_type} if content_type else None
        try:
            await asyncio.to_thread(
                self.client.upload_file, str(source), self.bucket, k, ExtraArgs=extra_args
            )
        except (BotoCoreError, ClientError, OSError) as e:
            raise ObjectStoreError(f"Echec de l'envoi de {k}: {e}", key=k) from e
        logger.debug(f"Envoyé {source} vers {k}")

    # ------------------------------------------------------------------
    # URLs
    # ------------------------------------------------------------------

    def public_url(self, key: str) -> Optional[str]:
        if not self._public_base:
            return None
        return f"{self._public_base}/{_normalize_key(key)}"

    async def signed_url(self, key: str, expires_in: int = 3600) -> Optional[str]:
        public = self.public_url(key)
        if public:
            return public

        k = _normalize_key(key)
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                ClientMethod="get_object",
                Params={"Bucket": self.bucket, "Key": k},
                ExpiresIn=int(expires_in),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Echec de génération de l'URL signée pour {k}: {e}")
            return None
