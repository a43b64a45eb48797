"""
Doublures de test partagees : bucket en memoire et extracteur factice.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator, Optional

from src.core.exceptions import ObjectStoreError
from src.core.ports.object_store import IObjectStore
from src.core.ports.thumbnails import IThumbnailExtractor
from src.core.value_objects import ByteRange, ObjectMetadata, ObjectStream, StoredObject

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-thumbnail"


def utc(year: int, month: int = 1, day: int = 1, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


class FakeObjectStore(IObjectStore):
    """
    Bucket en memoire.

    Enregistre les appels pour que les tests verifient qu'aucun acces
    inutile n'a ete fait. `fail_list` / `fail_get` simulent une panne amont.
    """

    def __init__(self, public_base_url: Optional[str] = None) -> None:
        self.objects: dict[str, tuple[bytes, datetime]] = {}
        self.public_base_url = public_base_url
        self.calls: list[tuple[str, str]] = []
        self.fail_list = False
        self.fail_get = False
        self.fail_download_keys: set[str] = set()

    def put(self, key: str, data: bytes = b"", last_modified: Optional[datetime] = None) -> None:
        self.objects[key] = (data, last_modified or utc(2024))

    async def list_objects(self, prefix: str = "") -> list[StoredObject]:
        self.calls.append(("list", prefix))
        if self.fail_list:
            raise ObjectStoreError("bucket injoignable")
        return [
            StoredObject(key=key, size=len(data), last_modified=modified)
            for key, (data, modified) in self.objects.items()
            if key.startswith(prefix)
        ]

    async def head_object(self, key: str) -> Optional[ObjectMetadata]:
        self.calls.append(("head", key))
        if key not in self.objects:
            return None
        data, modified = self.objects[key]
        return ObjectMetadata(content_length=len(data), last_modified=modified)

    async def open_object(self, key: str, byte_range: Optional[ByteRange] = None) -> ObjectStream:
        self.calls.append(("get", key))
        if self.fail_get:
            raise ObjectStoreError("lecture impossible", key=key)
        data, _ = self.objects[key]
        if byte_range is not None:
            data = data[byte_range.start:byte_range.end + 1]
        return ObjectStream(content_length=len(data), chunks=_chunks(data))

    async def download_file(self, key: str, destination: Path) -> None:
        self.calls.append(("download", key))
        if key in self.fail_download_keys or key not in self.objects:
            raise ObjectStoreError("telechargement impossible", key=key)
        Path(destination).write_bytes(self.objects[key][0])

    async def upload_file(self, source: Path, key: str, content_type: Optional[str] = None) -> None:
        self.calls.append(("upload", key))
        self.put(key, Path(source).read_bytes())

    async def signed_url(self, key: str, expires_in: int = 3600) -> Optional[str]:
        return self.public_url(key)

    def public_url(self, key: str) -> Optional[str]:
        if not self.public_base_url:
            return None
        return f"{self.public_base_url}/{key}"

    def calls_of(self, kind: str) -> list[str]:
        return [key for call, key in self.calls if call == kind]


async def _chunks(data: bytes, size: int = 4) -> AsyncIterator[bytes]:
    for i in range(0, len(data), size):
        yield data[i:i + size]


class FakeThumbnailExtractor(IThumbnailExtractor):
    """Extracteur qui ecrit une fausse image, ou echoue si `fail` est vrai."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[Path] = []

    async def extract(self, video_path: Path, output_path: Path, timestamp: float, size: str) -> None:
        self.calls.append(Path(video_path))
        if self.fail:
            Path(output_path).write_bytes(b"partial")
            raise RuntimeError("ffmpeg a echoue")
        Path(output_path).write_bytes(PNG_BYTES)


