"""
Tests pour le proxy de streaming et le parsing de l'en-tete Range.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.core.entities import VideoObject
from src.core.exceptions import ObjectStoreError, RangeNotSatisfiableError, VideoNotFoundError
from src.core.value_objects import ByteRange
from src.services.catalog import CatalogService
from src.services.streaming import StreamingService, guard_stream, parse_range_header
from tests.fakes import FakeObjectStore, utc

DATA = bytes(range(256)) * 4  # 1024 octets


class TestParseRangeHeader:
    """Parsing de "bytes=start-end"."""

    def test_closed_range(self):
        assert parse_range_header("bytes=0-99", 1000) == ByteRange(0, 99)

    def test_open_ended_range(self):
        assert parse_range_header("bytes=500-", 1000) == ByteRange(500, 999)

    def test_end_is_clamped_to_size(self):
        assert parse_range_header("bytes=900-5000", 1000) == ByteRange(900, 999)

    def test_only_first_range_is_used(self):
        assert parse_range_header("bytes=0-9, 20-29", 1000) == ByteRange(0, 9)

    @pytest.mark.parametrize(
        "header",
        ["bytes=-500", "bytes=1000-", "bytes=50-10", "items=0-10", "bytes=abc", "0-10"],
    )
    def test_unsatisfiable(self, header):
        with pytest.raises(RangeNotSatisfiableError) as exc_info:
            parse_range_header(header, 1000)

        assert exc_info.value.total == 1000


class TestStreamingService:
    """Ouverture des flux complets et partiels."""

    @pytest.fixture
    def store(self) -> FakeObjectStore:
        store = FakeObjectStore()
        store.put("videos/a.mp4", DATA)
        return store

    @pytest.fixture
    def video(self) -> VideoObject:
        return VideoObject(key="videos/a.mp4", filename="a.mp4", last_modified=utc(2024), size=len(DATA))

    @pytest.fixture
    def service(self, store) -> StreamingService:
        catalog = MagicMock(spec=CatalogService)
        return StreamingService(catalog=catalog, object_store=store)

    @staticmethod
    async def _read(stream) -> bytes:
        return b"".join([chunk async for chunk in stream.body])

    @pytest.mark.asyncio
    async def test_full_stream(self, service, video):
        stream = await service.open(video)

        assert stream.status_code == 200
        assert stream.headers["Content-Length"] == "1024"
        assert stream.headers["Content-Type"] == "video/mp4"
        assert stream.headers["Accept-Ranges"] == "bytes"
        assert await self._read(stream) == DATA

    @pytest.mark.asyncio
    async def test_partial_stream(self, service, video):
        stream = await service.open(video, "bytes=0-99")

        assert stream.status_code == 206
        assert stream.headers["Content-Range"] == "bytes 0-99/1024"
        assert stream.headers["Content-Length"] == "100"
        assert await self._read(stream) == DATA[:100]

    @pytest.mark.asyncio
    async def test_blank_range_header_means_full_stream(self, service, video):
        stream = await service.open(video, "   ")

        assert stream.status_code == 200

    @pytest.mark.asyncio
    async def test_unsatisfiable_range_does_not_open_object(self, service, store, video):
        with pytest.raises(RangeNotSatisfiableError):
            await service.open(video, "bytes=5000-")

        assert store.calls_of("get") == []

    @pytest.mark.asyncio
    async def test_vanished_object(self, service, store, video):
        del store.objects["videos/a.mp4"]

        with pytest.raises(VideoNotFoundError):
            await service.open(video)

    @pytest.mark.asyncio
    async def test_upstream_failure_before_first_byte(self, service, store, video):
        store.fail_get = True

        with pytest.raises(ObjectStoreError):
            await service.open(video)

    def test_redirect_only_when_public(self, store, video):
        store.public_base_url = "https://cdn.example.com"
        catalog = MagicMock(spec=CatalogService)

        assert StreamingService(catalog, store, public_enabled=False).redirect_url(video) is None
        assert (
            StreamingService(catalog, store, public_enabled=True).redirect_url(video)
            == "https://cdn.example.com/videos/a.mp4"
        )

    @pytest.mark.asyncio
    async def test_locate_delegates_to_catalog(self, store, video):
        catalog = MagicMock(spec=CatalogService)
        catalog.find_video = AsyncMock(return_value=video)

        assert await StreamingService(catalog, store).locate("a.mp4") is video
        catalog.find_video.assert_awaited_once_with("a.mp4")


class TestGuardStream:
    """Coupure amont en cours de reponse."""

    @pytest.mark.asyncio
    async def test_error_mid_stream_is_reraised(self):
        async def broken():
            yield b"abc"
            raise ObjectStoreError("coupure")

        received = []
        with pytest.raises(ObjectStoreError):
            async for chunk in guard_stream(broken(), "a.mp4"):
                received.append(chunk)

        assert received == [b"abc"]
