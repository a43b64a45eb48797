"""
Fixtures pytest partagees pour les tests CloudVid.

Ce module contient les fixtures communes utilisees dans les tests:
- Bucket en memoire et extracteur factice (voir tests/fakes.py)
- Mock de IFilenameParser
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from typing import Optional
from unittest.mock import MagicMock

import pytest

from src.config import Settings
from src.core.entities import VideoObject
from src.core.ports.parser import IFilenameParser
from src.core.value_objects import ParsedFilename
from tests.fakes import FakeObjectStore, FakeThumbnailExtractor, utc


@pytest.fixture
def fake_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def fake_extractor() -> FakeThumbnailExtractor:
    return FakeThumbnailExtractor()


@pytest.fixture
def mock_filename_parser() -> MagicMock:
    """
    Mock de IFilenameParser pour les tests.

    Retourne le nom sans extension comme titre de serie, sans episode.
    """
    mock = MagicMock(spec=IFilenameParser)
    mock.parse.side_effect = lambda filename: ParsedFilename(series_title=Path(filename).stem)
    return mock


@pytest.fixture
def make_video():
    """Fabrique de VideoObject."""

    def _make(filename: str, key: Optional[str] = None, year: int = 2024) -> VideoObject:
        return VideoObject(key=key or f"videos/{filename}", filename=filename, last_modified=utc(year))

    return _make


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le cache de chaque test.
    """
    return Settings(
        cache_dir=tmp_path / "cache",
        bucket_name="test-bucket",
        log_file=tmp_path / "logs" / "test.log",
        public_url=None,
        s3_endpoint_url="http://localhost:9000",
        s3_access_key_id="test",
        s3_secret_access_key="test",
        s3_region="us-east-1",
    )
