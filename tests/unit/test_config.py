"""Tests pour Settings (pydantic-settings)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.config import Settings


class TestSettings:
    def test_cache_paths_are_derived_from_cache_dir(self, tmp_path):
        settings = Settings(cache_dir=tmp_path)

        assert settings.thumbnail_cache_dir == tmp_path / "thumbnails"
        assert settings.metadata_file == tmp_path / "metadata.json"
        assert settings.series_metadata_file == tmp_path / "series_metadata.json"

    def test_explicit_paths_are_kept(self, tmp_path):
        settings = Settings(cache_dir=tmp_path, metadata_file=tmp_path / "custom.json")

        assert settings.metadata_file == tmp_path / "custom.json"

    def test_home_is_expanded(self):
        settings = Settings(cache_dir="~/cloudvid-cache")

        assert settings.cache_dir == Path.home() / "cloudvid-cache"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CLOUDVID_BUCKET_NAME", "from-env")
        monkeypatch.setenv("CLOUDVID_SHOW_UPDATE_DIALOG", "true")

        settings = Settings()

        assert settings.bucket_name == "from-env"
        assert settings.show_update_dialog is True

    def test_endpoint_from_r2_account(self):
        settings = Settings(r2_account_id="abc123")

        assert settings.endpoint_url == "https://abc123.r2.cloudflarestorage.com"

    def test_explicit_endpoint_wins(self):
        settings = Settings(r2_account_id="abc123", s3_endpoint_url="http://minio:9000")

        assert settings.endpoint_url == "http://minio:9000"

    def test_public_url_normalization(self):
        assert Settings(public_url="https://cdn.example.com/").public_url == "https://cdn.example.com"
        assert Settings(public_url="").public_enabled is False
        assert Settings(public_url="https://cdn.example.com").public_enabled is True

    @pytest.mark.parametrize("prefix, expected", [("thumbnails", "thumbnails/"), ("/thumbs/", "thumbs/")])
    def test_thumbnail_prefix_ends_with_slash(self, prefix, expected):
        assert Settings(thumbnail_prefix=prefix).thumbnail_prefix == expected

    def test_invalid_thumbnail_size(self):
        with pytest.raises(ValidationError):
            Settings(thumbnail_size="large")

    def test_ensure_directories(self, tmp_path):
        settings = Settings(cache_dir=tmp_path / "cache")

        settings.ensure_directories()

        assert settings.thumbnail_cache_dir.is_dir()
