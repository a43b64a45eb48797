"""
Tests pour FfmpegThumbnailExtractor (sous-processus mocke).
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.adapters.media.ffmpeg_extractor import FfmpegThumbnailExtractor
from src.core.exceptions import ThumbnailExtractionError


def _process(returncode: int = 0, stderr: bytes = b"") -> MagicMock:
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(b"", stderr))
    process.wait = AsyncMock(return_value=returncode)
    return process


class TestBuildCommand:
    def test_seek_before_input_single_frame(self):
        extractor = FfmpegThumbnailExtractor(ffmpeg_path="/usr/bin/ffmpeg")

        cmd = extractor.build_command(Path("in.mp4"), Path("out.png"), 5.0, "320x240")

        assert cmd == [
            "/usr/bin/ffmpeg",
            "-ss", "5.000",
            "-i", "in.mp4",
            "-frames:v", "1",
            "-update", "1",
            "-s", "320x240",
            "-y",
            "-loglevel", "error",
            "out.png",
        ]

    def test_percent_in_output_name_written_literally(self):
        extractor = FfmpegThumbnailExtractor()

        cmd = extractor.build_command(Path("in.mp4"), Path("100%.E01.png"), 5.0, "320x240")

        assert cmd[-1] == "100%.E01.png"
        assert cmd[cmd.index("-update") + 1] == "1"
        assert cmd.index("-update") < cmd.index("100%.E01.png")


class TestExtract:
    @pytest.mark.asyncio
    async def test_success(self, tmp_path):
        output = tmp_path / "out.png"

        async def fake_exec(*cmd, **kwargs):
            output.write_bytes(b"png")
            return _process()

        with patch("asyncio.create_subprocess_exec", side_effect=fake_exec) as mock_exec:
            await FfmpegThumbnailExtractor().extract(tmp_path / "in.mp4", output, 5.0, "320x240")

        assert mock_exec.call_args.args[0] == "ffmpeg"

    @pytest.mark.asyncio
    async def test_non_zero_exit(self, tmp_path):
        with patch(
            "asyncio.create_subprocess_exec",
            AsyncMock(return_value=_process(returncode=1, stderr=b"Invalid data")),
        ):
            with pytest.raises(ThumbnailExtractionError, match="Invalid data"):
                await FfmpegThumbnailExtractor().extract(
                    tmp_path / "in.mp4", tmp_path / "out.png", 5.0, "320x240"
                )

    @pytest.mark.asyncio
    async def test_no_output_file(self, tmp_path):
        """Video plus courte que le timestamp : aucune image produite."""
        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=_process())):
            with pytest.raises(ThumbnailExtractionError):
                await FfmpegThumbnailExtractor().extract(
                    tmp_path / "in.mp4", tmp_path / "out.png", 5.0, "320x240"
                )

    @pytest.mark.asyncio
    async def test_missing_binary(self, tmp_path):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError())):
            with pytest.raises(ThumbnailExtractionError):
                await FfmpegThumbnailExtractor(ffmpeg_path="nope").extract(
                    tmp_path / "in.mp4", tmp_path / "out.png", 5.0, "320x240"
                )

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, tmp_path):
        process = _process()

        async def never_finishes():
            await asyncio.sleep(10)

        process.communicate = never_finishes

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(ThumbnailExtractionError, match="Timeout"):
                await FfmpegThumbnailExtractor(timeout=0.05).extract(
                    tmp_path / "in.mp4", tmp_path / "out.png", 5.0, "320x240"
                )

        process.kill.assert_called_once()
