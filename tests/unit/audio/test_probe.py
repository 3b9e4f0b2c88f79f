"""Tests for audio probing."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from mutagen import MutagenError

from castpress.audio import AudioMetadata, MutagenAudioProbe
from castpress.utils.errors import AudioProbeError


class TestAudioMetadata:
    """Test AudioMetadata model."""

    def test_validation_negative_duration(self) -> None:
        """Test validation rejects negative durations."""
        with pytest.raises(ValueError, match="greater than or equal to 0"):
            AudioMetadata(duration_seconds=-1, size_bytes=0)


class TestMutagenAudioProbe:
    """Test MutagenAudioProbe class."""

    @pytest.fixture
    def audio_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "episode.mp3"
        path.write_bytes(b"\x00" * 2048)
        return path

    def test_probe_success(self, audio_file: Path) -> None:
        """Test duration is truncated to whole seconds and size is read."""
        audio = MagicMock()
        audio.info.length = 754.9

        with patch("castpress.audio.probe.MutagenFile", return_value=audio) as mutagen_file:
            metadata = MutagenAudioProbe().probe(audio_file)

        mutagen_file.assert_called_once_with(audio_file)
        assert metadata == AudioMetadata(duration_seconds=754, size_bytes=2048)

    def test_probe_unrecognized_format(self, audio_file: Path) -> None:
        """Test files mutagen can't identify are rejected."""
        with patch("castpress.audio.probe.MutagenFile", return_value=None):
            with pytest.raises(AudioProbeError, match="not a recognized audio format"):
                MutagenAudioProbe().probe(audio_file)

    def test_probe_mutagen_error(self, audio_file: Path) -> None:
        """Test mutagen failures are wrapped."""
        cause = MutagenError("can't sync to MPEG frame")

        with patch("castpress.audio.probe.MutagenFile", side_effect=cause):
            with pytest.raises(AudioProbeError) as exc_info:
                MutagenAudioProbe().probe(audio_file)

        assert exc_info.value.__cause__ is cause

    def test_probe_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises AudioProbeError."""
        with pytest.raises(AudioProbeError):
            MutagenAudioProbe().probe(tmp_path / "missing.mp3")
