"""Audio file probing (duration and size)."""

import logging
from pathlib import Path
from typing import Protocol

from mutagen import File as MutagenFile
from mutagen import MutagenError
from pydantic import BaseModel, Field

from castpress.utils.errors import AudioProbeError

logger = logging.getLogger(__name__)


class AudioMetadata(BaseModel):
    """What the pipeline needs to know about a recording."""

    duration_seconds: int = Field(ge=0)
    size_bytes: int = Field(ge=0)


class AudioProbe(Protocol):
    """Anything that can measure an audio file."""

    def probe(self, path: Path) -> AudioMetadata:
        """Return the duration and size of ``path``.

        Raises:
            AudioProbeError: If the file is unreadable or not audio
        """
        ...


class MutagenAudioProbe:
    """Probe audio files with mutagen.

    Duration is truncated to whole seconds.
    """

    def probe(self, path: Path) -> AudioMetadata:
        try:
            audio = MutagenFile(path)
        except (MutagenError, OSError) as e:
            raise AudioProbeError(f"Error processing audio file {path}: {e}") from e

        info = getattr(audio, "info", None)
        length = getattr(info, "length", None)
        if audio is None or length is None:
            raise AudioProbeError(f"Error processing audio file {path}: not a recognized audio format")

        try:
            size = path.stat().st_size
        except OSError as e:
            raise AudioProbeError(f"Error processing audio file {path}: {e}") from e

        metadata = AudioMetadata(duration_seconds=int(length), size_bytes=size)
        logger.debug("Probed %s: %r", path, metadata)
        return metadata
