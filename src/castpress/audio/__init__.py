"""Audio probing for Castpress."""

from castpress.audio.probe import AudioMetadata, AudioProbe, MutagenAudioProbe

__all__ = [
    "AudioMetadata",
    "AudioProbe",
    "MutagenAudioProbe",
]
