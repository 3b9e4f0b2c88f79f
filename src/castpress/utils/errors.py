"""Custom exceptions for Castpress."""


class CastpressError(Exception):
    """Base exception for all Castpress errors."""

    pass


class StorageIOError(CastpressError):
    """Reading or writing a local file failed."""

    pass


class ConfigNotFoundError(StorageIOError):
    """Channel configuration file not found."""

    pass


class RecordParseError(CastpressError):
    """A channel or episode record could not be deserialized."""

    pass


class InvalidConfigError(RecordParseError):
    """Invalid channel configuration data."""

    pass


class InvalidEpisodeError(RecordParseError):
    """Invalid episode record data."""

    pass


class DuplicateEpisodeError(CastpressError):
    """An episode record with the same name already exists."""

    pass


class AudioProbeError(CastpressError):
    """Audio file could not be read or is not audio."""

    pass


class ReleaseDateError(CastpressError):
    """Release date could not be parsed."""

    pass


class FeedEncodingError(CastpressError):
    """Assembled feed document is not valid UTF-8 text."""

    pass


class UploadError(CastpressError):
    """Object store rejected the upload or the transfer failed."""

    pass
