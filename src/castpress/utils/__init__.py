"""Utility functions and helpers for Castpress."""

from castpress.utils.datetime import format_rfc822, now_utc, parse_release_date, to_utc
from castpress.utils.errors import (
    AudioProbeError,
    CastpressError,
    ConfigNotFoundError,
    DuplicateEpisodeError,
    FeedEncodingError,
    InvalidConfigError,
    InvalidEpisodeError,
    RecordParseError,
    ReleaseDateError,
    StorageIOError,
    UploadError,
)
from castpress.utils.paths import artifact_key, feed_key, slugify

__all__ = [
    # Errors
    "CastpressError",
    "StorageIOError",
    "ConfigNotFoundError",
    "RecordParseError",
    "InvalidConfigError",
    "InvalidEpisodeError",
    "DuplicateEpisodeError",
    "AudioProbeError",
    "ReleaseDateError",
    "FeedEncodingError",
    "UploadError",
    # Datetime
    "now_utc",
    "to_utc",
    "format_rfc822",
    "parse_release_date",
    # Paths
    "artifact_key",
    "feed_key",
    "slugify",
]
