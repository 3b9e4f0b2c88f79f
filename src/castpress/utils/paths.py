"""Object key and file name helpers."""

import re

ARTIFACTS_DIR = "artifacts"
FEED_FILENAME = "podcast.xml"
AUDIO_EXTENSION = ".mp3"


def _join_key(*parts: str) -> str:
    return "/".join(part.strip("/") for part in parts if part.strip("/"))


def artifact_key(prefix: str, publish_name: str) -> str:
    """Object key for an uploaded recording: ``{prefix}/artifacts/{name}.mp3``."""
    return _join_key(prefix, ARTIFACTS_DIR, f"{publish_name}{AUDIO_EXTENSION}")


def feed_key(prefix: str) -> str:
    """Object key for the feed document: ``{prefix}/podcast.xml``."""
    return _join_key(prefix, FEED_FILENAME)


def slugify(text: str) -> str:
    """Turn a title into a file and key safe name.

    Example:
        >>> slugify("Episode 1: The Beginning!")
        'episode-1-the-beginning'
    """
    cleaned = re.sub(r"[^A-Za-z0-9]+", "-", text.strip().lower())
    cleaned = cleaned.strip("-")
    return cleaned or "episode"
