"""Episode records stored in the channel catalog."""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field, field_serializer, field_validator

from castpress.config.schema import CamelModel
from castpress.utils.datetime import to_utc


class EpisodeMedia(CamelModel):
    """The uploaded audio artifact backing an episode."""

    url: str
    duration: int = Field(ge=0, description="Duration in whole seconds")
    bytes: int = Field(ge=0, description="Size of the uploaded artifact")


class Episode(CamelModel):
    """A single published episode.

    ``released_at`` is always UTC with whole-second precision, matching the
    UNIX-seconds representation used on disk.
    """

    id: str
    title: str
    description: str
    summary: str
    link: str | None = None
    image: str
    released_at: datetime
    season: int = Field(default=0, ge=0)
    episode_number: int = Field(default=0, ge=0)
    media: EpisodeMedia
    keywords: list[str] = Field(default_factory=list)

    @field_validator("released_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        return value

    @field_validator("released_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return to_utc(value).replace(microsecond=0)

    @field_serializer("released_at")
    def _serialize_timestamp(self, value: datetime) -> int:
        return int(value.timestamp())
