"""Channel configuration schema models using Pydantic."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class OwnerDetails(CamelModel):
    """Channel owner shown in the iTunes owner block."""

    name: str
    email: str


class ChannelDetails(CamelModel):
    """Channel metadata rendered into the feed document."""

    title: str
    link: str | None = None
    description: str
    subtitle: str
    summary: str
    explicit: bool
    image: str
    owner: OwnerDetails
    keywords: list[str] = Field(default_factory=list)


class Region(CamelModel):
    """Object store region; ``endpoint`` is a host such as ``nyc3.digitaloceanspaces.com``."""

    name: str
    endpoint: str

    @property
    def host(self) -> str:
        """Endpoint without scheme or trailing slash."""
        _, sep, rest = self.endpoint.partition("://")
        return (rest if sep else self.endpoint).rstrip("/")

    @property
    def endpoint_url(self) -> str:
        """Endpoint as a full URL for the S3 client."""
        if "://" in self.endpoint:
            return self.endpoint.rstrip("/")
        return f"https://{self.host}"


class PublishingConfig(CamelModel):
    """Where artifacts and the feed are published."""

    region: Region
    bucket: str
    prefix: str


class ChannelConfig(CamelModel):
    """Complete ``channel.yaml`` document.

    On disk the channel details sit at the top level next to the
    ``publishing`` mapping; in memory they are grouped under ``channel``.
    """

    channel: ChannelDetails
    publishing: PublishingConfig

    @model_validator(mode="before")
    @classmethod
    def _nest_channel_details(cls, data: Any) -> Any:
        if isinstance(data, dict) and "channel" not in data:
            details = {k: v for k, v in data.items() if k != "publishing"}
            return {"channel": details, "publishing": data.get("publishing")}
        return data

    def to_document(self) -> dict[str, Any]:
        """Dump back to the flat camelCase layout used on disk."""
        document = self.channel.model_dump(mode="json", by_alias=True)
        document["publishing"] = self.publishing.model_dump(mode="json", by_alias=True)
        return document
