"""Shared fixtures for Castpress tests."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, BinaryIO

import pytest
import yaml

from castpress.catalog.models import Episode, EpisodeMedia
from castpress.config.schema import ChannelConfig, ChannelDetails, OwnerDetails
from castpress.publish.store import public_object_url


class MemoryObjectStore:
    """In-memory ObjectStore that records every put."""

    def __init__(self, host: str = "nyc3.example.com", read_size: int = 1000):
        self.host = host
        self.read_size = read_size
        self.objects: dict[tuple[str, str], bytes] = {}
        self.requests: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def put(
        self,
        bucket: str,
        key: str,
        body: BinaryIO,
        length: int,
        content_type: str,
    ) -> str:
        if self.error is not None:
            raise self.error

        chunks = []
        largest = 0
        while True:
            chunk = body.read(self.read_size)
            if not chunk:
                break
            largest = max(largest, len(chunk))
            chunks.append(chunk)

        self.objects[(bucket, key)] = b"".join(chunks)
        self.requests.append(
            {
                "bucket": bucket,
                "key": key,
                "length": length,
                "content_type": content_type,
                "largest_chunk": largest,
            }
        )
        return public_object_url(bucket, self.host, key)


@pytest.fixture
def memory_store() -> MemoryObjectStore:
    """Fresh in-memory object store."""
    return MemoryObjectStore()


@pytest.fixture
def sample_channel_dict() -> dict:
    """Channel configuration as it appears in channel.yaml."""
    return {
        "title": "T",
        "link": "https://example.com",
        "description": "A show about things",
        "subtitle": "Things",
        "summary": "All **about** things",
        "explicit": True,
        "image": "https://example.com/cover.jpg",
        "owner": {"name": "N", "email": "e@x"},
        "keywords": ["fiction", "audio"],
        "publishing": {
            "region": {"name": "nyc3", "endpoint": "nyc3.example.com"},
            "bucket": "my-bucket",
            "prefix": "shows/t",
        },
    }


@pytest.fixture
def channel_config(sample_channel_dict: dict) -> ChannelConfig:
    return ChannelConfig.model_validate(sample_channel_dict)


@pytest.fixture
def channel_details() -> ChannelDetails:
    return ChannelDetails(
        title="T",
        link="https://example.com",
        description="description",
        subtitle="subtitle",
        summary="summary",
        explicit=True,
        image="https://example.com/cover.jpg",
        owner=OwnerDetails(name="N", email="e@x"),
        keywords=["keyword"],
    )


@pytest.fixture
def make_episode():
    """Factory for episodes with sensible defaults."""

    def _make(
        title: str = "Episode",
        season: int = 1,
        episode_number: int = 1,
        **overrides: Any,
    ) -> Episode:
        data: dict[str, Any] = {
            "id": f"id-{title}",
            "title": title,
            "description": "description",
            "summary": "summary",
            "link": "https://example.com/ep",
            "image": "https://example.com/ep.jpg",
            "released_at": datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
            "season": season,
            "episode_number": episode_number,
            "media": EpisodeMedia(url="https://x", duration=12, bytes=1000),
            "keywords": ["keyword"],
        }
        data.update(overrides)
        return Episode(**data)

    return _make


@pytest.fixture
def channel_file(tmp_path: Path, sample_channel_dict: dict) -> Path:
    """channel.yaml written to a temporary show directory."""
    path = tmp_path / "show" / "channel.yaml"
    path.parent.mkdir(parents=True)
    with open(path, "w") as f:
        yaml.safe_dump(sample_channel_dict, f)
    return path
