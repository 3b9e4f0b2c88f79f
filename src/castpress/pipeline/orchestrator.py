"""Publishing pipeline orchestration.

Composes the audio probe, artifact publisher, numbering and feed builder
into the user-facing operations: uploading a recording, creating an
episode and rendering (optionally publishing) the feed.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from castpress.audio.probe import AudioProbe, MutagenAudioProbe
from castpress.catalog.models import Episode, EpisodeMedia
from castpress.catalog.numbering import assign_numbering
from castpress.catalog.store import EpisodeStore
from castpress.config.schema import ChannelConfig
from castpress.feed.builder import build_feed
from castpress.publish.uploader import (
    ArtifactPublisher,
    ProgressCallback,
    UploadResult,
    UploadTarget,
)
from castpress.utils.datetime import now_utc, to_utc
from castpress.utils.errors import DuplicateEpisodeError
from castpress.utils.paths import artifact_key, feed_key, slugify

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "Fill me in"
PLACEHOLDER_LINK = "Fill me in, or delete me"

StepCallback = Callable[[str, dict[str, Any]], None]


class CreateEpisodeOptions(BaseModel):
    """Input for creating a new episode."""

    file: Path
    title: str
    released_at: datetime | None = None  # Defaults to now
    publish_name: str | None = None  # Defaults to a slug of the title
    description: str = PLACEHOLDER_TEXT
    summary: str = PLACEHOLDER_TEXT
    link: str | None = PLACEHOLDER_LINK
    image: str | None = None  # Defaults to the channel image

    @property
    def resolved_publish_name(self) -> str:
        return self.publish_name or slugify(self.title)


class CreateEpisodeResult(BaseModel):
    """A created and persisted episode."""

    episode: Episode
    record_path: Path
    upload: UploadResult


class RenderFeedResult(BaseModel):
    """A rendered feed, and where it went if it was published."""

    document: str
    episode_count: int
    upload: UploadResult | None = None


def sort_for_feed(episodes: list[Episode]) -> list[Episode]:
    """Order episodes by season, episode number, then release time."""
    return sorted(
        episodes, key=lambda e: (e.season, e.episode_number, e.released_at)
    )


class PublishingOrchestrator:
    """Run the publishing operations for one channel.

    Example:
        >>> orchestrator = PublishingOrchestrator(
        ...     config,
        ...     EpisodeStore(episode_dir),
        ...     ArtifactPublisher.for_region(config.publishing.region),
        ... )
        >>> result = await orchestrator.create_episode(
        ...     CreateEpisodeOptions(file=Path("ep1.mp3"), title="Pilot")
        ... )
    """

    def __init__(
        self,
        config: ChannelConfig,
        store: EpisodeStore,
        publisher: ArtifactPublisher,
        probe: AudioProbe | None = None,
    ):
        self.config = config
        self.store = store
        self.publisher = publisher
        self.probe = probe or MutagenAudioProbe()

    def _target(self, key: str) -> UploadTarget:
        return UploadTarget(bucket=self.config.publishing.bucket, key=key)

    @staticmethod
    def _notify(callback: StepCallback | None, step: str, **data: Any) -> None:
        if callback is not None:
            callback(step, data)

    async def upload_recording(
        self,
        file: Path,
        publish_name: str,
        progress_callback: ProgressCallback | None = None,
    ) -> UploadResult:
        """Upload an mp3 to ``{prefix}/artifacts/{publish_name}.mp3``."""
        target = self._target(artifact_key(self.config.publishing.prefix, publish_name))
        return await self.publisher.upload_file(file, target, progress_callback)

    async def create_episode(
        self,
        options: CreateEpisodeOptions,
        progress_callback: ProgressCallback | None = None,
        step_callback: StepCallback | None = None,
    ) -> CreateEpisodeResult:
        """Probe, upload, number and persist a new episode.

        Nothing is uploaded if probing fails, and nothing is persisted if the
        upload fails. An upload followed by a failed save leaves the artifact
        in the store.

        Raises:
            DuplicateEpisodeError: If a record with the publish name exists
            AudioProbeError: If the file isn't readable audio
            UploadError: If the upload fails
            RecordParseError: If an existing record is malformed
            StorageIOError: If reading or writing records fails
        """
        publish_name = options.resolved_publish_name
        if self.store.exists(publish_name):
            raise DuplicateEpisodeError(
                f"Episode '{publish_name}' already exists at {self.store.path_for(publish_name)}"
            )

        self._notify(step_callback, "probe_start", file=options.file)
        audio = self.probe.probe(options.file)
        self._notify(
            step_callback,
            "probe_complete",
            duration_seconds=audio.duration_seconds,
            size_bytes=audio.size_bytes,
        )

        self._notify(step_callback, "upload_start", size_bytes=audio.size_bytes)
        upload = await self.upload_recording(options.file, publish_name, progress_callback)
        self._notify(step_callback, "upload_complete", url=upload.url)

        existing = await self.store.load_all()
        numbering = assign_numbering(existing)
        self._notify(
            step_callback,
            "numbering_complete",
            season=numbering.season,
            episode_number=numbering.episode_number,
        )

        channel = self.config.channel
        released_at = to_utc(options.released_at) if options.released_at else now_utc()
        episode = Episode(
            id=str(uuid.uuid4()),
            title=options.title,
            description=options.description,
            summary=options.summary,
            link=options.link,
            image=options.image or channel.image,
            released_at=released_at,
            season=numbering.season,
            episode_number=numbering.episode_number,
            media=EpisodeMedia(
                url=upload.url,
                duration=audio.duration_seconds,
                bytes=upload.bytes,
            ),
            keywords=list(channel.keywords),
        )
        logger.info(
            "Created episode '%s' (season %d, episode %d)",
            episode.title,
            episode.season,
            episode.episode_number,
        )

        record_path = await self.store.save(episode, publish_name)
        self._notify(step_callback, "record_saved", path=record_path)

        return CreateEpisodeResult(episode=episode, record_path=record_path, upload=upload)

    async def render_feed(
        self,
        upload: bool = False,
        progress_callback: ProgressCallback | None = None,
        built_at: datetime | None = None,
    ) -> RenderFeedResult:
        """Build the feed from the catalog and optionally publish it.

        With ``upload`` the document is stored as ``{prefix}/podcast.xml``.

        Raises:
            RecordParseError: If a record is malformed
            StorageIOError: If reading records fails
            FeedEncodingError: If the document can't be encoded
            UploadError: If publishing fails
        """
        episodes = sort_for_feed(await self.store.load_all())
        document = build_feed(self.config.channel, episodes, built_at=built_at)

        result = RenderFeedResult(document=document, episode_count=len(episodes))
        if upload:
            target = self._target(feed_key(self.config.publishing.prefix))
            result.upload = await self.publisher.upload_bytes(
                document.encode("utf-8"), target, progress_callback
            )

        return result
