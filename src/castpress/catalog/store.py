"""YAML file storage for episode records.

Each episode is one human-readable YAML document with camelCase keys, kept
in the channel's ``episodes/`` directory.
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

import aiofiles
import yaml
from pydantic import ValidationError

from castpress.catalog.models import Episode
from castpress.utils.errors import DuplicateEpisodeError, InvalidEpisodeError, StorageIOError

logger = logging.getLogger(__name__)

RECORD_SUFFIXES = (".yaml", ".yml")


def dump_episode(episode: Episode) -> str:
    """Serialize an episode to its YAML document."""
    data = episode.model_dump(mode="json", by_alias=True)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def parse_episode(text: str, source: str = "<string>") -> Episode:
    """Deserialize an episode YAML document.

    Raises:
        InvalidEpisodeError: If the YAML or its contents are invalid
    """
    try:
        data = yaml.safe_load(text)
        return Episode.model_validate(data)
    except (yaml.YAMLError, ValidationError) as e:
        raise InvalidEpisodeError(f"Invalid episode record in {source}: {e}") from e


class EpisodeStore:
    """Reads and writes the episode records of one channel.

    Example:
        >>> store = EpisodeStore(Path("my-show/episodes"))
        >>> episodes = await store.load_all()
        >>> await store.save(episode, "2024-05-01")
    """

    def __init__(self, episode_dir: Path):
        self.episode_dir = episode_dir

    def path_for(self, name: str) -> Path:
        """Record file for an episode saved under ``name``."""
        return self.episode_dir / f"{name}.yaml"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def record_files(self) -> list[Path]:
        """Episode record files in file-name order."""
        if not self.episode_dir.exists():
            return []

        try:
            return sorted(
                path
                for path in self.episode_dir.iterdir()
                if path.is_file()
                and path.suffix in RECORD_SUFFIXES
                and not path.name.startswith(".")
            )
        except OSError as e:
            raise StorageIOError(f"Failed to list {self.episode_dir}: {e}") from e

    async def load(self, path: Path) -> Episode:
        """Load a single episode record.

        Raises:
            StorageIOError: If the file can't be read
            InvalidEpisodeError: If the record is malformed
        """
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                text = await f.read()
        except OSError as e:
            raise StorageIOError(f"Failed to read episode record {path}: {e}") from e

        return parse_episode(text, source=str(path))

    async def load_all(self) -> list[Episode]:
        """Load every episode in the catalog.

        A missing episode directory is an empty catalog.
        """
        episodes = [await self.load(path) for path in self.record_files()]
        logger.info("Loaded %d episode(s) from %s", len(episodes), self.episode_dir)
        return episodes

    async def save(self, episode: Episode, name: str) -> Path:
        """Persist a new episode record as ``{name}.yaml``.

        The record is written to a temp file and hard-linked into place, so a
        failed write never leaves a partial record behind and a record that
        appears concurrently is never replaced.

        Raises:
            DuplicateEpisodeError: If a record with this name already exists
            StorageIOError: If writing fails
        """
        target = self.path_for(name)
        if self.exists(name):
            raise DuplicateEpisodeError(f"Episode record '{target}' already exists")

        content = dump_episode(episode)
        temp_path: Path | None = None

        try:
            self.episode_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.episode_dir, prefix=".tmp_", suffix=".yaml", delete=False
            ) as tmp:
                temp_path = Path(tmp.name)

            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(content)

            # link() fails if the target exists, unlike replace()
            await asyncio.to_thread(os.link, temp_path, target)
        except FileExistsError as e:
            raise DuplicateEpisodeError(f"Episode record '{target}' already exists") from e
        except OSError as e:
            raise StorageIOError(f"Failed to write episode record {target}: {e}") from e
        finally:
            if temp_path is not None:
                await asyncio.to_thread(temp_path.unlink, missing_ok=True)

        logger.info("Saved episode '%s' to %s", episode.title, target)
        return target
