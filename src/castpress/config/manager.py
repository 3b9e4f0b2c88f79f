"""Loading the channel configuration file."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from castpress.config.schema import ChannelConfig
from castpress.utils.errors import ConfigNotFoundError, InvalidConfigError, StorageIOError

logger = logging.getLogger(__name__)

EPISODES_DIRNAME = "episodes"


def load_channel_config(channel_file: Path) -> ChannelConfig:
    """Load and validate a ``channel.yaml`` file.

    Args:
        channel_file: Path to the channel configuration

    Returns:
        Validated ChannelConfig instance

    Raises:
        ConfigNotFoundError: If the file doesn't exist
        StorageIOError: If the file can't be read
        InvalidConfigError: If the YAML or its contents are invalid
    """
    if not channel_file.exists():
        raise ConfigNotFoundError(f"Channel file '{channel_file}' doesn't exist")

    try:
        text = channel_file.read_text(encoding="utf-8")
    except OSError as e:
        raise StorageIOError(f"Failed to read {channel_file}: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
        config = ChannelConfig.model_validate(data)
    except (yaml.YAMLError, ValidationError) as e:
        raise InvalidConfigError(
            f"Invalid channel configuration in {channel_file}: {e}"
        ) from e

    logger.debug("Channel config: %r", config)
    return config


def episode_dir_for(channel_file: Path) -> Path:
    """Episode records live in ``episodes/`` beside the channel file."""
    return channel_file.parent / EPISODES_DIRNAME
