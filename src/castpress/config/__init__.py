"""Channel configuration for Castpress."""

from castpress.config.manager import episode_dir_for, load_channel_config
from castpress.config.schema import (
    ChannelConfig,
    ChannelDetails,
    OwnerDetails,
    PublishingConfig,
    Region,
)

__all__ = [
    "ChannelConfig",
    "ChannelDetails",
    "OwnerDetails",
    "PublishingConfig",
    "Region",
    "load_channel_config",
    "episode_dir_for",
]
