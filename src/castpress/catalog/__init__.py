"""Episode catalog: records, numbering and storage."""

from castpress.catalog.models import Episode, EpisodeMedia
from castpress.catalog.numbering import Numbering, assign_numbering
from castpress.catalog.store import EpisodeStore, dump_episode, parse_episode

__all__ = [
    "Episode",
    "EpisodeMedia",
    "EpisodeStore",
    "Numbering",
    "assign_numbering",
    "dump_episode",
    "parse_episode",
]
