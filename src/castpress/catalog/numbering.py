"""Season and episode number assignment for new episodes."""

from collections.abc import Iterable
from typing import NamedTuple

from castpress.catalog.models import Episode


class Numbering(NamedTuple):
    """Position of an episode in the channel's release sequence."""

    season: int
    episode_number: int


def assign_numbering(existing: Iterable[Episode]) -> Numbering:
    """Compute the numbering for an episode appended to ``existing``.

    The new episode goes into the highest season seen, one past the highest
    episode number tracked for that season. An empty catalog yields
    ``(0, 1)``: the season is left at its default rather than starting at 1.

    The episode-number maximum is not reset when a higher season appears, so
    a catalog scanned out of season order can carry an earlier season's
    number forward.
    """
    max_season = 0
    max_episode_number = 0

    for episode in existing:
        if episode.season > max_season:
            max_season = episode.season
        if episode.season == max_season and episode.episode_number > max_episode_number:
            max_episode_number = episode.episode_number

    return Numbering(season=max_season, episode_number=max_episode_number + 1)
