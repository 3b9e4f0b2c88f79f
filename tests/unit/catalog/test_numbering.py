"""Tests for episode numbering."""

from castpress.catalog.numbering import Numbering, assign_numbering


class TestAssignNumbering:
    """Tests for assign_numbering."""

    def test_empty_catalog(self) -> None:
        """Test that an empty catalog starts at season 0, episode 1."""
        assert assign_numbering([]) == Numbering(season=0, episode_number=1)

    def test_appends_to_latest_season(self, make_episode) -> None:
        """Test numbering continues the highest season."""
        episodes = [
            make_episode("a", season=1, episode_number=1),
            make_episode("b", season=1, episode_number=2),
            make_episode("c", season=2, episode_number=4),
            make_episode("d", season=2, episode_number=5),
        ]

        assert assign_numbering(episodes) == (2, 6)

    def test_order_independent_within_season(self, make_episode) -> None:
        """Test that scan order within a season doesn't matter."""
        episodes = [
            make_episode("c", season=2, episode_number=5),
            make_episode("a", season=2, episode_number=1),
            make_episode("b", season=2, episode_number=3),
        ]

        assert assign_numbering(episodes) == (2, 6)

    def test_ignores_lower_seasons_after_max(self, make_episode) -> None:
        """Test earlier seasons scanned later don't raise the count."""
        episodes = [
            make_episode("b", season=2, episode_number=2),
            make_episode("a", season=1, episode_number=9),
        ]

        assert assign_numbering(episodes) == (2, 3)

    def test_earlier_season_number_carries_forward(self, make_episode) -> None:
        """Test the episode maximum isn't reset when a higher season appears."""
        episodes = [
            make_episode("a", season=1, episode_number=5),
            make_episode("b", season=2, episode_number=1),
        ]

        assert assign_numbering(episodes) == (2, 6)

    def test_legacy_records_without_numbering(self, make_episode) -> None:
        """Test records at the default season/number of 0."""
        episodes = [make_episode("a", season=0, episode_number=0)]

        assert assign_numbering(episodes) == (0, 1)

    def test_accepts_any_iterable(self, make_episode) -> None:
        """Test a generator is accepted."""
        numbering = assign_numbering(
            make_episode(str(n), season=1, episode_number=n) for n in range(1, 4)
        )

        assert numbering.season == 1
        assert numbering.episode_number == 4
