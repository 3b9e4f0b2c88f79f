"""Tests for configuration schema models."""

import pytest
from pydantic import ValidationError

from castpress.config.schema import ChannelConfig, ChannelDetails, OwnerDetails


class TestChannelDetails:
    """Tests for ChannelDetails model."""

    def test_minimal(self) -> None:
        """Test ChannelDetails with only required fields."""
        details = ChannelDetails(
            title="T",
            description="d",
            subtitle="s",
            summary="sum",
            explicit=False,
            image="i",
            owner=OwnerDetails(name="N", email="e@x"),
        )

        assert details.link is None
        assert details.keywords == []

    def test_missing_owner_raises(self) -> None:
        """Test that owner is required."""
        with pytest.raises(ValidationError):
            ChannelDetails(  # type: ignore[call-arg]
                title="T",
                description="d",
                subtitle="s",
                summary="sum",
                explicit=False,
                image="i",
            )

    def test_is_immutable(self, channel_details: ChannelDetails) -> None:
        """Test channel details can't be mutated."""
        with pytest.raises(ValidationError):
            channel_details.title = "other"  # type: ignore[misc]


class TestChannelConfig:
    """Tests for ChannelConfig model."""

    def test_flat_document(self, sample_channel_dict: dict) -> None:
        """Test top-level channel fields are grouped under channel."""
        config = ChannelConfig.model_validate(sample_channel_dict)

        assert config.channel.title == "T"
        assert config.channel.owner.email == "e@x"
        assert config.publishing.bucket == "my-bucket"
        assert config.publishing.prefix == "shows/t"
        assert config.publishing.region.name == "nyc3"

    def test_nested_document(self, channel_details: ChannelDetails, sample_channel_dict: dict) -> None:
        """Test an already nested document is accepted."""
        config = ChannelConfig.model_validate(
            {"channel": channel_details, "publishing": sample_channel_dict["publishing"]}
        )

        assert config.channel == channel_details

    def test_missing_publishing_raises(self, sample_channel_dict: dict) -> None:
        """Test that the publishing section is required."""
        del sample_channel_dict["publishing"]

        with pytest.raises(ValidationError):
            ChannelConfig.model_validate(sample_channel_dict)

    def test_to_document_round_trip(self, sample_channel_dict: dict) -> None:
        """Test dumping restores the flat camelCase layout."""
        config = ChannelConfig.model_validate(sample_channel_dict)

        assert config.to_document() == sample_channel_dict
        assert ChannelConfig.model_validate(config.to_document()) == config
