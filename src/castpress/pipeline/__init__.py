"""Publishing pipeline for Castpress."""

from castpress.pipeline.orchestrator import (
    CreateEpisodeOptions,
    CreateEpisodeResult,
    PublishingOrchestrator,
    RenderFeedResult,
    StepCallback,
    sort_for_feed,
)

__all__ = [
    "CreateEpisodeOptions",
    "CreateEpisodeResult",
    "PublishingOrchestrator",
    "RenderFeedResult",
    "StepCallback",
    "sort_for_feed",
]
