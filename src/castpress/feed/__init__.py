"""Podcast feed document generation."""

from castpress.feed.builder import add_episode_item, build_feed, render_markdown

__all__ = ["build_feed", "add_episode_item", "render_markdown"]
