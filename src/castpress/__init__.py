"""Castpress - publish podcast episodes and feeds to object storage."""

__version__ = "0.1.0"
