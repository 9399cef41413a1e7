"""Repositories wrapping database access."""

from .reading_repo import ReadingRepository

__all__ = ["ReadingRepository"]
