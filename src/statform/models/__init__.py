# src/statform/models/__init__.py
"""SQLAlchemy models for the Statform application."""

from .reading import READING_MAX, READING_MIN, Reading

__all__ = ["Reading", "READING_MIN", "READING_MAX"]
