# src/statform/schemas/__init__.py
"""
Pydantic schemas for data read back from the store.

These schemas give the aggregate query rows a typed, validated shape.
"""

from .reading import AggregateRow, GroupedCount

__all__ = ["AggregateRow", "GroupedCount"]
