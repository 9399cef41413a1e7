# src/statform/services/__init__.py
"""Business logic services for the Statform application."""

from .history import load_stored_statistics
from .rendering import Notice, PageContext, PageRenderer
from .statistics import LiveStatistics, StoredStatistics, compute_statistics, summarize
from .submission import SubmissionHandler, SubmissionReceipt
from .validation import parse_reading, validate_batch

__all__ = [
    "LiveStatistics",
    "Notice",
    "PageContext",
    "PageRenderer",
    "StoredStatistics",
    "SubmissionHandler",
    "SubmissionReceipt",
    "compute_statistics",
    "load_stored_statistics",
    "parse_reading",
    "summarize",
    "validate_batch",
]
