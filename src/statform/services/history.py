"""Statistics over everything stored so far."""
from __future__ import annotations

import logging

from statform.core.errors import StoreQueryError
from statform.repositories.reading_repo import ReadingRepository
from statform.services.statistics import StoredStatistics, build_stored_statistics

logger = logging.getLogger(__name__)


def load_stored_statistics(repo: ReadingRepository, tax_rate: float) -> StoredStatistics:
    """Query the aggregates for the stored-values panel.

    A failed query does not abort the request: it is logged and placeholder
    statistics flagged with ``error`` are returned instead.
    """
    try:
        aggregate = repo.query_aggregate(active_only=True)
        grouped = repo.query_grouped_counts(active_only=True)
    except StoreQueryError:
        logger.exception("Loading stored statistics failed")
        return StoredStatistics.unavailable(tax_rate)
    return build_stored_statistics(aggregate, grouped, tax_rate)
