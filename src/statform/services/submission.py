"""Service-level handling of submitted form batches."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from statform.core.errors import StoreWriteError, ValidationError
from statform.core.settings import Settings
from statform.repositories.reading_repo import ReadingRepository
from statform.services.statistics import LiveStatistics, summarize
from statform.services.validation import validate_batch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionReceipt:
    """Outcome of an accepted batch."""

    row_ids: tuple[int, ...]
    statistics: LiveStatistics

    @property
    def count(self) -> int:
        return len(self.row_ids)


class SubmissionHandler:
    """Validate a batch of raw field values and store it."""

    def __init__(self, repo: ReadingRepository, settings: Settings) -> None:
        self.repo = repo
        self.settings = settings

    def submit(self, raw_values: Sequence[str]) -> SubmissionReceipt:
        """Store every value of ``raw_values`` or none of them.

        Args:
            raw_values: Field values in submission order.

        Returns:
            The new row ids, in submission order, and the batch statistics.

        Raises:
            ValidationError: If any value is empty, non-numeric or out of range.
                Nothing is written.
            StoreWriteError: If an insert fails. Earlier inserts of the batch
                remain committed; ``written`` says how many.

        Notes:
            Inserts are committed one by one, so a write failure half way
            through the batch leaves a partial batch behind.
        """
        try:
            values = validate_batch(raw_values)
        except ValidationError as err:
            logger.info(
                "Rejected batch of %d values; invalid positions %s",
                len(raw_values),
                err.positions,
            )
            raise

        row_ids: list[int] = []
        for value in values:
            try:
                row_ids.append(self.repo.append(value))
            except StoreWriteError as err:
                err.written = len(row_ids)
                if err.partial:
                    logger.warning(
                        "Partial batch stored: %d of %d values written before failure",
                        err.written,
                        len(values),
                    )
                logger.error("Insert failed for batch of %d values: %s", len(values), err)
                raise

        statistics = summarize(values, self.settings.sales_tax_rate)
        logger.info("Stored batch of %d values (total %d)", len(row_ids), statistics.total)
        return SubmissionReceipt(row_ids=tuple(row_ids), statistics=statistics)
