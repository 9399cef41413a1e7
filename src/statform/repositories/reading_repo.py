"""Data access helpers for working with stored readings."""
from __future__ import annotations

import logging

from sqlalchemy import desc, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from statform.core.errors import StoreConnectionError, StoreQueryError, StoreWriteError
from statform.models.reading import Reading
from statform.schemas.reading import AggregateRow, GroupedCount

__all__ = ["ReadingRepository"]

logger = logging.getLogger(__name__)


class ReadingRepository:
    """Thin wrapper around database access for reading rows.

    Every write commits on its own; there is no transaction spanning a batch.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def check_connection(self) -> None:
        """Round-trip a trivial statement to prove the database is reachable.

        Raises:
            StoreConnectionError: If the connection cannot be established.
        """
        try:
            self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as err:
            logger.error("Database connection check failed: %s", err)
            raise StoreConnectionError("Error establishing database connection") from err

    def append(self, value: int) -> int:
        """Insert one reading, commit it and return its id.

        Args:
            value: Already validated reading in the 0-100 range.

        Raises:
            StoreWriteError: If the insert or commit fails.
        """
        reading = Reading(value=value)
        try:
            self.session.add(reading)
            self.session.flush()
            reading_id = reading.id
            self.session.commit()
        except SQLAlchemyError as err:
            self.session.rollback()
            raise StoreWriteError(f"Error inserting records: {err}") from err
        return reading_id

    def get_by_id(self, reading_id: int) -> Reading | None:
        """Return a reading by identifier."""
        return self.session.get(Reading, reading_id)

    def count(self, active_only: bool = True) -> int:
        """Return how many readings are stored."""
        stmt = select(func.count()).select_from(Reading)
        if active_only:
            stmt = stmt.where(Reading.active.is_(True))
        return int(self.session.execute(stmt).scalar_one())

    def query_aggregate(self, active_only: bool = True) -> AggregateRow:
        """Return MIN/MAX/SUM and the rounded AVG of stored readings.

        Raises:
            StoreQueryError: If the query fails.
        """
        stmt = select(
            func.min(Reading.value).label("lowest"),
            func.max(Reading.value).label("highest"),
            func.sum(Reading.value).label("total"),
            func.round(func.avg(Reading.value), 0).label("mean"),
        )
        if active_only:
            stmt = stmt.where(Reading.active.is_(True))
        try:
            row = self.session.execute(stmt).one()
        except SQLAlchemyError as err:
            raise StoreQueryError("Error loading stored values") from err

        return AggregateRow(
            lowest=row.lowest,
            highest=row.highest,
            total=None if row.total is None else int(row.total),
            mean=None if row.mean is None else int(row.mean),
        )

    def query_grouped_counts(self, active_only: bool = True) -> list[GroupedCount]:
        """Return each distinct value with its count, most frequent first.

        Ties on count are ordered by ascending value.

        Raises:
            StoreQueryError: If the query fails.
        """
        occurrences = func.count(Reading.id).label("occurrences")
        stmt = select(Reading.value, occurrences).group_by(Reading.value)
        if active_only:
            stmt = stmt.where(Reading.active.is_(True))
        stmt = stmt.order_by(desc(occurrences), Reading.value)
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as err:
            raise StoreQueryError("Error loading stored values") from err

        return [GroupedCount(value=row.value, count=row.occurrences) for row in rows]
