"""SQLAlchemy model for stored form readings."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, true
from sqlalchemy.orm import Mapped, mapped_column

from statform.db.session import Base
from statform.db.time import utcnow

READING_MIN = 0
READING_MAX = 100


class Reading(Base):
    """A single submitted number.

    Rows are only ever inserted. ``active`` is a soft-delete marker that every
    aggregate query filters on; nothing in the application clears it yet.
    """

    __tablename__ = "readings"
    __table_args__ = (
        CheckConstraint(
            f"value >= {READING_MIN} AND value <= {READING_MAX}",
            name="ck_readings_value_range",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"Reading(id={self.id!r}, value={self.value!r}, active={self.active!r})"
