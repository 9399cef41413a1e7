"""Unit tests for the ORM model mapping in statform.models."""

from sqlalchemy import CheckConstraint

from statform.models import READING_MAX, READING_MIN, Reading


def test_table_name():
    assert Reading.__tablename__ == "readings"


def test_columns():
    table = Reading.__table__
    assert {c.name for c in table.columns} == {
        "id",
        "value",
        "active",
        "created_at",
        "updated_at",
    }
    assert {c.name for c in table.primary_key} == {"id"}
    assert table.c.active.index is True


def test_value_range_constraint():
    checks = [c for c in Reading.__table__.constraints if isinstance(c, CheckConstraint)]
    assert len(checks) == 1
    assert checks[0].name == "ck_readings_value_range"
    assert (READING_MIN, READING_MAX) == (0, 100)


def test_defaults_applied_on_insert(db_session):
    reading = Reading(value=55)
    db_session.add(reading)
    db_session.commit()

    assert reading.active is True
    assert reading.created_at is not None
    assert reading.updated_at is not None
