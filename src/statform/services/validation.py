"""Reading validation shared by the live preview and the submission gate."""
from __future__ import annotations

import re
from collections.abc import Sequence

from statform.core.errors import ValidationError
from statform.models.reading import READING_MAX, READING_MIN

# ASCII only, matching the browser's /\D/g.
_NON_DIGITS = re.compile(r"\D", re.ASCII)

BATCH_ERROR_MESSAGE = "All numbers must be between 0 and 100"


def strip_non_digits(raw: str | None) -> str:
    """Drop every character that is not an ASCII digit.

    A leading minus sign goes too, so ``"-5"`` becomes ``"5"``.
    """
    if raw is None:
        return ""
    return _NON_DIGITS.sub("", raw)


def parse_reading(raw: str | None) -> int | None:
    """Return the reading encoded in ``raw`` or ``None`` when it is not acceptable.

    The raw text is reduced to its digits first. An empty remainder, or a
    number outside 0-100, is rejected. Anything longer than three significant
    digits is rejected before conversion, so arbitrarily long input never
    reaches ``int()``.
    """
    digits = strip_non_digits(raw)
    if not digits:
        return None
    significant = digits.lstrip("0")
    if len(significant) > len(str(READING_MAX)):
        return None
    value = int(significant or "0")
    if value < READING_MIN or value > READING_MAX:
        return None
    return value


def collect_live_values(raw_values: Sequence[str | None]) -> tuple[list[int], list[int]]:
    """Split form fields the way the live preview does.

    This is the server-side reference for ``updateCalculations`` in
    ``static/statform.js``; the browser runs the same rule on every keystroke.
    Empty fields are ignored. Returns the accepted values and the indexes of
    non-empty fields that failed validation.
    """
    values: list[int] = []
    errored: list[int] = []
    for index, raw in enumerate(raw_values):
        if not strip_non_digits(raw):
            continue
        value = parse_reading(raw)
        if value is None:
            errored.append(index)
        else:
            values.append(value)
    return values, errored


def validate_batch(raw_values: Sequence[str | None]) -> list[int]:
    """Validate every submitted field or reject the whole batch.

    Empty fields count as failures here, unlike in the live preview.

    Args:
        raw_values: Field values in submission order.

    Returns:
        The parsed readings, in the same order.

    Raises:
        ValidationError: If the batch is empty or any field is invalid.
    """
    if not raw_values:
        raise ValidationError(BATCH_ERROR_MESSAGE)

    values: list[int] = []
    rejected: list[int] = []
    for index, raw in enumerate(raw_values):
        value = parse_reading(raw)
        if value is None:
            rejected.append(index)
        else:
            values.append(value)

    if rejected:
        raise ValidationError(BATCH_ERROR_MESSAGE, positions=rejected)
    return values
