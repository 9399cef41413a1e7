"""Descriptive statistics over bounded integer readings.

Two flavours exist and are deliberately kept apart:

* the *live* statistics computed from the values currently typed into the
  form, whose mean is positional (the element at ``len // 2`` after sorting);
* the *stored* statistics built from database aggregates, whose mean is the
  arithmetic average rounded to an integer.

``PositionalMean`` and ``AveragedMean`` are distinct types so the two cannot be
mixed up silently.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import NewType

from statform.schemas.reading import AggregateRow, GroupedCount

PositionalMean = NewType("PositionalMean", int)
AveragedMean = NewType("AveragedMean", int)

PLACEHOLDER = "-"
_CENTS = Decimal("0.01")


def positional_mean(sorted_values: Sequence[int]) -> PositionalMean:
    """Return the element at the floor-middle index of an ascending sequence.

    For an even count this is the upper of the two middle elements.
    """
    if not sorted_values:
        raise ValueError("positional_mean() requires at least one value")
    return PositionalMean(sorted_values[len(sorted_values) // 2])


def averaged_mean(values: Sequence[int]) -> AveragedMean:
    """Return the arithmetic mean rounded to the nearest integer, halves up.

    The stored-values panel gets this figure from the database as
    ``ROUND(AVG(value), 0)``. This is the Python reference for that rounding;
    the repository tests hold the SQL figure to it.
    """
    if not values:
        raise ValueError("averaged_mean() requires at least one value")
    mean = Decimal(sum(values)) / Decimal(len(values))
    return AveragedMean(int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def mode_set(values: Iterable[int]) -> tuple[int, ...]:
    """Return every value sharing the highest occurrence count, ascending."""
    counts = Counter(values)
    if not counts:
        return ()
    top = max(counts.values())
    return tuple(sorted(value for value, count in counts.items() if count == top))


def collect_leading_modes(grouped: Iterable[GroupedCount]) -> tuple[int, ...]:
    """Collect the modes from counts already sorted by count descending.

    Values are taken while their count equals the first count seen; the walk
    stops at the first mismatch.
    """
    modes: list[int] = []
    max_count: int | None = None
    for group in grouped:
        if max_count is None:
            max_count = group.count
        elif group.count != max_count:
            break
        modes.append(group.value)
    return tuple(modes)


def total_with_tax(total: int, tax_rate: float) -> Decimal:
    """Return ``total + total * tax_rate`` exactly; rounding happens on display."""
    return Decimal(total) + Decimal(total) * Decimal(str(tax_rate))


def format_currency(amount: int | Decimal | None) -> str:
    """Format a money amount as ``$1,234.50``; ``None`` gives the placeholder."""
    if amount is None:
        return PLACEHOLDER
    return f"${Decimal(amount).quantize(_CENTS, rounding=ROUND_HALF_UP):,.2f}"


def format_percent(rate: float) -> str:
    """Format a fractional rate as a two-decimal percentage (0.05 -> ``5.00%``)."""
    percent = (Decimal(str(rate)) * 100).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"{percent:.2f}%"


def format_modes(modes: Sequence[int]) -> str:
    """Render a mode set: one value alone, several as ``Multiple (a, b)``."""
    if not modes:
        return PLACEHOLDER
    if len(modes) > 1:
        return "Multiple (" + ", ".join(str(mode) for mode in modes) + ")"
    return str(modes[0])


@dataclass(frozen=True)
class LiveStatistics:
    """Statistics for one set of values, with the positional mean."""

    lowest: int
    highest: int
    total: int
    mean: PositionalMean
    modes: tuple[int, ...]
    tax_rate: float
    count: int

    @property
    def total_with_tax(self) -> Decimal:
        return total_with_tax(self.total, self.tax_rate)

    @property
    def mode_label(self) -> str:
        return format_modes(self.modes)

    @property
    def tax_label(self) -> str:
        return format_percent(self.tax_rate)


def summarize(values: Iterable[int], tax_rate: float) -> LiveStatistics:
    """Compute live statistics over a non-empty set of readings.

    Args:
        values: Validated readings in any order.
        tax_rate: Fractional sales tax applied to the total.

    Raises:
        ValueError: If ``values`` is empty.
    """
    ordered = sorted(values)
    if not ordered:
        raise ValueError("summarize() requires at least one value")
    return LiveStatistics(
        lowest=ordered[0],
        highest=ordered[-1],
        total=sum(ordered),
        mean=positional_mean(ordered),
        modes=mode_set(ordered),
        tax_rate=tax_rate,
        count=len(ordered),
    )


def compute_statistics(values: Iterable[int], tax_rate: float) -> LiveStatistics | None:
    """Compute live statistics, or ``None`` when there is nothing to show."""
    values = list(values)
    if not values:
        return None
    return summarize(values, tax_rate)


@dataclass(frozen=True)
class StoredStatistics:
    """Statistics over every active stored reading, with the averaged mean.

    All numeric fields are ``None`` when nothing is stored or loading failed;
    ``error`` tells those two cases apart.
    """

    tax_rate: float
    lowest: int | None = None
    highest: int | None = None
    total: int | None = None
    mean: AveragedMean | None = None
    modes: tuple[int, ...] = ()
    error: bool = False

    @property
    def total_with_tax(self) -> Decimal | None:
        if self.total is None:
            return None
        return total_with_tax(self.total, self.tax_rate)

    @property
    def mode_label(self) -> str:
        return format_modes(self.modes)

    @property
    def tax_label(self) -> str:
        return format_percent(self.tax_rate)

    @classmethod
    def unavailable(cls, tax_rate: float) -> StoredStatistics:
        """Placeholder statistics shown after a failed aggregate query."""
        return cls(tax_rate=tax_rate, error=True)


def build_stored_statistics(
    aggregate: AggregateRow,
    grouped: Iterable[GroupedCount],
    tax_rate: float,
) -> StoredStatistics:
    """Combine the aggregate row and the grouped counts into stored statistics."""
    if aggregate.is_empty:
        return StoredStatistics(tax_rate=tax_rate)
    return StoredStatistics(
        tax_rate=tax_rate,
        lowest=aggregate.lowest,
        highest=aggregate.highest,
        total=aggregate.total,
        mean=None if aggregate.mean is None else AveragedMean(aggregate.mean),
        modes=collect_leading_modes(grouped),
    )
