"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a half-open range of dates (arrival to departure)
- overlap_q: The same overlap rule expressed as an ORM filter
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator

from django.db.models import Q  # type: ignore

from shared.domain.base import ValueObject


def normalize_date(value) -> date:
    """Reduce a datetime to its calendar date, leave dates untouched."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for stays, pricing periods and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        object.__setattr__(self, 'start_date', normalize_date(self.start_date))
        object.__setattr__(self, 'end_date', normalize_date(self.end_date))
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap if they share any night.
        Note: end_date is exclusive, so adjacent ranges don't overlap.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
            - DateRange(25, 28) overlaps with DateRange(20, 31) -> True (enclosed)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        # Overlap formula: start1 < end2 AND end1 > start2
        return (self.start_date < other.end_date and
                self.end_date > other.start_date)

    def contains(self, check_date: date) -> bool:
        """
        Check if a date is within this range

        Note: start_date is inclusive, end_date is exclusive
        """
        return self.start_date <= check_date < self.end_date

    def years(self) -> range:
        """Calendar years touched by the nights of this range."""
        last_night = self.end_date - timedelta(days=1)
        return range(self.start_date.year, last_night.year + 1)

    def days(self) -> Iterator[date]:
        """Yield every night (arrival day included, departure day excluded)."""
        current = self.start_date
        while current < self.end_date:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        """
        Return the number of nights in this range
        """
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.strftime('%d/%m/%Y')} - {self.end_date.strftime('%d/%m/%Y')}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


def overlap_q(start: date, end: date, *, start_field: str = 'start_date', end_field: str = 'end_date') -> Q:
    """
    ORM twin of DateRange.overlaps_with

    Matches rows whose [start_field, end_field) interval shares a night
    with [start, end).
    """
    return Q(**{f'{start_field}__lt': end}) & Q(**{f'{end_field}__gt': start})
