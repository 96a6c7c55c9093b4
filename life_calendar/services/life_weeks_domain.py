"""Pure domain logic for the life calendar.

No storage, no network, no wall-clock reads: every function takes "now"
explicitly and returns plain values.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterator, NamedTuple, Optional, Union

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DEFAULT_LIFESPAN_YEARS = 80
MIN_LIFESPAN_YEARS = 1
MAX_LIFESPAN_YEARS = 120
WEEKS_PER_YEAR = 52

_WEEK = timedelta(days=7)
_YEAR = timedelta(days=365.25)

BirthDateInput = Union[date, datetime, str, None]


@dataclass(frozen=True)
class LifeStats:
    """Derived statistics for one (birth date, lifespan, now) triple."""

    weeks_lived: float
    weeks_remaining: float
    total_weeks: int
    percent_lived: float
    current_age: float


class CellState(str, Enum):
    LIVED = "lived"
    CURRENT = "current"
    FUTURE = "future"


class WeekCell(NamedTuple):
    year: int
    week_index: int
    state: CellState


def parse_birth_date(value: BirthDateInput) -> Optional[date]:
    """Parse a birth date from a date, datetime or ISO ``YYYY-MM-DD`` string.

    Returns:
        The calendar date, or None when the value is empty or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    return None


def clamp_lifespan(
    value: Union[int, str, None],
    default: int = DEFAULT_LIFESPAN_YEARS,
    minimum: int = MIN_LIFESPAN_YEARS,
    maximum: int = MAX_LIFESPAN_YEARS,
) -> int:
    """Normalize a lifespan input to an integer in ``[minimum, maximum]``.

    Only the leading integer counts, so ``"95.5"`` and ``"95 years"`` both
    read as 95. Input without one, and zero, fall back to ``default``, the
    same way the number input treats an empty field.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    years = int(match.group(1))
    if years == 0:
        return default
    return max(minimum, min(maximum, years))


def _birth_instant(birth: Union[date, datetime], now: datetime) -> datetime:
    """Resolve a birth value to an instant comparable with ``now``."""
    if isinstance(birth, datetime):
        if (birth.tzinfo is None) != (now.tzinfo is None):
            return birth.replace(tzinfo=now.tzinfo)
        return birth
    return datetime(birth.year, birth.month, birth.day, tzinfo=now.tzinfo)


def compute_life_stats(
    birth_date: BirthDateInput,
    expected_lifespan_years: int,
    now: datetime,
) -> Optional[LifeStats]:
    """Compute life statistics as of ``now``.

    Args:
        birth_date: Date of birth (date, datetime, or ISO string).
        expected_lifespan_years: Expected lifespan. Must be >= 1; callers
            clamp it with :func:`clamp_lifespan` first.
        now: Reference instant. Never read from the clock here.

    Returns:
        LifeStats, or None when the birth date is missing, unparseable,
        or after ``now``.
    """
    if isinstance(birth_date, datetime):
        birth: Union[date, datetime, None] = birth_date
    else:
        birth = parse_birth_date(birth_date)
    if birth is None:
        return None

    elapsed = now - _birth_instant(birth, now)
    if elapsed < timedelta(0):
        return None

    weeks_lived = elapsed / _WEEK
    total_weeks = expected_lifespan_years * WEEKS_PER_YEAR

    return LifeStats(
        weeks_lived=weeks_lived,
        weeks_remaining=max(0, total_weeks - weeks_lived),
        total_weeks=total_weeks,
        percent_lived=min(100, weeks_lived / total_weeks * 100),
        current_age=elapsed / _YEAR,
    )


def cell_state(year: int, week_index: int, weeks_lived: float) -> CellState:
    """Classify one grid cell.

    A cell is lived when its global week index is below ``weeks_lived``;
    otherwise it is current when it equals ``floor(weeks_lived)``.
    """
    global_week = year * WEEKS_PER_YEAR + week_index
    if global_week < weeks_lived:
        return CellState.LIVED
    if global_week == math.floor(weeks_lived):
        return CellState.CURRENT
    return CellState.FUTURE


def classify_weeks(weeks_lived: float, total_years: int) -> Iterator[WeekCell]:
    """Yield every cell of the grid, year by year, week by week.

    Row order is part of the contract: displays render rows top-to-bottom
    in exactly this sequence. ``total_years <= 0`` yields nothing.
    """
    for year in range(max(0, total_years)):
        for week_index in range(WEEKS_PER_YEAR):
            yield WeekCell(year, week_index, cell_state(year, week_index, weeks_lived))


def format_life_stats(stats: LifeStats, expected_lifespan_years: int) -> str:
    """Format life statistics for display.

    Returns:
        Multi-line string with progress, weeks remaining, age and grid position.
    """
    return (
        f"⏳ {stats.percent_lived:.1f}% of ~{expected_lifespan_years} years\n"
        f"🌱 {math.floor(stats.weeks_remaining):,} weeks remaining\n"
        f"🎂 Age: {stats.current_age:.1f} years\n"
        f"📅 Week {math.floor(stats.weeks_lived):,} / {stats.total_weeks:,}"
    )
