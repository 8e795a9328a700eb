"""Domain models for work-day units and time tracking."""

from dataclasses import dataclass, field
from enum import StrEnum

from site_ledger.domain.money import round_money

MINUTES_PER_DAY = 24 * 60
MAX_HOUR = 23
MAX_MINUTE = 59


class AlignmentStatus(StrEnum):
    """How recorded work hours compare with a work unit's expected range."""

    ALIGNED = "aligned"
    UNDERWORK = "underwork"
    OVERWORK = "overwork"
    NO_TIMES = "no-times"


@dataclass(frozen=True)
class WorkUnitPreset:
    """Canonical clock times for a work-day unit."""

    unit_value: float
    label: str
    in_time: str
    out_time: str
    lunch_out: str | None
    lunch_in: str | None
    expected_hour_range: tuple[float, float]


@dataclass(frozen=True)
class HoursBreakdown:
    """Worked, break and total hours for a day."""

    work_hours: float
    break_hours: float
    total_hours: float


@dataclass(frozen=True)
class TimeSpan:
    """Clock-in, lunch and clock-out times for a day."""

    in_time: str | None = None
    out_time: str | None = None
    lunch_out: str | None = None
    lunch_in: str | None = None

    @property
    def has_time_entries(self) -> bool:
        return bool(self.in_time and self.out_time)

    @property
    def hours(self) -> HoursBreakdown:
        """Hours derived from the current times."""
        return compute_hours(self)


@dataclass(frozen=True)
class TimeEntry:
    """Times and day units with hours frozen at construction."""

    span: TimeSpan
    day_units: float
    work_hours: float = field(init=False)
    break_hours: float = field(init=False)
    total_hours: float = field(init=False)

    def __post_init__(self) -> None:
        hours = self.span.hours
        object.__setattr__(self, "work_hours", hours.work_hours)
        object.__setattr__(self, "break_hours", hours.break_hours)
        object.__setattr__(self, "total_hours", hours.total_hours)


def parse_time_of_day(value: str) -> int:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into minutes since midnight."""
    parts = value.strip().split(":")
    if len(parts) < 2:  # noqa: PLR2004
        raise ValueError(f"Invalid time of day: {value!r}")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError as exc:
        raise ValueError(f"Invalid time of day: {value!r}") from exc
    if not (0 <= hours <= MAX_HOUR and 0 <= minutes <= MAX_MINUTE):
        raise ValueError(f"Time of day out of range: {value!r}")
    return hours * 60 + minutes


def compute_hours(span: TimeSpan) -> HoursBreakdown:
    """Derive worked, break and total hours from clock times.

    An out-time earlier than the in-time is read as the next day. A lunch-in
    before lunch-out counts as no break.
    """
    if not span.in_time or not span.out_time:
        return HoursBreakdown(work_hours=0.0, break_hours=0.0, total_hours=0.0)
    total_minutes = parse_time_of_day(span.out_time) - parse_time_of_day(
        span.in_time
    )
    if total_minutes < 0:
        total_minutes += MINUTES_PER_DAY
    break_minutes = 0
    if span.lunch_out and span.lunch_in:
        break_minutes = max(
            0, parse_time_of_day(span.lunch_in) - parse_time_of_day(span.lunch_out)
        )
    work_minutes = total_minutes - break_minutes
    return HoursBreakdown(
        work_hours=round_money(work_minutes / 60),
        break_hours=round_money(break_minutes / 60),
        total_hours=round_money(total_minutes / 60),
    )
