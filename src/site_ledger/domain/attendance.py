"""Domain models for attendance time tracking."""

from dataclasses import dataclass
from datetime import date

from site_ledger.domain.money import round_money
from site_ledger.domain.work_units import TimeEntry


@dataclass(frozen=True)
class AttendanceTimeRecord:
    """A laborer's attendance row with its time entry."""

    id: str
    laborer_id: str
    date: date
    daily_rate: float
    entry: TimeEntry

    @property
    def daily_earnings(self) -> float:
        return round_money(self.entry.day_units * self.daily_rate)
