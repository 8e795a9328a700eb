"""Domain models for settlement summaries."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceCostRow:
    """Cost of one named laborer's attendance."""

    day: date
    laborer_type: str
    earnings: float
    snacks: float
    is_paid: bool


@dataclass(frozen=True)
class MarketCostRow:
    """Cost of one market laborer group's attendance."""

    day: date
    count: int
    day_units: float
    rate_per_person: float
    total_cost: float
    total_snacks: float
    is_paid: bool


@dataclass(frozen=True)
class TeaShopDayTotal:
    """Tea-shop spend for a day."""

    day: date
    tea_total: float
    snacks_total: float
    total: float


@dataclass(frozen=True)
class DaySummary:
    """Attendance and tea-shop costs for one day."""

    day: date
    daily_laborer_count: int = 0
    contract_laborer_count: int = 0
    market_laborer_count: int = 0
    daily_laborer_amount: float = 0.0
    contract_laborer_amount: float = 0.0
    market_laborer_amount: float = 0.0
    total_salary: float = 0.0
    total_snacks: float = 0.0
    paid_count: int = 0
    pending_count: int = 0
    paid_amount: float = 0.0
    pending_amount: float = 0.0
    tea_shop: TeaShopDayTotal | None = None

    @property
    def total_laborer_count(self) -> int:
        return (
            self.daily_laborer_count
            + self.contract_laborer_count
            + self.market_laborer_count
        )

    @property
    def total_expense(self) -> float:
        return self.total_salary + self.total_snacks


@dataclass(frozen=True)
class PeriodTotals:
    """Totals across a range of days."""

    total_salary: float
    total_tea_shop: float
    total_expense: float
    total_laborers: int
    avg_per_day: float
    total_paid_count: int
    total_pending_count: int
    total_paid_amount: float
    total_pending_amount: float
    total_daily_amount: float
    total_contract_amount: float
    total_market_amount: float
