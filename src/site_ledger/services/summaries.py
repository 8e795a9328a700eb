"""Settlement summaries for attendance and tea-shop costs."""

from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol

from site_ledger.domain.money import round_money
from site_ledger.domain.summaries import (
    AttendanceCostRow,
    DaySummary,
    MarketCostRow,
    PeriodTotals,
    TeaShopDayTotal,
)
from site_ledger.services.work_units import market_group_cost

CONTRACT = "contract"


class SummaryRepository(Protocol):
    """Persistence interface for settlement summaries."""

    def list_attendance_costs(
        self, site_id: str, start: date, end: date
    ) -> list[AttendanceCostRow]:
        """Return named laborer attendance costs within a date range."""

    def list_market_costs(
        self, site_id: str, start: date, end: date
    ) -> list[MarketCostRow]:
        """Return market laborer attendance costs within a date range."""

    def list_tea_shop_totals(
        self, site_id: str, start: date, end: date
    ) -> list[TeaShopDayTotal]:
        """Return tea-shop spend per day within a date range."""


@dataclass
class SummaryService:
    """Service for computing day and period settlement totals."""

    repository: SummaryRepository

    def get_day_summaries(
        self, site_id: str, start: date, end: date
    ) -> list[DaySummary]:
        """Return per-day costs ordered by date."""
        days: dict[date, DaySummary] = {}
        for row in self.repository.list_attendance_costs(site_id, start, end):
            days[row.day] = _add_attendance(days.get(row.day, DaySummary(row.day)), row)
        for row in self.repository.list_market_costs(site_id, start, end):
            days[row.day] = _add_market(days.get(row.day, DaySummary(row.day)), row)
        for total in self.repository.list_tea_shop_totals(site_id, start, end):
            summary = days.get(total.day, DaySummary(total.day))
            days[total.day] = replace(summary, tea_shop=_add_tea_shop(summary, total))
        return [days[day] for day in sorted(days)]

    def get_period_totals(self, site_id: str, start: date, end: date) -> PeriodTotals:
        """Return totals and the per-day average across a date range."""
        return calculate_period_totals(self.get_day_summaries(site_id, start, end))


def calculate_period_totals(summaries: list[DaySummary]) -> PeriodTotals:
    """Aggregate day summaries into period totals."""
    total_salary = sum(day.total_salary for day in summaries)
    total_tea_shop = sum(day.tea_shop.total if day.tea_shop else 0 for day in summaries)
    total_expense = total_salary + total_tea_shop
    return PeriodTotals(
        total_salary=round_money(total_salary),
        total_tea_shop=round_money(total_tea_shop),
        total_expense=round_money(total_expense),
        total_laborers=sum(day.total_laborer_count for day in summaries),
        avg_per_day=round_money(total_expense / len(summaries)) if summaries else 0.0,
        total_paid_count=sum(day.paid_count for day in summaries),
        total_pending_count=sum(day.pending_count for day in summaries),
        total_paid_amount=round_money(sum(day.paid_amount for day in summaries)),
        total_pending_amount=round_money(sum(day.pending_amount for day in summaries)),
        total_daily_amount=round_money(
            sum(day.daily_laborer_amount for day in summaries)
        ),
        total_contract_amount=round_money(
            sum(day.contract_laborer_amount for day in summaries)
        ),
        total_market_amount=round_money(
            sum(day.market_laborer_amount for day in summaries)
        ),
    )


def _add_attendance(summary: DaySummary, row: AttendanceCostRow) -> DaySummary:
    if row.laborer_type == CONTRACT:
        summary = replace(
            summary,
            contract_laborer_count=summary.contract_laborer_count + 1,
            contract_laborer_amount=summary.contract_laborer_amount + row.earnings,
        )
    else:
        summary = replace(
            summary,
            daily_laborer_count=summary.daily_laborer_count + 1,
            daily_laborer_amount=summary.daily_laborer_amount + row.earnings,
        )
    return _add_payment(
        summary,
        salary=row.earnings,
        snacks=row.snacks,
        people=1,
        is_paid=row.is_paid,
    )


def _add_market(summary: DaySummary, row: MarketCostRow) -> DaySummary:
    salary = row.total_cost or market_group_cost(
        row.count, row.rate_per_person, row.day_units
    )
    summary = replace(
        summary,
        market_laborer_count=summary.market_laborer_count + row.count,
        market_laborer_amount=summary.market_laborer_amount + salary,
    )
    return _add_payment(
        summary,
        salary=salary,
        snacks=row.total_snacks,
        people=row.count,
        is_paid=row.is_paid,
    )


def _add_payment(
    summary: DaySummary, salary: float, snacks: float, people: int, is_paid: bool
) -> DaySummary:
    if is_paid:
        paid = {
            "paid_count": summary.paid_count + people,
            "paid_amount": summary.paid_amount + salary,
        }
    else:
        paid = {
            "pending_count": summary.pending_count + people,
            "pending_amount": summary.pending_amount + salary,
        }
    return replace(
        summary,
        total_salary=summary.total_salary + salary,
        total_snacks=summary.total_snacks + snacks,
        **paid,
    )


def _add_tea_shop(summary: DaySummary, total: TeaShopDayTotal) -> TeaShopDayTotal:
    if summary.tea_shop is None:
        return total
    return TeaShopDayTotal(
        day=total.day,
        tea_total=summary.tea_shop.tea_total + total.tea_total,
        snacks_total=summary.tea_shop.snacks_total + total.snacks_total,
        total=summary.tea_shop.total + total.total,
    )
