"""Supabase repository for settlement summaries."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from site_ledger.domain.summaries import (
    AttendanceCostRow,
    MarketCostRow,
    TeaShopDayTotal,
)
from site_ledger.services.summaries import SummaryRepository


@dataclass
class SupabaseSummaryRepository(SummaryRepository):
    """Supabase implementation for summary queries."""

    client: Client

    def list_attendance_costs(
        self, site_id: str, start: date, end: date
    ) -> list[AttendanceCostRow]:
        """Return named laborer costs in the date range."""
        response = (
            self.client.table("daily_attendance")
            .select(
                "date, daily_earnings, snacks_amount, is_paid, laborers(laborer_type)"
            )
            .eq("site_id", site_id)
            .eq("is_deleted", False)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [
            AttendanceCostRow(
                day=date.fromisoformat(str(row["date"])),
                laborer_type=_laborer_type(row),
                earnings=float(row.get("daily_earnings") or 0.0),
                snacks=float(row.get("snacks_amount") or 0.0),
                is_paid=bool(row.get("is_paid")),
            )
            for row in response.data or []
        ]

    def list_market_costs(
        self, site_id: str, start: date, end: date
    ) -> list[MarketCostRow]:
        """Return market laborer costs in the date range."""
        response = (
            self.client.table("market_laborer_attendance")
            .select(
                "date, count, day_units, rate_per_person, total_cost, "
                "total_snacks, is_paid"
            )
            .eq("site_id", site_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [
            MarketCostRow(
                day=date.fromisoformat(str(row["date"])),
                count=int(row.get("count") or 0),
                day_units=float(row.get("day_units") or 1.0),
                rate_per_person=float(row.get("rate_per_person") or 0.0),
                total_cost=float(row.get("total_cost") or 0.0),
                total_snacks=float(row.get("total_snacks") or 0.0),
                is_paid=bool(row.get("is_paid")),
            )
            for row in response.data or []
        ]

    def list_tea_shop_totals(
        self, site_id: str, start: date, end: date
    ) -> list[TeaShopDayTotal]:
        """Return tea-shop spend per entry in the date range."""
        response = (
            self.client.table("tea_shop_entries")
            .select("date, tea_total, snacks_total, total_amount")
            .eq("site_id", site_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [
            TeaShopDayTotal(
                day=date.fromisoformat(str(row["date"])),
                tea_total=float(row.get("tea_total") or 0.0),
                snacks_total=float(row.get("snacks_total") or 0.0),
                total=float(row.get("total_amount") or 0.0),
            )
            for row in response.data or []
        ]


def _laborer_type(row: dict[str, object]) -> str:
    laborer = row.get("laborers")
    if isinstance(laborer, dict) and laborer.get("laborer_type"):
        return str(laborer["laborer_type"])
    return "daily"
