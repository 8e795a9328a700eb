"""Supabase repository for tea-shop entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from site_ledger.domain.tea_shop import (
    ConsumptionDetailRecord,
    PresentLaborer,
    TeaShopEntryRecord,
)
from site_ledger.services.tea_shop import TeaShopRepository

_ENTRY_COLUMNS = (
    "id, site_id, date, tea_total, snacks_items, snacks_total, total_amount, "
    "working_laborer_count, working_laborer_total, nonworking_laborer_count, "
    "nonworking_laborer_total, market_laborer_count, market_laborer_tea_amount, "
    "market_laborer_snacks_amount, entered_by"
)


@dataclass
class SupabaseTeaShopRepository(TeaShopRepository):
    """Supabase implementation for tea-shop entries."""

    client: Client

    def get_entry(self, site_id: str, day: date) -> TeaShopEntryRecord | None:
        """Return the entry for a site and day."""
        response = (
            self.client.table("tea_shop_entries")
            .select(_ENTRY_COLUMNS)
            .eq("site_id", site_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_consumption_details(self, entry_id: UUID) -> list[ConsumptionDetailRecord]:
        """Return per-laborer shares for an entry."""
        response = (
            self.client.table("tea_shop_consumption_details")
            .select("laborer_id, is_working, tea_amount, snacks_amount, laborers(name)")
            .eq("entry_id", str(entry_id))
            .execute()
        )
        return [
            ConsumptionDetailRecord(
                laborer_id=str(row["laborer_id"]),
                is_working=bool(row.get("is_working", True)),
                tea_amount=float(row.get("tea_amount") or 0.0),
                snacks_amount=float(row.get("snacks_amount") or 0.0),
                laborer_name=_laborer_name(row),
            )
            for row in response.data or []
        ]

    def list_present_laborers(self, site_id: str, day: date) -> list[PresentLaborer]:
        """Return laborers with attendance on the day."""
        response = (
            self.client.table("daily_attendance")
            .select("laborer_id, laborers(name)")
            .eq("site_id", site_id)
            .eq("date", day.isoformat())
            .eq("is_deleted", False)
            .order("laborer_id", desc=False)
            .execute()
        )
        return [
            PresentLaborer(laborer_id=str(row["laborer_id"]), name=_laborer_name(row))
            for row in response.data or []
        ]

    def get_market_laborer_count(self, site_id: str, day: date) -> int:
        """Return the total market laborer headcount on the day."""
        response = (
            self.client.table("market_laborer_attendance")
            .select("count")
            .eq("site_id", site_id)
            .eq("date", day.isoformat())
            .execute()
        )
        return sum(int(row.get("count") or 0) for row in response.data or [])

    def save_entry(self, entry: TeaShopEntryRecord) -> UUID:
        """Upsert the entry on site and date and return its id."""
        payload: dict[str, object] = {
            "site_id": entry.site_id,
            "date": entry.date.isoformat(),
            "tea_total": entry.tea_total,
            "snacks_items": entry.snacks_items,
            "snacks_total": entry.snacks_total,
            "amount": entry.total_amount,
            "total_amount": entry.total_amount,
            "working_laborer_count": entry.working_laborer_count,
            "working_laborer_total": entry.working_laborer_total,
            "nonworking_laborer_count": entry.nonworking_laborer_count,
            "nonworking_laborer_total": entry.nonworking_laborer_total,
            "market_laborer_count": entry.market_laborer_count,
            "market_laborer_tea_amount": entry.market_tea_amount,
            "market_laborer_snacks_amount": entry.market_snacks_amount,
            "market_laborer_total": entry.market_tea_amount
            + entry.market_snacks_amount,
            "entered_by": entry.entered_by,
        }
        if entry.id is not None:
            payload["id"] = str(entry.id)
        response = (
            self.client.table("tea_shop_entries")
            .upsert(payload, on_conflict="site_id,date")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save tea shop entry")
        return UUID(response.data[0]["id"])

    def replace_consumption_details(
        self, entry_id: UUID, details: list[ConsumptionDetailRecord]
    ) -> None:
        """Delete and re-insert the shares for an entry."""
        self.client.table("tea_shop_consumption_details").delete().eq(
            "entry_id", str(entry_id)
        ).execute()
        payload = [
            {
                "entry_id": str(entry_id),
                "laborer_id": detail.laborer_id,
                "is_working": detail.is_working,
                "tea_amount": detail.tea_amount,
                "snacks_amount": detail.snacks_amount,
            }
            for detail in details
        ]
        if payload:
            self.client.table("tea_shop_consumption_details").insert(payload).execute()


def _parse_entry(row: dict[str, object]) -> TeaShopEntryRecord:
    snacks_items = row.get("snacks_items")
    return TeaShopEntryRecord(
        id=UUID(str(row["id"])),
        site_id=str(row["site_id"]),
        date=date.fromisoformat(str(row["date"])),
        tea_total=float(row.get("tea_total") or 0.0),
        snacks_items=snacks_items if isinstance(snacks_items, list) else [],
        snacks_total=float(row.get("snacks_total") or 0.0),
        total_amount=float(row.get("total_amount") or 0.0),
        working_laborer_count=int(row.get("working_laborer_count") or 0),
        working_laborer_total=float(row.get("working_laborer_total") or 0.0),
        nonworking_laborer_count=int(row.get("nonworking_laborer_count") or 0),
        nonworking_laborer_total=float(row.get("nonworking_laborer_total") or 0.0),
        market_laborer_count=int(row.get("market_laborer_count") or 0),
        market_tea_amount=float(row.get("market_laborer_tea_amount") or 0.0),
        market_snacks_amount=float(row.get("market_laborer_snacks_amount") or 0.0),
        entered_by=row.get("entered_by"),
    )


def _laborer_name(row: dict[str, object]) -> str:
    laborer = row.get("laborers")
    if isinstance(laborer, dict):
        return str(laborer.get("name") or "")
    return ""
