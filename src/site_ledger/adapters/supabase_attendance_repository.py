"""Supabase repository for attendance time fields."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from supabase import Client

from site_ledger.domain.attendance import AttendanceTimeRecord
from site_ledger.domain.work_units import TimeEntry, TimeSpan
from site_ledger.services.attendance import AttendanceRepository


@dataclass
class SupabaseAttendanceRepository(AttendanceRepository):
    """Supabase implementation for daily attendance rows."""

    client: Client

    def get_time_record(self, record_id: str) -> AttendanceTimeRecord | None:
        """Return an attendance row with its time fields."""
        response = (
            self.client.table("daily_attendance")
            .select(
                "id, laborer_id, date, daily_rate_applied, day_units, "
                "in_time, lunch_out, lunch_in, out_time"
            )
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        span = TimeSpan(
            in_time=row.get("in_time"),
            out_time=row.get("out_time"),
            lunch_out=row.get("lunch_out"),
            lunch_in=row.get("lunch_in"),
        )
        return AttendanceTimeRecord(
            id=str(row["id"]),
            laborer_id=str(row["laborer_id"]),
            date=date.fromisoformat(str(row["date"])),
            daily_rate=float(row.get("daily_rate_applied") or 0.0),
            entry=TimeEntry(span=span, day_units=float(row.get("day_units") or 1.0)),
        )

    def update_time_record(self, record: AttendanceTimeRecord) -> None:
        """Write times, derived hours, day units and earnings in one update."""
        entry = record.entry
        self.client.table("daily_attendance").update(
            {
                "in_time": entry.span.in_time or None,
                "lunch_out": entry.span.lunch_out or None,
                "lunch_in": entry.span.lunch_in or None,
                "out_time": entry.span.out_time or None,
                "work_hours": entry.work_hours,
                "break_hours": entry.break_hours,
                "total_hours": entry.total_hours,
                "day_units": entry.day_units,
                "work_days": entry.day_units,
                "daily_earnings": record.daily_earnings,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", record.id).execute()
