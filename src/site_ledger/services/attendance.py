"""Attendance time tracking service."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from site_ledger.domain.attendance import AttendanceTimeRecord
from site_ledger.domain.work_units import AlignmentStatus, TimeEntry, TimeSpan
from site_ledger.services.audit import AuditService
from site_ledger.services.work_units import (
    alignment_status,
    apply_preset,
    is_known_unit,
    preset_for,
)

logger = logging.getLogger(__name__)


class AttendanceRepository(Protocol):
    """Persistence interface for attendance time fields."""

    def get_time_record(self, record_id: str) -> AttendanceTimeRecord | None:
        """Return an attendance row by id."""

    def update_time_record(self, record: AttendanceTimeRecord) -> None:
        """Persist times, derived hours, day units and earnings together."""


@dataclass
class AttendanceService:
    """Applies work units and time edits to attendance rows."""

    repository: AttendanceRepository
    audit_service: AuditService

    def apply_work_unit(
        self, record_id: str, unit_value: float, actor: str | None = None
    ) -> AttendanceTimeRecord | None:
        """Set the day units and replace the times with the unit's preset."""
        record = self.repository.get_time_record(record_id)
        if record is None:
            return None
        if not is_known_unit(unit_value):
            logger.warning(
                "Unknown work unit for attendance record",
                extra={"record_id": record_id, "unit_value": unit_value},
            )
        preset = preset_for(unit_value)
        updated = replace(
            record,
            entry=TimeEntry(
                span=apply_preset(preset.unit_value), day_units=preset.unit_value
            ),
        )
        self._save(record, updated, actor, "work_unit_applied")
        return updated

    def update_times(
        self, record_id: str, span: TimeSpan, actor: str | None = None
    ) -> AttendanceTimeRecord | None:
        """Replace the times and recompute hours, keeping the day units."""
        record = self.repository.get_time_record(record_id)
        if record is None:
            return None
        updated = replace(
            record, entry=TimeEntry(span=span, day_units=record.entry.day_units)
        )
        self._save(record, updated, actor, "times_updated")
        return updated

    def alignment(self, record: AttendanceTimeRecord) -> AlignmentStatus:
        """Return how the record's hours compare with its work unit."""
        return alignment_status(
            record.entry.work_hours,
            preset_for(record.entry.day_units),
            record.entry.span.has_time_entries,
        )

    def _save(
        self,
        before: AttendanceTimeRecord,
        after: AttendanceTimeRecord,
        actor: str | None,
        event_type: str,
    ) -> None:
        self.repository.update_time_record(after)
        self.audit_service.record_change(
            actor=actor,
            entity_type="daily_attendance",
            entity_id=after.id,
            event_type=event_type,
            before=_snapshot(before),
            after=_snapshot(after),
        )


def _snapshot(record: AttendanceTimeRecord) -> dict[str, object]:
    span = record.entry.span
    return {
        "in_time": span.in_time,
        "lunch_out": span.lunch_out,
        "lunch_in": span.lunch_in,
        "out_time": span.out_time,
        "day_units": record.entry.day_units,
        "work_hours": record.entry.work_hours,
        "daily_earnings": record.daily_earnings,
    }
