"""Tests for attendance time tracking."""

from datetime import date

from site_ledger.domain.attendance import AttendanceTimeRecord
from site_ledger.domain.work_units import AlignmentStatus, TimeEntry, TimeSpan
from site_ledger.services.attendance import AttendanceService
from site_ledger.services.audit import AuditService
from tests.conftest import InMemoryAttendanceRepository, InMemoryAuditRepository


def _record(record_id: str = "att-1", day_units: float = 1.0) -> AttendanceTimeRecord:
    return AttendanceTimeRecord(
        id=record_id,
        laborer_id="l1",
        date=date(2024, 3, 5),
        daily_rate=600,
        entry=TimeEntry(span=TimeSpan(), day_units=day_units),
    )


def _service(
    repository: InMemoryAttendanceRepository, audit: InMemoryAuditRepository
) -> AttendanceService:
    return AttendanceService(repository=repository, audit_service=AuditService(audit))


def test_apply_work_unit_sets_times_hours_and_earnings() -> None:
    repository = InMemoryAttendanceRepository(records={"att-1": _record()})
    audit = InMemoryAuditRepository()

    updated = _service(repository, audit).apply_work_unit("att-1", 1.5, actor="mgr")

    assert updated is not None
    assert updated.entry.day_units == 1.5
    assert updated.entry.span.in_time == "06:00"
    assert updated.entry.work_hours == 11
    assert updated.daily_earnings == 900.0
    assert repository.records["att-1"] == updated
    assert audit.events[0]["event_type"] == "work_unit_applied"
    assert audit.events[0]["after"]["day_units"] == 1.5


def test_apply_unknown_work_unit_stores_full_day() -> None:
    repository = InMemoryAttendanceRepository(records={"att-1": _record()})

    updated = _service(repository, InMemoryAuditRepository()).apply_work_unit(
        "att-1", 3.0
    )

    assert updated is not None
    assert updated.entry.day_units == 1.0
    assert updated.entry.span.out_time == "18:00"


def test_update_times_keeps_work_unit() -> None:
    repository = InMemoryAttendanceRepository(records={"att-1": _record()})
    service = _service(repository, InMemoryAuditRepository())
    service.apply_work_unit("att-1", 1.0)

    updated = service.update_times(
        "att-1",
        TimeSpan(
            in_time="08:00", out_time="20:00", lunch_out="13:00", lunch_in="13:30"
        ),
    )

    assert updated is not None
    assert updated.entry.day_units == 1.0
    assert updated.entry.work_hours == 11.5
    assert service.alignment(updated) is AlignmentStatus.OVERWORK


def test_alignment_without_times() -> None:
    service = _service(InMemoryAttendanceRepository(), InMemoryAuditRepository())

    assert service.alignment(_record()) is AlignmentStatus.NO_TIMES


def test_missing_record_returns_none() -> None:
    repository = InMemoryAttendanceRepository()
    audit = InMemoryAuditRepository()
    service = _service(repository, audit)

    assert service.apply_work_unit("missing", 1.0) is None
    assert service.update_times("missing", TimeSpan()) is None
    assert repository.updates == []
    assert audit.events == []


def test_unchanged_times_are_saved_without_audit() -> None:
    repository = InMemoryAttendanceRepository(records={"att-1": _record()})
    audit = InMemoryAuditRepository()

    _service(repository, audit).update_times("att-1", TimeSpan())

    assert repository.updates == ["att-1"]
    assert audit.events == []
