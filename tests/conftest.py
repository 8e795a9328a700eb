"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from site_ledger.config import Settings
from site_ledger.containers import AppContainer
from site_ledger.domain.attendance import AttendanceTimeRecord
from site_ledger.domain.preferences import DisplayPreferences
from site_ledger.domain.summaries import (
    AttendanceCostRow,
    MarketCostRow,
    TeaShopDayTotal,
)
from site_ledger.domain.tea_shop import (
    ConsumptionDetailRecord,
    PresentLaborer,
    TeaShopEntryRecord,
)
from site_ledger.services.attendance import AttendanceRepository, AttendanceService
from site_ledger.services.audit import AuditRepository, AuditService
from site_ledger.services.preferences import (
    PreferencesRepository,
    PreferencesService,
)
from site_ledger.services.summaries import SummaryRepository, SummaryService
from site_ledger.services.tea_shop import TeaShopRepository, TeaShopService


@dataclass
class InMemoryTeaShopRepository(TeaShopRepository):
    """In-memory tea-shop repository for tests."""

    entries: dict[tuple[str, date], TeaShopEntryRecord] = field(default_factory=dict)
    details: dict[UUID, list[ConsumptionDetailRecord]] = field(default_factory=dict)
    present: dict[tuple[str, date], list[PresentLaborer]] = field(
        default_factory=dict
    )
    market_counts: dict[tuple[str, date], int] = field(default_factory=dict)
    fail_on_save: bool = False

    def get_entry(self, site_id: str, day: date) -> TeaShopEntryRecord | None:
        return self.entries.get((site_id, day))

    def list_consumption_details(self, entry_id: UUID) -> list[ConsumptionDetailRecord]:
        return list(self.details.get(entry_id, []))

    def list_present_laborers(self, site_id: str, day: date) -> list[PresentLaborer]:
        return list(self.present.get((site_id, day), []))

    def get_market_laborer_count(self, site_id: str, day: date) -> int:
        return self.market_counts.get((site_id, day), 0)

    def save_entry(self, entry: TeaShopEntryRecord) -> UUID:
        if self.fail_on_save:
            raise RuntimeError("Failed to save tea shop entry")
        existing = self.entries.get((entry.site_id, entry.date))
        entry_id = entry.id or (existing.id if existing else None) or uuid4()
        self.entries[(entry.site_id, entry.date)] = replace(entry, id=entry_id)
        return entry_id

    def replace_consumption_details(
        self, entry_id: UUID, details: list[ConsumptionDetailRecord]
    ) -> None:
        self.details[entry_id] = list(details)


@dataclass
class InMemoryAttendanceRepository(AttendanceRepository):
    """In-memory attendance repository for tests."""

    records: dict[str, AttendanceTimeRecord] = field(default_factory=dict)
    updates: list[str] = field(default_factory=list)

    def get_time_record(self, record_id: str) -> AttendanceTimeRecord | None:
        return self.records.get(record_id)

    def update_time_record(self, record: AttendanceTimeRecord) -> None:
        self.records[record.id] = record
        self.updates.append(record.id)


@dataclass
class InMemorySummaryRepository(SummaryRepository):
    """In-memory summary repository for tests."""

    attendance: list[AttendanceCostRow] = field(default_factory=list)
    market: list[MarketCostRow] = field(default_factory=list)
    tea_shop: list[TeaShopDayTotal] = field(default_factory=list)

    def list_attendance_costs(
        self, site_id: str, start: date, end: date
    ) -> list[AttendanceCostRow]:
        return [row for row in self.attendance if start <= row.day <= end]

    def list_market_costs(
        self, site_id: str, start: date, end: date
    ) -> list[MarketCostRow]:
        return [row for row in self.market if start <= row.day <= end]

    def list_tea_shop_totals(
        self, site_id: str, start: date, end: date
    ) -> list[TeaShopDayTotal]:
        return [row for row in self.tea_shop if start <= row.day <= end]


@dataclass
class InMemoryPreferencesRepository(PreferencesRepository):
    """In-memory preferences repository for tests."""

    preferences: dict[str, DisplayPreferences] = field(default_factory=dict)
    saves: int = 0

    def get_preferences(self, user_id: str) -> DisplayPreferences | None:
        return self.preferences.get(user_id)

    def save_preferences(self, user_id: str, preferences: DisplayPreferences) -> None:
        self.preferences[user_id] = preferences
        self.saves += 1


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[dict[str, object]] = field(default_factory=list)

    def create_event(  # noqa: PLR0913
        self,
        actor: str | None,
        entity_type: str,
        entity_id: str,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        self.events.append(
            {
                "actor": actor,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "event_type": event_type,
                "before": before,
                "after": after,
            }
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def tea_shop_repository() -> InMemoryTeaShopRepository:
    return InMemoryTeaShopRepository()


@pytest.fixture
def attendance_repository() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def summary_repository() -> InMemorySummaryRepository:
    return InMemorySummaryRepository()


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def container(
    settings: Settings,
    tea_shop_repository: InMemoryTeaShopRepository,
    attendance_repository: InMemoryAttendanceRepository,
    summary_repository: InMemorySummaryRepository,
    audit_repository: InMemoryAuditRepository,
) -> AppContainer:
    audit_service = AuditService(audit_repository)
    return AppContainer(
        settings=settings,
        tea_shop_service=TeaShopService(
            repository=tea_shop_repository,
            audit_service=audit_service,
            reconcile_tolerance=settings.reconcile_tolerance,
        ),
        attendance_service=AttendanceService(
            repository=attendance_repository, audit_service=audit_service
        ),
        summary_service=SummaryService(summary_repository),
        preferences_service=PreferencesService(InMemoryPreferencesRepository()),
        audit_service=audit_service,
    )
