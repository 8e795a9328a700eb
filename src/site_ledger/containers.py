"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from site_ledger.adapters.supabase_attendance_repository import (
    SupabaseAttendanceRepository,
)
from site_ledger.adapters.supabase_audit_repository import SupabaseAuditRepository
from site_ledger.adapters.supabase_preferences_repository import (
    SupabasePreferencesRepository,
)
from site_ledger.adapters.supabase_summary_repository import (
    SupabaseSummaryRepository,
)
from site_ledger.adapters.supabase_tea_shop_repository import (
    SupabaseTeaShopRepository,
)
from site_ledger.config import Settings
from site_ledger.services.attendance import AttendanceService
from site_ledger.services.audit import AuditService
from site_ledger.services.preferences import PreferencesService
from site_ledger.services.summaries import SummaryService
from site_ledger.services.tea_shop import TeaShopService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tea_shop_service: TeaShopService
    attendance_service: AttendanceService
    summary_service: SummaryService
    preferences_service: PreferencesService
    audit_service: AuditService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    tea_shop_service = TeaShopService(
        repository=SupabaseTeaShopRepository(supabase_client),
        audit_service=audit_service,
        reconcile_tolerance=resolved_settings.reconcile_tolerance,
    )
    attendance_service = AttendanceService(
        repository=SupabaseAttendanceRepository(supabase_client),
        audit_service=audit_service,
    )
    summary_service = SummaryService(SupabaseSummaryRepository(supabase_client))
    preferences_service = PreferencesService(
        SupabasePreferencesRepository(supabase_client)
    )

    return AppContainer(
        settings=resolved_settings,
        tea_shop_service=tea_shop_service,
        attendance_service=attendance_service,
        summary_service=summary_service,
        preferences_service=preferences_service,
        audit_service=audit_service,
    )
