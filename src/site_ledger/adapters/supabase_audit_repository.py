"""Supabase repository for audit events."""

from dataclasses import dataclass

from supabase import Client

from site_ledger.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client

    def create_event(  # noqa: PLR0913
        self,
        actor: str | None,
        entity_type: str,
        entity_id: str,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Create an audit log row."""
        self.client.table("audit_log").insert(
            {
                "table_name": entity_type,
                "record_id": entity_id,
                "action": event_type,
                "old_data": before,
                "new_data": after,
                "changed_by": actor or "system",
            }
        ).execute()
