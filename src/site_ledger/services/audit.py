"""Audit trail for ledger writes."""

from dataclasses import dataclass
from typing import Protocol


class AuditRepository(Protocol):
    """Persistence interface for audit events."""

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


@dataclass
class AuditService:
    """Records who changed which ledger row, and how."""

    repository: AuditRepository

    def record_event(  # noqa: PLR0913
        self,
        actor: str | None,
        entity_type: str,
        entity_id: str,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Persist an audit event as given."""
        self.repository.create_event(
            actor=actor,
            entity_type=entity_type,
            entity_id=entity_id,
            event_type=event_type,
            before=before,
            after=after,
        )

    def record_change(  # noqa: PLR0913
        self,
        actor: str | None,
        entity_type: str,
        entity_id: str,
        event_type: str,
        before: dict[str, object],
        after: dict[str, object],
    ) -> bool:
        """Persist only the fields that differ between two snapshots.

        Returns False, without writing, when nothing changed.
        """
        changed = sorted(
            key
            for key in before.keys() | after.keys()
            if before.get(key) != after.get(key)
        )
        if not changed:
            return False
        self.record_event(
            actor=actor,
            entity_type=entity_type,
            entity_id=entity_id,
            event_type=event_type,
            before={key: before.get(key) for key in changed},
            after={key: after.get(key) for key in changed},
        )
        return True
