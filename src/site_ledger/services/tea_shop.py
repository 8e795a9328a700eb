"""Tea-shop entry sessions: hydrate, distribute, reconcile and save."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from site_ledger.domain.consumption import (
    ConsumptionPool,
    MarketGroup,
    NamedNonWorking,
    NamedWorking,
    Reconciliation,
    Recipient,
    SnackLineItem,
)
from site_ledger.domain.money import round_money
from site_ledger.domain.tea_shop import (
    ConsumptionDetailRecord,
    PresentLaborer,
    SaveResult,
    TeaShopEntryRecord,
    TeaShopSession,
)
from site_ledger.services.audit import AuditService
from site_ledger.services.consumption import (
    RECONCILE_TOLERANCE,
    distribute_snacks,
    distribute_tea,
    reconcile,
    summarize,
)

logger = logging.getLogger(__name__)


class TeaShopRepository(Protocol):
    """Persistence interface for tea-shop entries."""

    def get_entry(self, site_id: str, day: date) -> TeaShopEntryRecord | None:
        """Return the entry for a site and day, if any."""

    def list_consumption_details(self, entry_id: UUID) -> list[ConsumptionDetailRecord]:
        """Return per-laborer shares for an entry."""

    def list_present_laborers(self, site_id: str, day: date) -> list[PresentLaborer]:
        """Return laborers with attendance on the day."""

    def get_market_laborer_count(self, site_id: str, day: date) -> int:
        """Return the number of market laborers on the day."""

    def save_entry(self, entry: TeaShopEntryRecord) -> UUID:
        """Insert or update an entry and return its id."""

    def replace_consumption_details(
        self, entry_id: UUID, details: list[ConsumptionDetailRecord]
    ) -> None:
        """Replace all per-laborer shares for an entry."""


@dataclass
class TeaShopService:
    """Service that manages a day's tea-shop consumption entry."""

    repository: TeaShopRepository
    audit_service: AuditService
    reconcile_tolerance: float = RECONCILE_TOLERANCE

    def open_session(self, site_id: str, day: date) -> TeaShopSession:
        """Build the editing state for a site and day from stored records."""
        entry = self.repository.get_entry(site_id, day)
        present = self.repository.list_present_laborers(site_id, day)
        details: list[ConsumptionDetailRecord] = []
        if entry is not None and entry.id is not None:
            details = self.repository.list_consumption_details(entry.id)
        details_by_laborer = {detail.laborer_id: detail for detail in details}

        recipients: list[Recipient] = []
        present_ids: set[str] = set()
        for laborer in present:
            present_ids.add(laborer.laborer_id)
            detail = details_by_laborer.get(laborer.laborer_id)
            recipients.append(
                NamedWorking(
                    id=laborer.laborer_id,
                    name=laborer.name,
                    selected=entry is None or detail is not None,
                    tea_share=detail.tea_amount if detail else 0.0,
                    snacks_share=detail.snacks_amount if detail else 0.0,
                )
            )
        for detail in details:
            if detail.is_working or detail.laborer_id in present_ids:
                continue
            recipients.append(
                NamedNonWorking(
                    id=detail.laborer_id,
                    name=detail.laborer_name,
                    tea_share=detail.tea_amount,
                    snacks_share=detail.snacks_amount,
                )
            )

        if entry is None:
            market = MarketGroup(
                count=self.repository.get_market_laborer_count(site_id, day)
            )
            pool = ConsumptionPool()
        else:
            market = MarketGroup(
                count=entry.market_laborer_count,
                tea_share=entry.market_tea_amount,
                snacks_share=entry.market_snacks_amount,
            )
            pool = ConsumptionPool(
                tea_total=entry.tea_total,
                snack_line_items=tuple(
                    _parse_snack_item(item) for item in entry.snacks_items
                ),
            )
        recipients.append(market)

        return TeaShopSession(
            site_id=site_id,
            date=day,
            pool=pool,
            recipients=tuple(recipients),
            entry_id=entry.id if entry else None,
        )

    def distribute_tea(self, session: TeaShopSession) -> TeaShopSession:
        """Return the session with tea split across eligible recipients."""
        return replace(
            session, recipients=tuple(distribute_tea(session.pool, session.recipients))
        )

    def distribute_snacks(self, session: TeaShopSession) -> TeaShopSession:
        """Return the session with snacks split across eligible recipients."""
        return replace(
            session,
            recipients=tuple(distribute_snacks(session.pool, session.recipients)),
        )

    def reconcile(self, session: TeaShopSession) -> Reconciliation:
        """Compare assigned shares with the session's pool."""
        return reconcile(session.pool, session.recipients, self.reconcile_tolerance)

    def save_session(
        self, session: TeaShopSession, entered_by: str | None = None
    ) -> SaveResult:
        """Persist the entry header and shares for the session.

        Unassigned or over-assigned money is reported as a warning and does
        not prevent the save. Deselected workers are not stored, so any share
        they still hold is dropped with a warning before reconciling.
        """
        warnings: list[str] = []
        recipients, dropped = _stored_recipients(session.recipients)
        if dropped:
            warning = _format_dropped_warning(dropped)
            warnings.append(warning)
            logger.warning(
                warning,
                extra={
                    "site_id": session.site_id,
                    "date": session.date.isoformat(),
                    "laborer_ids": [recipient.id for recipient in dropped],
                },
            )
        session = replace(session, recipients=recipients)

        reconciliation = self.reconcile(session)
        if not reconciliation.is_balanced:
            warning = _format_drift_warning(reconciliation)
            warnings.append(warning)
            logger.warning(
                warning,
                extra={
                    "site_id": session.site_id,
                    "date": session.date.isoformat(),
                    "unassigned_amount": reconciliation.unassigned_amount,
                },
            )

        summary = summarize(session.pool, session.recipients)
        record = TeaShopEntryRecord(
            id=session.entry_id,
            site_id=session.site_id,
            date=session.date,
            tea_total=session.pool.tea_total,
            snacks_items=[
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "unit_rate": item.unit_rate,
                    "line_total": item.line_total,
                }
                for item in session.pool.snack_line_items
            ],
            snacks_total=session.pool.snacks_total,
            total_amount=session.pool.total,
            working_laborer_count=summary.working_count,
            working_laborer_total=summary.working_total,
            nonworking_laborer_count=summary.nonworking_count,
            nonworking_laborer_total=summary.nonworking_total,
            market_laborer_count=summary.market_count,
            market_tea_amount=summary.market_tea_amount,
            market_snacks_amount=summary.market_snacks_amount,
            entered_by=entered_by,
        )
        details = _detail_records(session.recipients)
        try:
            entry_id = self.repository.save_entry(record)
            self.repository.replace_consumption_details(entry_id, details)
        except Exception:
            logger.exception(
                "Failed to save tea shop entry",
                extra={"site_id": session.site_id, "date": session.date.isoformat()},
            )
            raise

        self.audit_service.record_event(
            actor=entered_by,
            entity_type="tea_shop_entry",
            entity_id=str(entry_id),
            event_type="created" if session.entry_id is None else "updated",
            before=None,
            after={
                "total_amount": record.total_amount,
                "assigned_total": reconciliation.assigned_total,
                "unassigned_amount": reconciliation.unassigned_amount,
            },
        )
        return SaveResult(
            entry_id=entry_id, reconciliation=reconciliation, warnings=warnings
        )


def _stored_recipients(
    recipients: tuple[Recipient, ...],
) -> tuple[tuple[Recipient, ...], list[NamedWorking]]:
    stored: list[Recipient] = []
    dropped: list[NamedWorking] = []
    for recipient in recipients:
        if (
            isinstance(recipient, NamedWorking)
            and not recipient.selected
            and (recipient.tea_share or recipient.snacks_share)
        ):
            dropped.append(recipient)
            stored.append(recipient.with_shares(tea_share=0.0, snacks_share=0.0))
        else:
            stored.append(recipient)
    return tuple(stored), dropped


def _detail_records(recipients: tuple[Recipient, ...]) -> list[ConsumptionDetailRecord]:
    details: list[ConsumptionDetailRecord] = []
    for recipient in recipients:
        if isinstance(recipient, NamedWorking) and recipient.selected:
            details.append(
                ConsumptionDetailRecord(
                    laborer_id=recipient.id,
                    laborer_name=recipient.name,
                    is_working=True,
                    tea_amount=recipient.tea_share,
                    snacks_amount=recipient.snacks_share,
                )
            )
        elif isinstance(recipient, NamedNonWorking):
            details.append(
                ConsumptionDetailRecord(
                    laborer_id=recipient.id,
                    laborer_name=recipient.name,
                    is_working=False,
                    tea_amount=recipient.tea_share,
                    snacks_amount=recipient.snacks_share,
                )
            )
    return details


def _parse_snack_item(item: dict[str, object]) -> SnackLineItem:
    return SnackLineItem(
        name=str(item.get("name") or "item"),
        quantity=_to_float(item.get("quantity")),
        unit_rate=_to_float(item.get("unit_rate", item.get("rate"))),
    )


def _to_float(value: object) -> float:
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


def _format_dropped_warning(dropped: list[NamedWorking]) -> str:
    amount = round_money(
        sum(recipient.tea_share + recipient.snacks_share for recipient in dropped)
    )
    names = ", ".join(recipient.name or recipient.id for recipient in dropped)
    return f"Dropped {amount:.2f} held by deselected workers: {names}"


def _format_drift_warning(reconciliation: Reconciliation) -> str:
    amount = reconciliation.unassigned_amount
    if amount > 0:
        return f"{amount:.2f} of the tea shop total is not assigned to anyone"
    return f"Assigned shares exceed the tea shop total by {-amount:.2f}"
