"""Tea-shop consumption endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from site_ledger.api.dependencies import require_known_site
from site_ledger.api.schemas import (
    ConsumptionRequest,
    DistributeRequest,
    DistributeResponse,
    ReconciliationModel,
    SaveTeaShopRequest,
    SaveTeaShopResponse,
    TeaShopSessionModel,
    pool_from_domain,
    pool_to_domain,
    recipient_from_domain,
    recipient_to_domain,
    reconciliation_model,
)
from site_ledger.domain.tea_shop import TeaShopSession
from site_ledger.services.consumption import (
    distribute_snacks,
    distribute_tea,
    eligible_snacks_recipient_count,
    eligible_tea_recipient_count,
    reconcile,
)

if TYPE_CHECKING:
    from site_ledger.containers import AppContainer

router = APIRouter(tags=["tea-shop"])


@router.post("/consumption/distribute")
async def distribute_pool(
    payload: DistributeRequest, request: Request
) -> DistributeResponse:
    """Split the tea or snacks total across the eligible recipients."""
    container: AppContainer = request.app.state.container
    pool = pool_to_domain(payload.pool)
    recipients = [recipient_to_domain(item) for item in payload.recipients]
    if payload.target == "tea":
        eligible = eligible_tea_recipient_count(recipients)
        updated = distribute_tea(pool, recipients)
    else:
        eligible = eligible_snacks_recipient_count(recipients)
        updated = distribute_snacks(pool, recipients)
    return DistributeResponse(
        eligible_count=eligible,
        recipients=[recipient_from_domain(item) for item in updated],
        reconciliation=reconciliation_model(
            reconcile(pool, updated, container.settings.reconcile_tolerance)
        ),
    )


@router.post("/consumption/reconcile")
async def reconcile_pool(
    payload: ConsumptionRequest, request: Request
) -> ReconciliationModel:
    """Compare assigned shares with the pool total."""
    container: AppContainer = request.app.state.container
    recipients = [recipient_to_domain(item) for item in payload.recipients]
    return reconciliation_model(
        reconcile(
            pool_to_domain(payload.pool),
            recipients,
            container.settings.reconcile_tolerance,
        )
    )


@router.get("/sites/{site_id}/tea-shop/{day}")
async def open_entry(
    day: date, request: Request, site_id: str = Depends(require_known_site)
) -> TeaShopSessionModel:
    """Return the tea-shop entry form state for a site and day."""
    container: AppContainer = request.app.state.container
    service = container.tea_shop_service
    session = service.open_session(site_id, day)
    return TeaShopSessionModel(
        site_id=session.site_id,
        date=session.date,
        entry_id=session.entry_id,
        pool=pool_from_domain(session.pool),
        recipients=[recipient_from_domain(item) for item in session.recipients],
        reconciliation=reconciliation_model(service.reconcile(session)),
    )


@router.put("/sites/{site_id}/tea-shop/{day}")
async def save_entry(
    day: date,
    payload: SaveTeaShopRequest,
    request: Request,
    site_id: str = Depends(require_known_site),
) -> SaveTeaShopResponse:
    """Save the tea-shop entry, returning any drift as a warning."""
    container: AppContainer = request.app.state.container
    session = TeaShopSession(
        site_id=site_id,
        date=day,
        pool=pool_to_domain(payload.pool),
        recipients=tuple(recipient_to_domain(item) for item in payload.recipients),
        entry_id=payload.entry_id,
    )
    result = container.tea_shop_service.save_session(
        session, entered_by=payload.entered_by
    )
    return SaveTeaShopResponse(
        entry_id=result.entry_id,
        reconciliation=reconciliation_model(result.reconciliation),
        warnings=result.warnings,
    )
