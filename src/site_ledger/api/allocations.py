"""Cost allocation endpoints for site groups and labor groups."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from site_ledger.api.schemas import (
    LaborGroupSplitRequest,
    MultiSiteSplitRequest,
    SiteGroupAllocationRequest,
)
from site_ledger.domain.allocation import LaborGroupSplit, SiteDayUnits
from site_ledger.services.allocation import (
    InvalidSplitError,
    allocate_by_day_units,
    split_across_sites,
    split_labor_groups,
)

router = APIRouter(prefix="/allocations", tags=["allocations"])


@router.post("/site-group")
async def allocate_site_group(payload: SiteGroupAllocationRequest) -> dict[str, object]:
    """Split a cost across a site group by day units worked."""
    allocations = allocate_by_day_units(
        payload.total_cost,
        [
            SiteDayUnits(site_id=site.site_id, total_units=site.total_units)
            for site in payload.sites
        ],
    )
    return {"allocations": [asdict(item) for item in allocations]}


@router.post("/labor-groups")
async def allocate_labor_groups(payload: LaborGroupSplitRequest) -> dict[str, object]:
    """Split a cost between daily, contract and market laborers."""
    split = LaborGroupSplit(
        daily=payload.daily, contract=payload.contract, market=payload.market
    )
    try:
        amounts = split_labor_groups(payload.total_cost, split)
    except InvalidSplitError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return asdict(amounts)


@router.post("/multi-site")
async def allocate_multi_site(payload: MultiSiteSplitRequest) -> dict[str, object]:
    """Split a cost between a primary and a secondary site."""
    return asdict(split_across_sites(payload.total_cost, payload.primary_percent))
