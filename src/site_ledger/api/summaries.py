"""Settlement summary and preference endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from site_ledger.api.dependencies import require_known_site
from site_ledger.api.schemas import PreferencesModel
from site_ledger.services.summaries import calculate_period_totals

if TYPE_CHECKING:
    from site_ledger.containers import AppContainer

router = APIRouter(tags=["summaries"])


@router.get("/sites/{site_id}/summary")
async def site_summary(
    start: date,
    end: date,
    request: Request,
    site_id: str = Depends(require_known_site),
) -> dict[str, object]:
    """Return day summaries and period totals for a date range."""
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="start must not be after end",
        )
    container: AppContainer = request.app.state.container
    days = container.summary_service.get_day_summaries(site_id, start, end)
    return {
        "days": [
            {
                **asdict(day),
                "total_laborer_count": day.total_laborer_count,
                "total_expense": day.total_expense,
            }
            for day in days
        ],
        "totals": asdict(calculate_period_totals(days)),
    }


@router.get("/preferences/{user_id}")
async def get_preferences(user_id: str, request: Request) -> PreferencesModel:
    """Return display preferences, defaulting when none are stored."""
    container: AppContainer = request.app.state.container
    preferences = container.preferences_service.load(user_id)
    return PreferencesModel(show_holidays=preferences.show_holidays)


@router.put("/preferences/{user_id}")
async def update_preferences(
    user_id: str, payload: PreferencesModel, request: Request
) -> PreferencesModel:
    """Update display preferences."""
    container: AppContainer = request.app.state.container
    preferences = container.preferences_service.set_show_holidays(
        user_id, payload.show_holidays
    )
    return PreferencesModel(show_holidays=preferences.show_holidays)
