"""Work unit and attendance time endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from site_ledger.api.schemas import (
    AttendanceRecordModel,
    HoursRequest,
    HoursResponse,
    UpdateTimesRequest,
    WorkUnitPresetModel,
    WorkUnitRequest,
    span_to_domain,
)
from site_ledger.services.work_units import (
    WORK_UNIT_PRESETS,
    alignment_status,
    compute_hours,
    preset_for,
)

if TYPE_CHECKING:
    from site_ledger.containers import AppContainer
    from site_ledger.domain.attendance import AttendanceTimeRecord
    from site_ledger.domain.work_units import AlignmentStatus, WorkUnitPreset

router = APIRouter(tags=["attendance"])


@router.get("/work-units")
async def list_work_units() -> list[WorkUnitPresetModel]:
    """Return the known work unit presets."""
    return [_preset_model(preset) for preset in WORK_UNIT_PRESETS.values()]


@router.get("/work-units/{unit_value}")
async def get_work_unit(unit_value: float) -> WorkUnitPresetModel:
    """Return the preset for a unit, falling back to a full day."""
    return _preset_model(preset_for(unit_value))


@router.post("/work-units/hours")
async def calculate_hours(payload: HoursRequest) -> HoursResponse:
    """Compute hours for a set of times without saving them."""
    span = span_to_domain(payload)
    try:
        hours = compute_hours(span)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    alignment = None
    if payload.unit_value is not None:
        alignment = alignment_status(
            hours.work_hours, preset_for(payload.unit_value), span.has_time_entries
        )
    return HoursResponse(
        work_hours=hours.work_hours,
        break_hours=hours.break_hours,
        total_hours=hours.total_hours,
        alignment=alignment,
    )


@router.post("/attendance/{record_id}/work-unit")
async def apply_work_unit(
    record_id: str, payload: WorkUnitRequest, request: Request
) -> AttendanceRecordModel:
    """Apply a work unit and its preset times to an attendance row."""
    container: AppContainer = request.app.state.container
    service = container.attendance_service
    record = service.apply_work_unit(record_id, payload.unit_value, payload.actor)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _record_model(record, service.alignment(record))


@router.put("/attendance/{record_id}/times")
async def update_times(
    record_id: str, payload: UpdateTimesRequest, request: Request
) -> AttendanceRecordModel:
    """Replace the times on an attendance row and recompute its hours."""
    container: AppContainer = request.app.state.container
    service = container.attendance_service
    try:
        record = service.update_times(record_id, span_to_domain(payload), payload.actor)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _record_model(record, service.alignment(record))


def _preset_model(preset: WorkUnitPreset) -> WorkUnitPresetModel:
    return WorkUnitPresetModel(
        unit_value=preset.unit_value,
        label=preset.label,
        in_time=preset.in_time,
        out_time=preset.out_time,
        lunch_out=preset.lunch_out,
        lunch_in=preset.lunch_in,
        expected_hour_range=preset.expected_hour_range,
    )


def _record_model(
    record: AttendanceTimeRecord, alignment: AlignmentStatus
) -> AttendanceRecordModel:
    entry = record.entry
    return AttendanceRecordModel(
        id=record.id,
        laborer_id=record.laborer_id,
        date=record.date,
        day_units=entry.day_units,
        daily_rate=record.daily_rate,
        daily_earnings=record.daily_earnings,
        in_time=entry.span.in_time,
        out_time=entry.span.out_time,
        lunch_out=entry.span.lunch_out,
        lunch_in=entry.span.lunch_in,
        work_hours=entry.work_hours,
        break_hours=entry.break_hours,
        total_hours=entry.total_hours,
        alignment=alignment,
    )
