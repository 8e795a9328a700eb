"""Work-day unit presets and worked-hours calculation."""

import logging

from site_ledger.domain.money import round_money
from site_ledger.domain.work_units import (
    AlignmentStatus,
    TimeSpan,
    WorkUnitPreset,
    compute_hours,
    parse_time_of_day,
)

__all__ = [
    "DEFAULT_UNIT_VALUE",
    "WORK_UNIT_PRESETS",
    "alignment_status",
    "apply_preset",
    "calculate_earnings",
    "compute_hours",
    "is_known_unit",
    "market_group_cost",
    "parse_time_of_day",
    "preset_for",
]

logger = logging.getLogger(__name__)

DEFAULT_UNIT_VALUE = 1.0

WORK_UNIT_PRESETS: dict[float, WorkUnitPreset] = {
    0.5: WorkUnitPreset(
        unit_value=0.5,
        label="Half Day",
        in_time="09:00",
        out_time="13:00",
        lunch_out=None,
        lunch_in=None,
        expected_hour_range=(3.0, 5.0),
    ),
    1.0: WorkUnitPreset(
        unit_value=1.0,
        label="Full Day",
        in_time="09:00",
        out_time="18:00",
        lunch_out="13:00",
        lunch_in="14:00",
        expected_hour_range=(7.0, 9.0),
    ),
    1.5: WorkUnitPreset(
        unit_value=1.5,
        label="Extended",
        in_time="06:00",
        out_time="18:00",
        lunch_out="13:00",
        lunch_in="14:00",
        expected_hour_range=(10.0, 12.0),
    ),
    2.0: WorkUnitPreset(
        unit_value=2.0,
        label="Double",
        in_time="06:00",
        out_time="22:00",
        lunch_out="13:00",
        lunch_in="14:00",
        expected_hour_range=(14.0, 16.0),
    ),
}


def is_known_unit(unit_value: float) -> bool:
    """Return True when the unit has a preset."""
    return unit_value in WORK_UNIT_PRESETS


def preset_for(unit_value: float) -> WorkUnitPreset:
    """Return the preset for a unit, falling back to Full Day."""
    preset = WORK_UNIT_PRESETS.get(unit_value)
    if preset is None:
        logger.warning(
            "Unknown work unit, using Full Day preset",
            extra={"unit_value": unit_value},
        )
        return WORK_UNIT_PRESETS[DEFAULT_UNIT_VALUE]
    return preset


def apply_preset(unit_value: float) -> TimeSpan:
    """Return the canonical times for a work unit."""
    preset = preset_for(unit_value)
    return TimeSpan(
        in_time=preset.in_time,
        out_time=preset.out_time,
        lunch_out=preset.lunch_out,
        lunch_in=preset.lunch_in,
    )


def alignment_status(
    work_hours: float, preset: WorkUnitPreset, has_time_entries: bool
) -> AlignmentStatus:
    """Compare worked hours against the preset's expected range."""
    if not has_time_entries or work_hours == 0:
        return AlignmentStatus.NO_TIMES
    minimum, maximum = preset.expected_hour_range
    if work_hours < minimum:
        return AlignmentStatus.UNDERWORK
    if work_hours > maximum:
        return AlignmentStatus.OVERWORK
    return AlignmentStatus.ALIGNED


def calculate_earnings(day_units: float, daily_rate: float) -> float:
    """Return pay for a number of day units at a daily rate."""
    return round_money(day_units * daily_rate)


def market_group_cost(count: int, rate_per_person: float, day_units: float) -> float:
    """Return the salary cost of a market laborer group."""
    return round_money(count * rate_per_person * day_units)
