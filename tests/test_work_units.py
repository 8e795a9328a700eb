"""Tests for work unit presets and hours calculation."""

import logging

import pytest

from site_ledger.domain import work_units as work_units_domain
from site_ledger.domain.work_units import AlignmentStatus, TimeEntry, TimeSpan
from site_ledger.services import work_units as work_units_service
from site_ledger.services.work_units import (
    WORK_UNIT_PRESETS,
    alignment_status,
    apply_preset,
    calculate_earnings,
    compute_hours,
    is_known_unit,
    market_group_cost,
    parse_time_of_day,
    preset_for,
)


def test_full_day_hours_with_lunch() -> None:
    hours = compute_hours(
        TimeSpan(in_time="09:00", out_time="18:00", lunch_out="13:00", lunch_in="14:00")
    )

    assert hours.work_hours == 8
    assert hours.break_hours == 1
    assert hours.total_hours == 9


def test_overnight_shift_wraps_to_next_day() -> None:
    hours = compute_hours(TimeSpan(in_time="22:00", out_time="06:00"))

    assert hours.total_hours == 8
    assert hours.work_hours == 8
    assert hours.break_hours == 0


def test_missing_boundary_gives_zero_hours() -> None:
    hours = compute_hours(
        TimeSpan(in_time="", out_time="18:00", lunch_out="13:00", lunch_in="14:00")
    )

    assert (hours.work_hours, hours.break_hours, hours.total_hours) == (0, 0, 0)


def test_inverted_lunch_clamps_break_to_zero() -> None:
    hours = compute_hours(
        TimeSpan(in_time="09:00", out_time="17:00", lunch_out="14:00", lunch_in="13:00")
    )

    assert hours.break_hours == 0
    assert hours.work_hours == 8


def test_partial_lunch_is_ignored_and_seconds_accepted() -> None:
    hours = compute_hours(
        TimeSpan(in_time="08:15:00", out_time="12:45:00", lunch_out="10:00")
    )

    assert hours.total_hours == 4.5
    assert hours.break_hours == 0


def test_fractional_hours_round_to_two_decimals() -> None:
    hours = compute_hours(TimeSpan(in_time="09:00", out_time="09:20"))

    assert hours.total_hours == 0.33


@pytest.mark.parametrize("value", ["9", "ab:cd", "24:00", "12:60"])
def test_parse_time_of_day_rejects_invalid(value: str) -> None:
    with pytest.raises(ValueError):
        parse_time_of_day(value)


def test_parse_time_of_day() -> None:
    assert parse_time_of_day("00:00") == 0
    assert parse_time_of_day("7:05") == 425
    assert parse_time_of_day("23:59:59") == 1439


def test_half_day_preset_has_no_lunch() -> None:
    preset = preset_for(0.5)

    assert preset.lunch_out is None
    assert preset.lunch_in is None


def test_full_day_preset_times() -> None:
    span = apply_preset(1)

    assert span == TimeSpan(
        in_time="09:00", out_time="18:00", lunch_out="13:00", lunch_in="14:00"
    )


def test_unknown_unit_falls_back_to_full_day(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("site_ledger"), "propagate", True)
    with caplog.at_level(logging.WARNING, logger="site_ledger"):
        preset = preset_for(0.75)

    assert preset.unit_value == 1.0
    assert not is_known_unit(0.75)
    assert "Unknown work unit" in caplog.text


def test_presets_align_with_their_own_times() -> None:
    for unit_value, preset in WORK_UNIT_PRESETS.items():
        hours = compute_hours(apply_preset(unit_value))
        status = alignment_status(hours.work_hours, preset, True)
        assert status is AlignmentStatus.ALIGNED


def test_alignment_status_ranges() -> None:
    preset = preset_for(1)

    assert alignment_status(7, preset, True) is AlignmentStatus.ALIGNED
    assert alignment_status(9, preset, True) is AlignmentStatus.ALIGNED
    assert alignment_status(6.5, preset, True) is AlignmentStatus.UNDERWORK
    assert alignment_status(9.5, preset, True) is AlignmentStatus.OVERWORK
    assert alignment_status(8, preset, False) is AlignmentStatus.NO_TIMES
    assert alignment_status(0, preset, True) is AlignmentStatus.NO_TIMES


def test_time_entry_freezes_hours_with_times() -> None:
    entry = TimeEntry(span=apply_preset(1.5), day_units=1.5)

    assert entry.work_hours == 11
    assert entry.break_hours == 1
    assert entry.total_hours == 12


def test_earnings_and_market_cost() -> None:
    assert calculate_earnings(1.5, 650) == 975.0
    assert market_group_cost(3, 500, 0.5) == 750.0


def test_time_span_hours_come_from_domain_arithmetic() -> None:
    span = TimeSpan(
        in_time="09:00", out_time="18:00", lunch_out="13:00", lunch_in="14:00"
    )

    assert work_units_service.compute_hours is work_units_domain.compute_hours
    assert span.hours == work_units_domain.compute_hours(span)
    assert span.hours.work_hours == 8.0
