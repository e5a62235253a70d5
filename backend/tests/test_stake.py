from __future__ import annotations

import math

import pytest

from prediction_engine.domain import StakeBounds, StakeResolution, UsageLimitState
from prediction_engine.stake import (
    derive_usage_limit_state,
    is_stake_within_bounds,
    normalize_stake_bounds,
    resolve_stake_input,
)

BOUNDS = StakeBounds(min_stake_points=5, max_stake_points=100)


def test_normalize_bounds_raises_max_to_meet_min():
    assert normalize_stake_bounds(30, 10) == StakeBounds(min_stake_points=30, max_stake_points=30)


def test_normalize_bounds_uses_defaults_for_missing_values():
    assert normalize_stake_bounds() == StakeBounds(min_stake_points=5, max_stake_points=500)
    assert normalize_stake_bounds(
        None, math.nan, default_min_stake_points=7, default_max_stake_points=70
    ) == StakeBounds(min_stake_points=7, max_stake_points=70)


def test_normalize_bounds_rounds_and_floors_minimum():
    assert normalize_stake_bounds(-4, 12.5) == StakeBounds(min_stake_points=1, max_stake_points=13)
    assert normalize_stake_bounds(0.4, 0) == StakeBounds(min_stake_points=1, max_stake_points=1)


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("500", StakeResolution(stake_points=100, adjusted=True)),
        (50, StakeResolution(stake_points=50, adjusted=False)),
        ("25", StakeResolution(stake_points=25, adjusted=False)),
        (12.5, StakeResolution(stake_points=13, adjusted=True)),
        (2, StakeResolution(stake_points=5, adjusted=True)),
        ("abc", StakeResolution(stake_points=10, adjusted=True)),
        (math.nan, StakeResolution(stake_points=10, adjusted=True)),
        ("1_0", StakeResolution(stake_points=10, adjusted=True)),
        ("\u0661\u0662", StakeResolution(stake_points=10, adjusted=True)),
        ("0x10", StakeResolution(stake_points=16, adjusted=False)),
        ("-0x10", StakeResolution(stake_points=10, adjusted=True)),
        (" 2.5e1 ", StakeResolution(stake_points=25, adjusted=False)),
    ],
)
def test_resolve_stake_input_clamps_and_flags_adjustments(raw_value, expected):
    assert resolve_stake_input(raw_value, BOUNDS, fallback_stake_points=10) == expected


def test_resolve_stake_input_falls_back_to_minimum_without_fallback():
    assert resolve_stake_input("not a number", BOUNDS) == StakeResolution(stake_points=5, adjusted=True)


def test_resolve_stake_input_clamps_fallback_into_bounds():
    resolution = resolve_stake_input(None, BOUNDS, fallback_stake_points=1000)

    assert resolution == StakeResolution(stake_points=100, adjusted=True)


@pytest.mark.parametrize(
    ("stake", "expected"),
    [(5, True), (100, True), (42.0, True), (10.5, False), (4, False), (101, False), (math.inf, False), (True, False)],
)
def test_is_stake_within_bounds_requires_integer_in_range(stake, expected):
    assert is_stake_within_bounds(stake, BOUNDS) is expected


def test_usage_limits_flag_both_caps_for_new_submission():
    state = derive_usage_limit_state(
        has_existing_prediction=False,
        stake_points=80,
        daily_stake_cap_points=100,
        daily_stake_used_points=30,
        daily_submission_cap=10,
        daily_submissions_used=10,
    )

    assert state == UsageLimitState(daily_stake_cap_reached=True, daily_submission_cap_reached=True)
    assert state.any_cap_reached is True


def test_usage_limits_exempt_existing_predictions():
    state = derive_usage_limit_state(
        has_existing_prediction=True,
        stake_points=80,
        daily_stake_cap_points=100,
        daily_stake_used_points=30,
        daily_submission_cap=10,
        daily_submissions_used=10,
    )

    assert state == UsageLimitState(daily_stake_cap_reached=False, daily_submission_cap_reached=False)


def test_stake_cap_allows_filling_exactly_to_the_cap():
    state = derive_usage_limit_state(
        has_existing_prediction=False,
        stake_points=70,
        daily_stake_cap_points=100,
        daily_stake_used_points=30,
        daily_submission_cap=10,
        daily_submissions_used=9,
    )

    assert state.daily_stake_cap_reached is False
    assert state.daily_submission_cap_reached is False


def test_usage_limits_fail_open_on_unknown_fields():
    state = derive_usage_limit_state(
        has_existing_prediction=False,
        stake_points=80,
        daily_stake_cap_points=None,
        daily_stake_used_points=99,
        daily_submission_cap=10,
        daily_submissions_used=math.nan,
    )

    assert state == UsageLimitState()
