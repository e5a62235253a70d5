from __future__ import annotations

from typing import Any

from prediction_engine.domain import StakeBounds, StakeResolution, UsageLimitState
from prediction_engine.numbers import as_number, parse_number, round_half_up

DEFAULT_MIN_STAKE_POINTS = 5
DEFAULT_MAX_STAKE_POINTS = 500


def normalize_stake_bounds(
    min_stake_points: Any = None,
    max_stake_points: Any = None,
    *,
    default_min_stake_points: int = DEFAULT_MIN_STAKE_POINTS,
    default_max_stake_points: int = DEFAULT_MAX_STAKE_POINTS,
) -> StakeBounds:
    """Resolve a legal stake range, raising max to meet min when misconfigured."""

    min_candidate = as_number(min_stake_points)
    max_candidate = as_number(max_stake_points)
    resolved_min = max(
        1, round_half_up(min_candidate if min_candidate is not None else default_min_stake_points)
    )
    resolved_max = max(
        resolved_min,
        round_half_up(max_candidate if max_candidate is not None else default_max_stake_points),
    )
    return StakeBounds(min_stake_points=resolved_min, max_stake_points=resolved_max)


def is_stake_within_bounds(stake_points: Any, bounds: StakeBounds) -> bool:
    value = as_number(stake_points)
    if value is None:
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return bounds.min_stake_points <= value <= bounds.max_stake_points


def resolve_stake_input(
    raw_value: Any,
    bounds: StakeBounds,
    *,
    fallback_stake_points: Any = None,
) -> StakeResolution:
    """Coerce a user-entered stake into the legal range.

    ``adjusted`` is set whenever the submitted value could not be used as-is:
    it failed to parse, was fractional, or fell outside the bounds.
    """

    parsed = parse_number(raw_value)
    fallback = as_number(fallback_stake_points)
    if fallback is None:
        fallback = bounds.min_stake_points
    base_value = parsed if parsed is not None else fallback

    rounded = round_half_up(base_value)
    bounded = max(bounds.min_stake_points, min(bounds.max_stake_points, rounded))

    return StakeResolution(
        stake_points=bounded,
        adjusted=parsed is None or rounded != base_value or bounded != rounded,
    )


def derive_usage_limit_state(
    *,
    has_existing_prediction: bool,
    stake_points: Any,
    daily_stake_cap_points: Any = None,
    daily_stake_used_points: Any = None,
    daily_submission_cap: Any = None,
    daily_submissions_used: Any = None,
) -> UsageLimitState:
    """Check whether a new submission would breach the daily caps.

    Updates to an existing prediction never count against the caps. A cap or
    counter that is unknown leaves its flag unset.
    """

    if has_existing_prediction:
        return UsageLimitState()

    stake_cap = as_number(daily_stake_cap_points)
    stake_used = as_number(daily_stake_used_points)
    stake = as_number(stake_points)
    submission_cap = as_number(daily_submission_cap)
    submissions_used = as_number(daily_submissions_used)

    stake_cap_reached = (
        stake_cap is not None
        and stake_used is not None
        and stake is not None
        and stake_used + stake > stake_cap
    )
    # At-cap already blocks: this call stands for one more submission.
    submission_cap_reached = (
        submission_cap is not None
        and submissions_used is not None
        and submissions_used >= submission_cap
    )
    return UsageLimitState(
        daily_stake_cap_reached=stake_cap_reached,
        daily_submission_cap_reached=submission_cap_reached,
    )
