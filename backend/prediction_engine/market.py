"""Pari-mutuel market snapshot derived from stake totals and upstream overrides.

Every field is optional. Explicit overrides supplied by the caller always win;
anything missing is derived from the per-side stake totals, and whatever
cannot be derived surfaces as ``None``. The builder never raises.
"""

from __future__ import annotations

from typing import Any, Mapping

from prediction_engine.domain import MarketSnapshot
from prediction_engine.numbers import as_number, clamp, non_negative, round_half_up
from prediction_engine.tier import to_trust_tier

_SNAPSHOT_INPUT_KEYS: dict[str, str] = {
    "mergeStakePoints": "merge_stake_points",
    "rejectStakePoints": "reject_stake_points",
    "totalStakePoints": "total_stake_points",
    "marketPoolPoints": "market_pool_points",
    "mergeOdds": "merge_odds",
    "rejectOdds": "reject_odds",
    "mergePayoutMultiplier": "merge_payout_multiplier",
    "rejectPayoutMultiplier": "reject_payout_multiplier",
    "potentialMergePayout": "potential_merge_payout",
    "potentialRejectPayout": "potential_reject_payout",
    "stakePointsForPotential": "stake_points_for_potential",
    "dailyStakeCapPoints": "daily_stake_cap_points",
    "dailyStakeUsedPoints": "daily_stake_used_points",
    "dailySubmissionCap": "daily_submission_cap",
    "dailySubmissionsUsed": "daily_submissions_used",
    "observerNetPoints": "observer_net_points",
    "trustTier": "trust_tier",
}


def _odds_ratio(override: Any, side_stake: float, total_stake: float) -> float | None:
    ratio = as_number(override)
    if ratio is None and total_stake > 0:
        ratio = side_stake / total_stake
    if ratio is None:
        return None
    return clamp(ratio, 0.0, 1.0)


def _odds_percent(ratio: float | None) -> int | None:
    if ratio is None:
        return None
    return round_half_up(clamp(ratio, 0.0, 1.0) * 100)


def _payout_multiplier(override: Any, ratio: float | None) -> float | None:
    multiplier = as_number(override)
    if multiplier is None and ratio is not None and ratio > 0:
        multiplier = 1 / ratio
    return non_negative(multiplier)


def _potential_payout(override: Any, stake: int | float | None, multiplier: float | None) -> int | float | None:
    explicit = as_number(override)
    if explicit is not None:
        return max(0, explicit)
    if stake is None or multiplier is None:
        return None
    return max(0, round_half_up(stake * multiplier))


def _remaining(cap: int | float | None, used: int | float | None) -> int | float | None:
    if cap is None or used is None:
        return None
    return max(0, cap - used)


def build_market_snapshot(
    *,
    merge_stake_points: Any = None,
    reject_stake_points: Any = None,
    total_stake_points: Any = None,
    market_pool_points: Any = None,
    merge_odds: Any = None,
    reject_odds: Any = None,
    merge_payout_multiplier: Any = None,
    reject_payout_multiplier: Any = None,
    potential_merge_payout: Any = None,
    potential_reject_payout: Any = None,
    stake_points_for_potential: Any = None,
    daily_stake_cap_points: Any = None,
    daily_stake_used_points: Any = None,
    daily_submission_cap: Any = None,
    daily_submissions_used: Any = None,
    observer_net_points: Any = None,
    trust_tier: Any = None,
) -> MarketSnapshot:
    merge_stake = max(0, as_number(merge_stake_points) or 0)
    reject_stake = max(0, as_number(reject_stake_points) or 0)

    total_override = as_number(total_stake_points)
    total_stake = max(0, total_override if total_override is not None else merge_stake + reject_stake)

    pool_points = as_number(market_pool_points)
    if pool_points is None and total_stake > 0:
        pool_points = round_half_up(total_stake)
    pool_points = non_negative(pool_points)

    merge_ratio = _odds_ratio(merge_odds, merge_stake, total_stake)
    reject_ratio = _odds_ratio(reject_odds, reject_stake, total_stake)

    merge_multiplier = _payout_multiplier(merge_payout_multiplier, merge_ratio)
    reject_multiplier = _payout_multiplier(reject_payout_multiplier, reject_ratio)

    hypothetical_stake = as_number(stake_points_for_potential)
    potential_merge = _potential_payout(potential_merge_payout, hypothetical_stake, merge_multiplier)
    potential_reject = _potential_payout(potential_reject_payout, hypothetical_stake, reject_multiplier)

    stake_cap = as_number(daily_stake_cap_points)
    stake_used = as_number(daily_stake_used_points)
    submission_cap = as_number(daily_submission_cap)
    submissions_used = as_number(daily_submissions_used)

    net_points = as_number(observer_net_points)
    tier = to_trust_tier(trust_tier)

    return MarketSnapshot(
        merge_stake_points=merge_stake,
        reject_stake_points=reject_stake,
        total_stake_points=round_half_up(total_stake),
        market_pool_points=pool_points,
        merge_odds_ratio=merge_ratio,
        reject_odds_ratio=reject_ratio,
        merge_odds_percent=_odds_percent(merge_ratio),
        reject_odds_percent=_odds_percent(reject_ratio),
        merge_payout_multiplier=merge_multiplier,
        reject_payout_multiplier=reject_multiplier,
        potential_merge_payout=potential_merge,
        potential_reject_payout=potential_reject,
        daily_stake_cap_points=stake_cap,
        daily_stake_used_points=stake_used,
        daily_stake_remaining_points=_remaining(stake_cap, stake_used),
        daily_submission_cap=submission_cap,
        daily_submissions_used=submissions_used,
        daily_submissions_remaining=_remaining(submission_cap, submissions_used),
        observer_net_points=net_points,
        trust_tier=tier,
        has_market_summary=pool_points is not None or merge_ratio is not None or reject_ratio is not None,
        has_potential_payout=potential_merge is not None or potential_reject is not None,
        has_observer_market_profile=net_points is not None or tier is not None,
        has_usage_caps=any(
            value is not None for value in (stake_cap, stake_used, submission_cap, submissions_used)
        ),
    )


def snapshot_fields_from_mapping(payload: Mapping[str, Any] | None) -> dict[str, Any]:
    """Translate a persisted record into builder keyword arguments.

    Both camelCase and snake_case keys are accepted; unknown keys are dropped.
    """

    if not isinstance(payload, Mapping):
        return {}

    known_fields = set(_SNAPSHOT_INPUT_KEYS.values())
    fields: dict[str, Any] = {}
    for key, value in payload.items():
        name = _SNAPSHOT_INPUT_KEYS.get(key, key)
        if name in known_fields:
            fields[name] = value
    return fields


def build_market_snapshot_from_mapping(payload: Mapping[str, Any] | None) -> MarketSnapshot:
    return build_market_snapshot(**snapshot_fields_from_mapping(payload))
