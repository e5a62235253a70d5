"""Settlement and risk helpers for observer pull-request prediction markets."""

from .market import build_market_snapshot, build_market_snapshot_from_mapping
from .risk import (
    classify_resolution_window_risk,
    normalize_resolution_window_thresholds,
)
from .stake import (
    derive_usage_limit_state,
    is_stake_within_bounds,
    normalize_stake_bounds,
    resolve_stake_input,
)

__all__ = [
    "build_market_snapshot",
    "build_market_snapshot_from_mapping",
    "classify_resolution_window_risk",
    "derive_usage_limit_state",
    "is_stake_within_bounds",
    "normalize_resolution_window_thresholds",
    "normalize_stake_bounds",
    "resolve_stake_input",
]
