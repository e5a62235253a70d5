"""Typed domain representations produced by the settlement and risk engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class PredictionOutcome(str, Enum):
    MERGE = "merge"
    REJECT = "reject"


class TrustTier(str, Enum):
    ENTRY = "entry"
    REGULAR = "regular"
    TRUSTED = "trusted"
    ELITE = "elite"


class RiskLevel(str, Enum):
    HEALTHY = "healthy"
    WATCH = "watch"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


@dataclass(slots=True, frozen=True)
class MarketSnapshot:
    """Fully derived view of a two-outcome pari-mutuel market."""

    merge_stake_points: int | float
    reject_stake_points: int | float
    total_stake_points: int
    market_pool_points: int | float | None
    merge_odds_ratio: float | None
    reject_odds_ratio: float | None
    merge_odds_percent: int | None
    reject_odds_percent: int | None
    merge_payout_multiplier: float | None
    reject_payout_multiplier: float | None
    potential_merge_payout: int | float | None
    potential_reject_payout: int | float | None
    daily_stake_cap_points: int | float | None
    daily_stake_used_points: int | float | None
    daily_stake_remaining_points: int | float | None
    daily_submission_cap: int | float | None
    daily_submissions_used: int | float | None
    daily_submissions_remaining: int | float | None
    observer_net_points: int | float | None
    trust_tier: TrustTier | None
    has_market_summary: bool
    has_potential_payout: bool
    has_observer_market_profile: bool
    has_usage_caps: bool

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys API clients expect."""

        from prediction_engine.schemas import MarketSnapshotSchema

        return MarketSnapshotSchema.model_validate(self).model_dump(by_alias=True, mode="json")


@dataclass(slots=True, frozen=True)
class StakeBounds:
    min_stake_points: int
    max_stake_points: int


@dataclass(slots=True, frozen=True)
class StakeResolution:
    stake_points: int
    adjusted: bool


@dataclass(slots=True, frozen=True)
class UsageLimitState:
    daily_stake_cap_reached: bool = False
    daily_submission_cap_reached: bool = False

    @property
    def any_cap_reached(self) -> bool:
        return self.daily_stake_cap_reached or self.daily_submission_cap_reached


@dataclass(slots=True, frozen=True)
class AccuracyRateThresholds:
    critical_below: float
    watch_below: float


@dataclass(slots=True, frozen=True)
class ResolutionWindowThresholds:
    accuracy_rate: AccuracyRateThresholds
    min_resolved_predictions: int


@dataclass(slots=True, frozen=True)
class ResolutionWindowValue:
    """Accuracy aggregate over one resolution window, as supplied upstream."""

    resolved: int | float
    rate: float
    risk_level: str | None = None


@dataclass(slots=True, frozen=True)
class TrustTierRule:
    tier: TrustTier
    min_resolved: int
    min_accuracy: float
    max_stake_points: int


@dataclass(slots=True, frozen=True)
class TrustTierAssignment:
    tier: TrustTier
    max_stake_points: int


@dataclass(slots=True, frozen=True)
class PredictionHistoryItem:
    """A single observer prediction as read from persistence."""

    resolved_outcome: PredictionOutcome | None
    is_correct: bool | None
    stake_points: int
    payout_points: int
    created_at: datetime | str | None
    resolved_at: datetime | str | None = None

    @property
    def is_pending(self) -> bool:
        return self.resolved_outcome is None

    @property
    def net_points(self) -> int:
        return self.payout_points - self.stake_points


@dataclass(slots=True, frozen=True)
class PredictionHistoryStats:
    total: int
    resolved: int
    pending: int
    correct: int
    accuracy_rate: float
    net_points: int
