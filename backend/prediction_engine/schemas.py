from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from prediction_engine.domain import RiskLevel, TrustTier
from prediction_engine.errors import PredictionErrorCode

Points = int | float


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class StakeBoundsSchema(CamelModel):
    min_stake_points: int
    max_stake_points: int


class StakeResolutionSchema(CamelModel):
    stake_points: int
    adjusted: bool


class UsageLimitStateSchema(CamelModel):
    daily_stake_cap_reached: bool
    daily_submission_cap_reached: bool


class MarketSnapshotSchema(CamelModel):
    merge_stake_points: Points
    reject_stake_points: Points
    total_stake_points: int
    market_pool_points: Points | None = None
    merge_odds_ratio: float | None = None
    reject_odds_ratio: float | None = None
    merge_odds_percent: int | None = None
    reject_odds_percent: int | None = None
    merge_payout_multiplier: float | None = None
    reject_payout_multiplier: float | None = None
    potential_merge_payout: Points | None = None
    potential_reject_payout: Points | None = None
    daily_stake_cap_points: Points | None = None
    daily_stake_used_points: Points | None = None
    daily_stake_remaining_points: Points | None = None
    daily_submission_cap: Points | None = None
    daily_submissions_used: Points | None = None
    daily_submissions_remaining: Points | None = None
    observer_net_points: Points | None = None
    trust_tier: TrustTier | None = None
    has_market_summary: bool
    has_potential_payout: bool
    has_observer_market_profile: bool
    has_usage_caps: bool


class AccuracyRateThresholdsSchema(CamelModel):
    critical_below: float
    watch_below: float


class ResolutionWindowThresholdsSchema(CamelModel):
    accuracy_rate: AccuracyRateThresholdsSchema
    min_resolved_predictions: int


class ResolutionWindowRiskSchema(CamelModel):
    resolved: Points
    rate: float
    risk_level: RiskLevel


class PredictionHistoryStatsSchema(CamelModel):
    total: int
    resolved: int
    pending: int
    correct: int
    accuracy_rate: float
    net_points: int


class PredictionQuoteSchema(CamelModel):
    bounds: StakeBoundsSchema
    resolution: StakeResolutionSchema
    usage: UsageLimitStateSchema
    snapshot: MarketSnapshotSchema
    trust_tier: TrustTier
    error_code: PredictionErrorCode | None = None
    accepted: bool
