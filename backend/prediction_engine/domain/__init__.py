"""Domain models shared by the market, stake, risk, and history helpers."""

from .models import (
    AccuracyRateThresholds,
    MarketSnapshot,
    PredictionHistoryItem,
    PredictionHistoryStats,
    PredictionOutcome,
    ResolutionWindowThresholds,
    ResolutionWindowValue,
    RiskLevel,
    StakeBounds,
    StakeResolution,
    TrustTier,
    TrustTierAssignment,
    TrustTierRule,
    UsageLimitState,
)

__all__ = [
    "AccuracyRateThresholds",
    "MarketSnapshot",
    "PredictionHistoryItem",
    "PredictionHistoryStats",
    "PredictionOutcome",
    "ResolutionWindowThresholds",
    "ResolutionWindowValue",
    "RiskLevel",
    "StakeBounds",
    "StakeResolution",
    "TrustTier",
    "TrustTierAssignment",
    "TrustTierRule",
    "UsageLimitState",
]
