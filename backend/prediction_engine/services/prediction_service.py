"""Evaluate a "place a prediction" request against bounds, caps, and the market."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from loguru import logger

from prediction_engine.core.config import Settings, get_settings
from prediction_engine.domain import (
    MarketSnapshot,
    ResolutionWindowValue,
    RiskLevel,
    StakeBounds,
    StakeResolution,
    TrustTier,
    UsageLimitState,
)
from prediction_engine.errors import PredictionError, PredictionErrorCode
from prediction_engine.market import build_market_snapshot, snapshot_fields_from_mapping
from prediction_engine.numbers import parse_number
from prediction_engine.risk import (
    classify_resolution_window_risk,
    normalize_resolution_window_thresholds,
)
from prediction_engine.stake import (
    derive_usage_limit_state,
    is_stake_within_bounds,
    normalize_stake_bounds,
    resolve_stake_input,
)
from prediction_engine.tier import resolve_trust_tier


@dataclass(slots=True)
class PredictionQuoteRequest:
    raw_stake: Any = None
    has_existing_prediction: bool = False
    has_pending_pull_request: bool = True
    already_resolved: bool = False
    strict_stake: bool = False
    resolved_predictions: Any = None
    accuracy_rate: Any = None
    daily_stake_used_points: Any = None
    daily_submissions_used: Any = None
    observer_net_points: Any = None
    market: Mapping[str, Any] | None = None


@dataclass(slots=True, frozen=True)
class PredictionQuote:
    bounds: StakeBounds
    resolution: StakeResolution
    usage: UsageLimitState
    snapshot: MarketSnapshot
    trust_tier: TrustTier
    platform_bounds: StakeBounds
    error_code: PredictionErrorCode | None = None

    @property
    def accepted(self) -> bool:
        return self.error_code is None


class PredictionDesk:
    """Stateless facade composing stake bounds, usage limits, and market snapshots."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    def stake_bounds(self, *, max_stake_points: Any = None) -> StakeBounds:
        return normalize_stake_bounds(
            self._settings.min_stake_points,
            max_stake_points,
            default_min_stake_points=self._settings.min_stake_points,
            default_max_stake_points=self._settings.max_stake_points,
        )

    def quote(self, request: PredictionQuoteRequest) -> PredictionQuote:
        settings = self._settings
        platform_bounds = self.stake_bounds()
        assignment = resolve_trust_tier(
            request.resolved_predictions,
            request.accuracy_rate,
            rules=settings.trust_tier_rule_set,
            entry_max_stake_points=settings.entry_max_stake_points,
        )
        bounds = self.stake_bounds(
            max_stake_points=min(platform_bounds.max_stake_points, assignment.max_stake_points)
        )
        resolution = resolve_stake_input(
            request.raw_stake,
            bounds,
            fallback_stake_points=settings.default_stake_points,
        )
        # Caps and counters carried by the market record win over desk defaults.
        fields = snapshot_fields_from_mapping(request.market)
        fields.setdefault("stake_points_for_potential", resolution.stake_points)
        fields.setdefault("daily_stake_cap_points", settings.daily_stake_cap_points)
        fields.setdefault("daily_stake_used_points", request.daily_stake_used_points)
        fields.setdefault("daily_submission_cap", settings.daily_submission_cap)
        fields.setdefault("daily_submissions_used", request.daily_submissions_used)
        fields.setdefault("observer_net_points", request.observer_net_points)
        fields.setdefault("trust_tier", assignment.tier)
        snapshot = build_market_snapshot(**fields)

        usage = derive_usage_limit_state(
            has_existing_prediction=request.has_existing_prediction,
            stake_points=resolution.stake_points,
            daily_stake_cap_points=snapshot.daily_stake_cap_points,
            daily_stake_used_points=snapshot.daily_stake_used_points,
            daily_submission_cap=snapshot.daily_submission_cap,
            daily_submissions_used=snapshot.daily_submissions_used,
        )

        error_code = self._blocking_error(request, platform_bounds, bounds, usage)
        if error_code is None:
            logger.debug(
                "Prediction quote accepted: stake={} adjusted={} tier={}",
                resolution.stake_points,
                resolution.adjusted,
                assignment.tier.value,
            )
        else:
            logger.info(
                "Prediction quote blocked with {} (stake={}, tier={})",
                error_code.value,
                resolution.stake_points,
                assignment.tier.value,
            )

        return PredictionQuote(
            bounds=bounds,
            resolution=resolution,
            usage=usage,
            snapshot=snapshot,
            trust_tier=assignment.tier,
            platform_bounds=platform_bounds,
            error_code=error_code,
        )

    def classify_window(self, window: ResolutionWindowValue | Mapping[str, Any]) -> RiskLevel:
        thresholds = normalize_resolution_window_thresholds(self._settings.resolution_window_thresholds)
        return classify_resolution_window_risk(window, thresholds)

    @staticmethod
    def _blocking_error(
        request: PredictionQuoteRequest,
        platform_bounds: StakeBounds,
        tier_bounds: StakeBounds,
        usage: UsageLimitState,
    ) -> PredictionErrorCode | None:
        submitted = parse_number(request.raw_stake) if request.strict_stake else None
        if request.strict_stake and not is_stake_within_bounds(submitted, platform_bounds):
            return PredictionErrorCode.STAKE_INVALID
        if not request.has_pending_pull_request:
            return PredictionErrorCode.NO_PENDING_PR
        if request.already_resolved:
            return PredictionErrorCode.RESOLVED
        if request.strict_stake and not is_stake_within_bounds(submitted, tier_bounds):
            return PredictionErrorCode.STAKE_LIMIT_EXCEEDED
        if usage.daily_submission_cap_reached:
            return PredictionErrorCode.DAILY_SUBMISSION_CAP_REACHED
        if usage.daily_stake_cap_reached:
            return PredictionErrorCode.DAILY_STAKE_CAP_REACHED
        return None


_ERROR_STATUS: dict[PredictionErrorCode, int] = {
    PredictionErrorCode.NO_PENDING_PR: 409,
    PredictionErrorCode.RESOLVED: 409,
    PredictionErrorCode.DAILY_STAKE_CAP_REACHED: 429,
    PredictionErrorCode.DAILY_SUBMISSION_CAP_REACHED: 429,
}


def require_accepted(quote: PredictionQuote) -> PredictionQuote:
    """Return the quote unchanged, or raise ``PredictionError`` when it is blocked."""

    if quote.error_code is None:
        return quote
    messages = {
        PredictionErrorCode.STAKE_INVALID: (
            f"Stake points must be an integer between {quote.platform_bounds.min_stake_points} "
            f"and {quote.platform_bounds.max_stake_points}."
        ),
        PredictionErrorCode.STAKE_LIMIT_EXCEEDED: (
            f"Stake exceeds the {quote.trust_tier.value} tier limit "
            f"({quote.bounds.max_stake_points})."
        ),
        PredictionErrorCode.DAILY_SUBMISSION_CAP_REACHED: (
            f"Daily prediction limit reached ({quote.snapshot.daily_submission_cap})."
        ),
        PredictionErrorCode.DAILY_STAKE_CAP_REACHED: (
            f"Daily stake limit reached ({quote.snapshot.daily_stake_cap_points})."
        ),
        PredictionErrorCode.NO_PENDING_PR: "No pending pull request to predict on.",
        PredictionErrorCode.RESOLVED: "Prediction already resolved for this pull request.",
    }
    raise PredictionError(
        quote.error_code,
        messages[quote.error_code],
        status_code=_ERROR_STATUS.get(quote.error_code, 400),
    )
