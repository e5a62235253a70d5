"""Resolution-window accuracy risk classification.

An observer's accuracy over a fixed window is bucketed into ``healthy``,
``watch``, ``critical`` or ``unknown``. A risk level supplied by the backend
always wins; otherwise the window must reach a minimum number of resolved
predictions before its accuracy rate is trusted.
"""

from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from prediction_engine.domain import (
    AccuracyRateThresholds,
    ResolutionWindowThresholds,
    ResolutionWindowValue,
    RiskLevel,
)
from prediction_engine.numbers import as_number, round_half_up

DEFAULT_CRITICAL_BELOW = 0.45
DEFAULT_WATCH_BELOW = 0.6
DEFAULT_MIN_RESOLVED_PREDICTIONS = 3
MAX_MIN_RESOLVED_PREDICTIONS = 500

DEFAULT_RESOLUTION_WINDOW_THRESHOLDS = ResolutionWindowThresholds(
    accuracy_rate=AccuracyRateThresholds(
        critical_below=DEFAULT_CRITICAL_BELOW,
        watch_below=DEFAULT_WATCH_BELOW,
    ),
    min_resolved_predictions=DEFAULT_MIN_RESOLVED_PREDICTIONS,
)


def to_risk_level(value: Any) -> RiskLevel | None:
    if isinstance(value, RiskLevel):
        return value
    if not isinstance(value, str):
        return None
    try:
        return RiskLevel(value)
    except ValueError:
        return None


def _lookup(source: Any, *keys: str) -> Any:
    if isinstance(source, Mapping):
        for key in keys:
            if key in source:
                return source[key]
        return None
    for key in keys:
        if hasattr(source, key):
            return getattr(source, key)
    return None


def _threshold_number(name: str, value: Any, fallback: float, *, lower: float, upper: float) -> float:
    parsed = as_number(value)
    if parsed is None:
        return fallback
    if parsed < lower or parsed > upper:
        logger.debug(
            "Threshold {}={} outside [{}, {}]; using default {}", name, parsed, lower, upper, fallback
        )
        return fallback
    return parsed


def normalize_resolution_window_thresholds(raw: Any) -> ResolutionWindowThresholds:
    """Validate caller-supplied thresholds, falling back to defaults field by field.

    Accepts ``None``, a camelCase or snake_case mapping, or an existing
    ``ResolutionWindowThresholds``. The watch threshold is never allowed
    below the resolved critical threshold.
    """

    source = raw if raw is not None else {}
    accuracy_source = _lookup(source, "accuracyRate", "accuracy_rate")
    if accuracy_source is None:
        accuracy_source = {}

    critical_below = _threshold_number(
        "criticalBelow",
        _lookup(accuracy_source, "criticalBelow", "critical_below"),
        DEFAULT_CRITICAL_BELOW,
        lower=0,
        upper=1,
    )
    watch_below = _threshold_number(
        "watchBelow",
        _lookup(accuracy_source, "watchBelow", "watch_below"),
        DEFAULT_WATCH_BELOW,
        lower=critical_below,
        upper=1,
    )
    min_resolved = round_half_up(
        _threshold_number(
            "minResolvedPredictions",
            _lookup(source, "minResolvedPredictions", "min_resolved_predictions"),
            DEFAULT_MIN_RESOLVED_PREDICTIONS,
            lower=1,
            upper=MAX_MIN_RESOLVED_PREDICTIONS,
        )
    )

    return ResolutionWindowThresholds(
        accuracy_rate=AccuracyRateThresholds(critical_below=critical_below, watch_below=watch_below),
        min_resolved_predictions=min_resolved,
    )


def build_resolution_window(resolved: Any, correct: Any, risk_level: Any = None) -> ResolutionWindowValue:
    resolved_count = as_number(resolved) or 0
    correct_count = as_number(correct) or 0
    rate = correct_count / resolved_count if resolved_count > 0 else 0.0
    return ResolutionWindowValue(
        resolved=resolved_count,
        rate=rate,
        risk_level=risk_level if isinstance(risk_level, str) else None,
    )


def classify_resolution_window_risk(
    window: ResolutionWindowValue | Mapping[str, Any],
    thresholds: ResolutionWindowThresholds,
) -> RiskLevel:
    explicit = to_risk_level(_lookup(window, "riskLevel", "risk_level"))
    if explicit is not None:
        return explicit

    resolved = as_number(_lookup(window, "resolved"))
    if resolved is None or resolved < thresholds.min_resolved_predictions:
        return RiskLevel.UNKNOWN

    rate = as_number(_lookup(window, "rate"))
    if rate is None:
        return RiskLevel.UNKNOWN
    if rate < thresholds.accuracy_rate.critical_below:
        return RiskLevel.CRITICAL
    if rate < thresholds.accuracy_rate.watch_below:
        return RiskLevel.WATCH
    return RiskLevel.HEALTHY
