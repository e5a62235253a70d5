from __future__ import annotations

import math

import pytest

from prediction_engine.domain import ResolutionWindowValue, RiskLevel
from prediction_engine.risk import (
    DEFAULT_RESOLUTION_WINDOW_THRESHOLDS,
    build_resolution_window,
    classify_resolution_window_risk,
    normalize_resolution_window_thresholds,
    to_risk_level,
)


def test_missing_thresholds_fall_back_to_defaults():
    thresholds = normalize_resolution_window_thresholds(None)

    assert thresholds == DEFAULT_RESOLUTION_WINDOW_THRESHOLDS
    assert thresholds.accuracy_rate.critical_below == 0.45
    assert thresholds.accuracy_rate.watch_below == 0.6
    assert thresholds.min_resolved_predictions == 3


def test_valid_thresholds_are_kept_and_min_resolved_is_rounded():
    thresholds = normalize_resolution_window_thresholds(
        {"accuracyRate": {"criticalBelow": 0.3, "watchBelow": 0.5}, "minResolvedPredictions": 7.6}
    )

    assert thresholds.accuracy_rate.critical_below == 0.3
    assert thresholds.accuracy_rate.watch_below == 0.5
    assert thresholds.min_resolved_predictions == 8


def test_watch_threshold_below_resolved_critical_reverts_to_default():
    thresholds = normalize_resolution_window_thresholds(
        {"accuracyRate": {"criticalBelow": 0.5, "watchBelow": 0.4}}
    )

    assert thresholds.accuracy_rate.critical_below == 0.5
    assert thresholds.accuracy_rate.watch_below == 0.6


@pytest.mark.parametrize(
    "raw",
    [
        {"accuracyRate": {"criticalBelow": 1.5, "watchBelow": -1}, "minResolvedPredictions": 0},
        {"accuracyRate": {"criticalBelow": "0.2", "watchBelow": math.nan}, "minResolvedPredictions": 501},
        {"accuracyRate": "oops", "minResolvedPredictions": None},
        "not-a-mapping",
        42,
    ],
)
def test_invalid_thresholds_fall_back_field_by_field(raw):
    assert normalize_resolution_window_thresholds(raw) == DEFAULT_RESOLUTION_WINDOW_THRESHOLDS


def test_snake_case_thresholds_and_existing_objects_are_accepted():
    thresholds = normalize_resolution_window_thresholds(
        {"accuracy_rate": {"critical_below": 0.2, "watch_below": 0.7}, "min_resolved_predictions": 10}
    )

    assert normalize_resolution_window_thresholds(thresholds) == thresholds
    assert thresholds.min_resolved_predictions == 10


def test_explicit_backend_risk_level_wins():
    thresholds = normalize_resolution_window_thresholds(None)

    assert (
        classify_resolution_window_risk({"resolved": 10, "rate": 0.95, "riskLevel": "critical"}, thresholds)
        is RiskLevel.CRITICAL
    )
    assert (
        classify_resolution_window_risk(
            ResolutionWindowValue(resolved=0, rate=math.nan, risk_level="healthy"), thresholds
        )
        is RiskLevel.HEALTHY
    )


def test_small_sample_is_unknown_even_with_high_accuracy():
    thresholds = normalize_resolution_window_thresholds(
        {"accuracyRate": {"criticalBelow": 0.4, "watchBelow": 0.6}, "minResolvedPredictions": 3}
    )

    assert classify_resolution_window_risk({"resolved": 2, "rate": 1.0}, thresholds) is RiskLevel.UNKNOWN


@pytest.mark.parametrize(
    ("rate", "expected"),
    [
        (0.7, RiskLevel.HEALTHY),
        (0.6, RiskLevel.HEALTHY),
        (0.55, RiskLevel.WATCH),
        (0.45, RiskLevel.WATCH),
        (0.2, RiskLevel.CRITICAL),
        (math.nan, RiskLevel.UNKNOWN),
        ("0.9", RiskLevel.UNKNOWN),
    ],
)
def test_classifies_rate_against_thresholds(rate, expected):
    thresholds = normalize_resolution_window_thresholds(
        {"accuracyRate": {"criticalBelow": 0.45, "watchBelow": 0.6}, "minResolvedPredictions": 1}
    )

    assert classify_resolution_window_risk(ResolutionWindowValue(resolved=5, rate=rate), thresholds) is expected


def test_unrecognised_backend_risk_level_is_ignored():
    thresholds = normalize_resolution_window_thresholds(None)

    assert (
        classify_resolution_window_risk({"resolved": 5, "rate": 0.9, "riskLevel": "severe"}, thresholds)
        is RiskLevel.HEALTHY
    )
    assert to_risk_level("severe") is None
    assert to_risk_level("watch") is RiskLevel.WATCH


def test_build_resolution_window_derives_rate():
    window = build_resolution_window(resolved=8, correct=6)

    assert window.rate == 0.75
    assert build_resolution_window(resolved=0, correct=0).rate == 0.0
    assert build_resolution_window(resolved=4, correct=1, risk_level="watch").risk_level == "watch"
