from __future__ import annotations

from datetime import datetime, timezone

from prediction_engine.domain import PredictionHistoryItem, PredictionHistoryStats, PredictionOutcome
from prediction_engine.history import (
    derive_prediction_history_stats,
    filter_and_sort_prediction_history,
    format_prediction_outcome,
)


def test_history_stats_compute_counts_accuracy_and_net_points(prediction_history):
    stats = derive_prediction_history_stats(prediction_history)

    assert stats == PredictionHistoryStats(
        total=3,
        resolved=2,
        pending=1,
        correct=1,
        accuracy_rate=0.5,
        net_points=-10,
    )


def test_history_stats_for_empty_history():
    stats = derive_prediction_history_stats([])

    assert stats.total == 0
    assert stats.accuracy_rate == 0.0


def test_all_view_lists_pending_first_then_newest(prediction_history):
    result = filter_and_sort_prediction_history(list(reversed(prediction_history)), "all")

    assert [item.resolved_outcome for item in result] == [
        None,
        PredictionOutcome.MERGE,
        PredictionOutcome.REJECT,
    ]


def test_filters_resolved_and_pending_views(prediction_history):
    resolved = filter_and_sort_prediction_history(prediction_history, "resolved")
    pending = filter_and_sort_prediction_history(prediction_history, "pending")

    assert len(resolved) == 2
    assert all(item.resolved_outcome is not None for item in resolved)
    assert len(pending) == 1
    assert pending[0].resolved_outcome is None


def test_net_and_stake_sort_modes(prediction_history):
    by_net = filter_and_sort_prediction_history(prediction_history, "all", "net_desc")
    by_stake = filter_and_sort_prediction_history(prediction_history, "all", "stake_desc")

    assert [item.net_points for item in by_net] == [8, -8, -10]
    assert [item.stake_points for item in by_stake] == [12, 10, 8]


def test_resolved_items_sort_by_latest_activity():
    older_created_recent_resolution = PredictionHistoryItem(
        resolved_outcome=PredictionOutcome.MERGE,
        is_correct=True,
        stake_points=5,
        payout_points=9,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        resolved_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )
    newer_created = PredictionHistoryItem(
        resolved_outcome=PredictionOutcome.REJECT,
        is_correct=False,
        stake_points=5,
        payout_points=0,
        created_at="2026-02-01T00:00:00Z",
        resolved_at="not a timestamp",
    )

    result = filter_and_sort_prediction_history([newer_created, older_created_recent_resolution], "resolved")

    assert result == [older_created_recent_resolution, newer_created]


def test_unknown_filter_and_sort_fall_back_to_defaults(prediction_history):
    assert filter_and_sort_prediction_history(prediction_history, "bogus", "bogus") == (
        filter_and_sort_prediction_history(prediction_history)
    )


def test_format_prediction_outcome_uses_translations():
    labels = {
        "observerProfile.predictionOutcomeMerge": "Merge",
        "observerProfile.predictionOutcomeReject": "Reject",
    }
    translate = lambda key: labels.get(key, key)

    assert format_prediction_outcome("merge", translate) == "Merge"
    assert format_prediction_outcome(PredictionOutcome.REJECT, translate) == "Reject"
    assert format_prediction_outcome("draw", translate) == "-"
