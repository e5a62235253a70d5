from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from prediction_engine.core.config import Settings
from prediction_engine.domain import PredictionHistoryItem, PredictionOutcome


@pytest.fixture
def echo_translate():
    """Translator that returns the key untouched, like a missing locale entry."""

    return lambda key: key


@pytest.fixture
def prediction_history() -> list[PredictionHistoryItem]:
    return [
        PredictionHistoryItem(
            resolved_outcome=None,
            is_correct=None,
            stake_points=10,
            payout_points=0,
            created_at="2026-02-25T10:00:00.000Z",
            resolved_at=None,
        ),
        PredictionHistoryItem(
            resolved_outcome=PredictionOutcome.MERGE,
            is_correct=True,
            stake_points=12,
            payout_points=20,
            created_at="2026-02-25T09:00:00.000Z",
            resolved_at="2026-02-25T09:20:00.000Z",
        ),
        PredictionHistoryItem(
            resolved_outcome=PredictionOutcome.REJECT,
            is_correct=False,
            stake_points=8,
            payout_points=0,
            created_at="2026-02-25T08:00:00.000Z",
            resolved_at="2026-02-25T08:30:00.000Z",
        ),
    ]


@pytest.fixture
def test_settings(monkeypatch) -> Settings:
    settings = Settings(
        _env_file=None,
        min_stake_points=5,
        max_stake_points=500,
        default_stake_points=10,
        entry_max_stake_points=120,
        daily_stake_cap_points=1000,
        daily_submission_cap=30,
    )
    monkeypatch.setattr("prediction_engine.core.config.get_settings", lambda: settings)
    monkeypatch.setattr("prediction_engine.services.prediction_service.get_settings", lambda: settings)
    return settings
