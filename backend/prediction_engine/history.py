from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Sequence, TypeVar

from dateutil import parser as date_parser
from loguru import logger

from prediction_engine.domain import PredictionHistoryItem, PredictionHistoryStats, PredictionOutcome

Translate = Callable[[str], str]
HistoryItemT = TypeVar("HistoryItemT", bound=PredictionHistoryItem)

HISTORY_FILTERS = ("all", "resolved", "pending")
HISTORY_SORTS = ("recent", "net_desc", "stake_desc")

_OUTCOME_TRANSLATION_KEYS = {
    PredictionOutcome.MERGE: "observerProfile.predictionOutcomeMerge",
    PredictionOutcome.REJECT: "observerProfile.predictionOutcomeReject",
}


def to_prediction_outcome(value: Any) -> PredictionOutcome | None:
    if isinstance(value, PredictionOutcome):
        return value
    if not isinstance(value, str):
        return None
    try:
        return PredictionOutcome(value)
    except ValueError:
        return None


def format_prediction_outcome(outcome: PredictionOutcome | str, translate: Translate) -> str:
    normalized = to_prediction_outcome(outcome)
    if normalized is None:
        return "-"
    return translate(_OUTCOME_TRANSLATION_KEYS[normalized])


def _timestamp(value: datetime | str | None) -> float:
    if not value:
        return 0.0
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, TypeError, OverflowError):
            return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def _activity_timestamp(item: PredictionHistoryItem) -> float:
    if item.is_pending:
        return _timestamp(item.created_at)
    return max(_timestamp(item.resolved_at), _timestamp(item.created_at))


def derive_prediction_history_stats(items: Iterable[PredictionHistoryItem]) -> PredictionHistoryStats:
    total = 0
    resolved = 0
    correct = 0
    net_points = 0

    for item in items:
        total += 1
        if not item.is_pending:
            resolved += 1
            if item.is_correct is True:
                correct += 1
        net_points += item.net_points

    return PredictionHistoryStats(
        total=total,
        resolved=resolved,
        pending=max(0, total - resolved),
        correct=correct,
        accuracy_rate=correct / resolved if resolved > 0 else 0.0,
        net_points=net_points,
    )


def filter_and_sort_prediction_history(
    items: Sequence[HistoryItemT],
    history_filter: str = "all",
    sort: str = "recent",
) -> list[HistoryItemT]:
    """Filter a prediction history view and order it for display.

    The ``recent`` order lists pending predictions first in the ``all`` view,
    then newest activity first. ``net_desc`` and ``stake_desc`` order by net
    points and stake size. Ties keep their input order.
    """

    if history_filter not in HISTORY_FILTERS:
        logger.debug("Unknown prediction history filter {}; showing all", history_filter)
        history_filter = "all"
    if sort not in HISTORY_SORTS:
        logger.debug("Unknown prediction history sort {}; using recent", sort)
        sort = "recent"

    if history_filter == "resolved":
        filtered = [item for item in items if not item.is_pending]
    elif history_filter == "pending":
        filtered = [item for item in items if item.is_pending]
    else:
        filtered = list(items)

    if sort == "net_desc":
        return sorted(filtered, key=lambda item: item.net_points, reverse=True)
    if sort == "stake_desc":
        return sorted(filtered, key=lambda item: item.stake_points, reverse=True)

    def recent_key(item: HistoryItemT) -> tuple[int, float]:
        pending_rank = 0 if history_filter == "all" and item.is_pending else 1
        return (pending_rank, -_activity_timestamp(item))

    return sorted(filtered, key=recent_key)
