from __future__ import annotations

from enum import Enum
from typing import Callable

from prediction_engine.domain import StakeBounds
from prediction_engine.stake import normalize_stake_bounds

Translate = Callable[[str], str]


class PredictionErrorCode(str, Enum):
    STAKE_INVALID = "PREDICTION_STAKE_INVALID"
    STAKE_LIMIT_EXCEEDED = "PREDICTION_STAKE_LIMIT_EXCEEDED"
    DAILY_STAKE_CAP_REACHED = "PREDICTION_DAILY_STAKE_CAP_REACHED"
    DAILY_SUBMISSION_CAP_REACHED = "PREDICTION_DAILY_SUBMISSION_CAP_REACHED"
    NO_PENDING_PR = "PREDICTION_NO_PENDING_PR"
    RESOLVED = "PREDICTION_RESOLVED"


class PredictionError(Exception):
    """Raised at the service edge when a quoted prediction must be refused."""

    def __init__(self, code: PredictionErrorCode, message: str, status_code: int = 400):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


_TRANSLATION_KEYS: dict[PredictionErrorCode, str] = {
    PredictionErrorCode.DAILY_SUBMISSION_CAP_REACHED: "prediction.limitSubmissionCapReached",
    PredictionErrorCode.DAILY_STAKE_CAP_REACHED: "prediction.limitStakeCapReached",
    PredictionErrorCode.STAKE_LIMIT_EXCEEDED: "prediction.limitStakeCapReached",
    PredictionErrorCode.NO_PENDING_PR: "prediction.noPendingPr",
}


def _to_error_code(code: PredictionErrorCode | str | None) -> PredictionErrorCode | None:
    if isinstance(code, PredictionErrorCode) or code is None:
        return code
    try:
        return PredictionErrorCode(code)
    except ValueError:
        return None


def resolve_prediction_error_message(
    *,
    code: PredictionErrorCode | str | None,
    status: int | None,
    translate: Translate,
    fallback: str,
    stake_bounds: StakeBounds | None = None,
) -> str:
    """Map an API failure onto the message shown next to the prediction form."""

    if status in (401, 403):
        return translate("prediction.signInRequired")
    if status == 429:
        return translate("prediction.rateLimited")

    known = _to_error_code(code)
    if known is PredictionErrorCode.STAKE_INVALID:
        bounds = normalize_stake_bounds(
            stake_bounds.min_stake_points if stake_bounds else None,
            stake_bounds.max_stake_points if stake_bounds else None,
        )
        return (
            f"{translate('prediction.invalidStakeRange')} "
            f"{bounds.min_stake_points}-{bounds.max_stake_points} FIN."
        )
    if known in _TRANSLATION_KEYS:
        return translate(_TRANSLATION_KEYS[known])
    return fallback
