"""Single-line summaries of a market snapshot for compact widgets."""

from __future__ import annotations

from typing import Callable

from prediction_engine.domain import MarketSnapshot

Translate = Callable[[str], str]


def _multiplier(value: float | None) -> str:
    return f"{value or 0:.2f}"


def format_market_pool_line(translate: Translate, snapshot: MarketSnapshot) -> str:
    return (
        f"{translate('prediction.marketPool')} {snapshot.market_pool_points or 0} FIN"
        f" | {translate('pr.merge')} {snapshot.merge_stake_points}"
        f" | {translate('pr.reject')} {snapshot.reject_stake_points}"
    )


def format_odds_line(translate: Translate, snapshot: MarketSnapshot) -> str:
    return (
        f"{translate('prediction.oddsLabel')}"
        f" {translate('pr.merge')} {snapshot.merge_odds_percent or 0}%"
        f" (x{_multiplier(snapshot.merge_payout_multiplier)})"
        f" | {translate('pr.reject')} {snapshot.reject_odds_percent or 0}%"
        f" (x{_multiplier(snapshot.reject_payout_multiplier)})"
    )


def format_payout_line(translate: Translate, snapshot: MarketSnapshot) -> str:
    return (
        f"{translate('prediction.potentialPayoutLabel')}"
        f" {translate('pr.merge')} {snapshot.potential_merge_payout or 0} FIN"
        f" | {translate('pr.reject')} {snapshot.potential_reject_payout or 0} FIN"
    )


def format_usage_line(
    translate: Translate,
    snapshot: MarketSnapshot,
    *,
    include_remaining: bool,
    unknown_cap_label: str,
) -> str:
    def _or_unknown(value: int | float | None) -> object:
        return unknown_cap_label if value is None else value

    stake_part = (
        f"{translate('prediction.dailyStakeLabel')}"
        f" {snapshot.daily_stake_used_points or 0}/{_or_unknown(snapshot.daily_stake_cap_points)}"
    )
    submissions_part = (
        f"{translate('prediction.dailySubmissionsLabel')}"
        f" {snapshot.daily_submissions_used or 0}/{_or_unknown(snapshot.daily_submission_cap)}"
    )
    if include_remaining:
        remaining_label = translate("observerProfile.remaining")
        stake_part += f" ({remaining_label} {_or_unknown(snapshot.daily_stake_remaining_points)})"
        submissions_part += f" ({remaining_label} {_or_unknown(snapshot.daily_submissions_remaining)})"
    return f"{stake_part} | {submissions_part}"


def format_net_points_line(translate: Translate, observer_net_points: int | float | None) -> str:
    return f"{translate('prediction.netPoints')} {observer_net_points or 0} FIN"
