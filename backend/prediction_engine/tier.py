"""Trust tier validation, assignment, and labelling."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from prediction_engine.domain import TrustTier, TrustTierAssignment, TrustTierRule
from prediction_engine.numbers import as_number

Translate = Callable[[str], str]

ENTRY_MAX_STAKE_POINTS = 120

DEFAULT_TRUST_TIER_RULES: tuple[TrustTierRule, ...] = (
    TrustTierRule(tier=TrustTier.ELITE, min_resolved=80, min_accuracy=0.66, max_stake_points=500),
    TrustTierRule(tier=TrustTier.TRUSTED, min_resolved=35, min_accuracy=0.58, max_stake_points=320),
    TrustTierRule(tier=TrustTier.REGULAR, min_resolved=12, min_accuracy=0.5, max_stake_points=220),
)


def to_trust_tier(value: Any) -> TrustTier | None:
    """Return the matching tier for a recognised label, otherwise None."""
    if isinstance(value, TrustTier):
        return value
    if not isinstance(value, str):
        return None
    try:
        return TrustTier(value)
    except ValueError:
        return None


def is_trust_tier(value: Any) -> bool:
    return to_trust_tier(value) is not None


def resolve_trust_tier(
    resolved_count: Any,
    accuracy_rate: Any,
    *,
    rules: Iterable[TrustTierRule] | None = None,
    entry_max_stake_points: int = ENTRY_MAX_STAKE_POINTS,
) -> TrustTierAssignment:
    """Assign the first tier whose sample size and accuracy requirements are met.

    Rules are evaluated in the order given, so callers list the most
    demanding tier first. Observers that satisfy none land in the entry tier.
    """

    resolved = as_number(resolved_count)
    accuracy = as_number(accuracy_rate)
    if resolved is not None and accuracy is not None:
        for rule in rules if rules is not None else DEFAULT_TRUST_TIER_RULES:
            if resolved >= rule.min_resolved and accuracy >= rule.min_accuracy:
                return TrustTierAssignment(tier=rule.tier, max_stake_points=rule.max_stake_points)
    return TrustTierAssignment(tier=TrustTier.ENTRY, max_stake_points=entry_max_stake_points)


def format_trust_tier(tier: TrustTier | str | None, translate: Translate) -> str:
    normalized = to_trust_tier(tier)
    if normalized is None:
        return "-"

    translation_key = f"prediction.trustTier.{normalized.value}"
    translated = translate(translation_key)
    if translated != translation_key:
        return translated
    return normalized.value.capitalize()
