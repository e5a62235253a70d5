import json
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from prediction_engine.domain import TrustTier, TrustTierRule
from prediction_engine.risk import (
    DEFAULT_CRITICAL_BELOW,
    DEFAULT_MIN_RESOLVED_PREDICTIONS,
    DEFAULT_WATCH_BELOW,
    MAX_MIN_RESOLVED_PREDICTIONS,
)
from prediction_engine.tier import DEFAULT_TRUST_TIER_RULES, ENTRY_MAX_STAKE_POINTS


def _default_trust_tier_rules() -> list[dict[str, Any]]:
    return [
        {
            "tier": rule.tier.value,
            "min_resolved": rule.min_resolved,
            "min_accuracy": rule.min_accuracy,
            "max_stake_points": rule.max_stake_points,
        }
        for rule in DEFAULT_TRUST_TIER_RULES
    ]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PREDICTION_",
        extra="ignore",
    )

    min_stake_points: int = Field(
        default=5,
        description="Smallest stake an observer may place on a single market",
        ge=1,
    )
    max_stake_points: int = Field(
        default=500,
        description="Largest stake any observer may place on a single market",
        ge=1,
    )
    default_stake_points: int = Field(
        default=10,
        description="Stake used when the submitted value cannot be parsed",
        ge=1,
    )
    entry_max_stake_points: int = Field(
        default=ENTRY_MAX_STAKE_POINTS,
        description="Stake ceiling for observers that have not earned a higher trust tier",
        ge=1,
    )
    daily_stake_cap_points: int | None = Field(
        default=1000,
        description="Rolling 24h ceiling on points staked through new predictions (unset disables)",
        ge=0,
    )
    daily_submission_cap: int | None = Field(
        default=30,
        description="Rolling 24h ceiling on new prediction submissions (unset disables)",
        ge=0,
    )
    risk_critical_below: float = Field(
        default=DEFAULT_CRITICAL_BELOW,
        description="Accuracy rate under which a resolution window is critical",
        ge=0,
        le=1,
    )
    risk_watch_below: float = Field(
        default=DEFAULT_WATCH_BELOW,
        description="Accuracy rate under which a resolution window is on watch",
        ge=0,
        le=1,
    )
    risk_min_resolved_predictions: int = Field(
        default=DEFAULT_MIN_RESOLVED_PREDICTIONS,
        description="Resolved predictions required before a window is classified",
        ge=1,
        le=MAX_MIN_RESOLVED_PREDICTIONS,
    )
    trust_tier_rules: list[dict[str, Any]] | str = Field(
        default_factory=_default_trust_tier_rules,
        description="Ordered trust tier rules as a list or JSON array; first match wins",
    )

    @field_validator("trust_tier_rules", mode="before")
    @classmethod
    def _parse_trust_tier_rules(cls, value: Any) -> list[dict[str, Any]]:
        if value in (None, "", []):
            return _default_trust_tier_rules()
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("PREDICTION_TRUST_TIER_RULES must be a JSON array") from exc
        if not isinstance(value, (list, tuple)):
            raise ValueError("PREDICTION_TRUST_TIER_RULES must be provided as a list of rules")
        rules: list[dict[str, Any]] = []
        for item in value:
            if not isinstance(item, dict):
                raise ValueError("PREDICTION_TRUST_TIER_RULES entries must be objects")
            try:
                tier = TrustTier(item.get("tier"))
            except ValueError as exc:
                raise ValueError(f"Unknown trust tier in rules: {item.get('tier')!r}") from exc
            if tier is TrustTier.ENTRY:
                raise ValueError("The entry tier is the fallback and cannot carry a rule")
            rules.append(
                {
                    "tier": tier.value,
                    "min_resolved": int(item.get("min_resolved", 0)),
                    "min_accuracy": float(item.get("min_accuracy", 0.0)),
                    "max_stake_points": int(item.get("max_stake_points", 0)),
                }
            )
        return rules

    @model_validator(mode="after")
    def _check_ordering(self) -> "Settings":
        if self.max_stake_points < self.min_stake_points:
            raise ValueError("max_stake_points must be greater than or equal to min_stake_points")
        if self.risk_watch_below < self.risk_critical_below:
            raise ValueError("risk_watch_below must be greater than or equal to risk_critical_below")
        return self

    @property
    def trust_tier_rule_set(self) -> tuple[TrustTierRule, ...]:
        return tuple(
            TrustTierRule(
                tier=TrustTier(rule["tier"]),
                min_resolved=rule["min_resolved"],
                min_accuracy=rule["min_accuracy"],
                max_stake_points=rule["max_stake_points"],
            )
            for rule in self.trust_tier_rules
        )

    @property
    def resolution_window_thresholds(self) -> dict[str, Any]:
        return {
            "accuracyRate": {
                "criticalBelow": self.risk_critical_below,
                "watchBelow": self.risk_watch_below,
            },
            "minResolvedPredictions": self.risk_min_resolved_predictions,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
