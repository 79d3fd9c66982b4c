"""Fraud detection configuration with sensible defaults."""

import os
from dataclasses import dataclass, field


@dataclass
class AmountThresholds:
    zscore_threshold: float = 3.0
    zscore_saturation: float = 5.0
    zscore_high_severity: float = 5.0
    large_amount_min: float = 50_000.0
    returning_customer_factor: float = 0.7


@dataclass
class TimingThresholds:
    local_timezone: str = "Africa/Nairobi"
    unusual_hours: tuple[int, ...] = (23, 0, 1, 2, 3, 4, 5)
    velocity_window_minutes: int = 5
    velocity_min_count: int = 3
    velocity_high_count: int = 5
    velocity_max_multiplier: float = 2.0


@dataclass
class PatternThresholds:
    round_numbers: tuple[int, ...] = (1_000, 5_000, 10_000, 50_000, 100_000)
    round_repeat_min: int = 2
    suspicious_prefixes: tuple[str, ...] = ("0700", "0701", "+2547", "+2540")
    prefix_weight_factor: float = 0.5


@dataclass
class RiskThresholds:
    critical: float = 0.75
    high: float = 0.5
    medium: float = 0.3
    medium_flag: float = 0.4


@dataclass
class EnsembleWeights:
    enabled: bool = True
    rule_weight: float = 0.6
    ml_weight: float = 0.4


@dataclass
class HistorySettings:
    query_timeout_seconds: float = 5.0


@dataclass
class FraudConfig:
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    timing: TimingThresholds = field(default_factory=TimingThresholds)
    patterns: PatternThresholds = field(default_factory=PatternThresholds)
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    ensemble: EnsembleWeights = field(default_factory=EnsembleWeights)
    history: HistorySettings = field(default_factory=HistorySettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Amount overrides
        if v := os.getenv("FRAUD_ZSCORE_THRESHOLD"):
            config.amount.zscore_threshold = float(v)
        if v := os.getenv("FRAUD_LARGE_AMOUNT_MIN"):
            config.amount.large_amount_min = float(v)

        # Timing overrides
        if v := os.getenv("FRAUD_LOCAL_TIMEZONE"):
            config.timing.local_timezone = v
        if v := os.getenv("FRAUD_VELOCITY_WINDOW_MINUTES"):
            config.timing.velocity_window_minutes = int(v)
        if v := os.getenv("FRAUD_VELOCITY_MIN_COUNT"):
            config.timing.velocity_min_count = int(v)

        # Pattern overrides
        if v := os.getenv("FRAUD_SUSPICIOUS_PREFIXES"):
            config.patterns.suspicious_prefixes = tuple(
                p.strip() for p in v.split(",") if p.strip()
            )

        # Ensemble overrides
        if v := os.getenv("FRAUD_ENSEMBLE_ENABLED"):
            config.ensemble.enabled = v.lower() in ("1", "true", "yes")
        if v := os.getenv("FRAUD_ENSEMBLE_RULE_WEIGHT"):
            config.ensemble.rule_weight = float(v)
        if v := os.getenv("FRAUD_ENSEMBLE_ML_WEIGHT"):
            config.ensemble.ml_weight = float(v)

        if v := os.getenv("FRAUD_HISTORY_QUERY_TIMEOUT_SECONDS"):
            config.history.query_timeout_seconds = float(v)

        return config


# Module-level default instance
default_config = FraudConfig()
