"""Rule-based fraud scoring: two-pass signal evaluation, clamping and classification."""

import structlog

from src.shared.time_utils import to_local_time

from .catalog import PatternCatalog
from .config import FraudConfig, RiskThresholds, default_config
from .exceptions import ScoringError
from .models import (
    BusinessStatistics,
    CustomerStatistics,
    RiskFactor,
    RiskLevel,
    ScoringOutcome,
    Transaction,
)
from .signals import (
    CORROBORATING_SIGNALS,
    PRIMARY_SIGNALS,
    CorroboratingSignal,
    FraudSignal,
    SignalContext,
)

logger = structlog.get_logger()


def classify_risk(score: float, thresholds: RiskThresholds) -> tuple[RiskLevel, bool]:
    """Map a bounded score to (risk level, flagged).

    Lower bounds are inclusive. Inside the medium band only scores at or
    above `medium_flag` are flagged.
    """
    if score >= thresholds.critical:
        return RiskLevel.CRITICAL, True
    if score >= thresholds.high:
        return RiskLevel.HIGH, True
    if score >= thresholds.medium:
        return RiskLevel.MEDIUM, score >= thresholds.medium_flag
    return RiskLevel.LOW, False


class RulesEngine:
    """Evaluates a transaction against the fraud signals.

    Scoring:
    1. Primary pass: each primary signal with an active pattern may add a factor
    2. Corroborating pass: runs against the primary factors accumulated so far
    3. Raw score = sum of contributions, clamped to [0, 1]
    4. Risk level and flag from the clamped score
    """

    def __init__(
        self,
        config: FraudConfig | None = None,
        primary: list[FraudSignal] | None = None,
        corroborating: list[CorroboratingSignal] | None = None,
    ) -> None:
        self._config = config or default_config
        self._primary = list(primary if primary is not None else PRIMARY_SIGNALS)
        self._corroborating = list(
            corroborating if corroborating is not None else CORROBORATING_SIGNALS
        )

    def evaluate(
        self,
        transaction: Transaction,
        business: BusinessStatistics,
        customer: CustomerStatistics,
        catalog: PatternCatalog,
        config: FraudConfig | None = None,
    ) -> ScoringOutcome:
        cfg = config or self._config
        context = SignalContext(
            transaction=transaction,
            business=business,
            customer=customer,
            local_hour=to_local_time(transaction.trans_time, cfg.timing.local_timezone).hour,
            config=cfg,
        )

        factors: list[RiskFactor] = []
        for signal in self._primary:
            pattern = catalog.get(signal.signal_type)
            if pattern is None:
                continue
            factor = self._run(signal, transaction, context, pattern)
            if factor is not None:
                factors.append(factor)

        primary_factors = tuple(factors)
        for signal in self._corroborating:
            pattern = catalog.get(signal.signal_type)
            if pattern is None:
                continue
            factor = self._run(signal, transaction, context, pattern, primary_factors)
            if factor is not None:
                factors.append(factor)

        raw_score = sum(f.contribution for f in factors)
        score = min(max(raw_score, 0.0), 1.0)
        risk_level, flagged = classify_risk(score, cfg.risk)

        logger.info(
            "signals_evaluated",
            transaction_id=transaction.id,
            business_id=transaction.business_id,
            raw_score=raw_score,
            score=score,
            risk_level=risk_level.value,
            flagged=flagged,
            factors=[f.type.value for f in factors],
        )

        return ScoringOutcome(
            raw_score=raw_score,
            score=score,
            risk_level=risk_level,
            flagged=flagged,
            factors=factors,
        )

    @staticmethod
    def _run(signal: FraudSignal, transaction: Transaction, *args) -> RiskFactor | None:
        """Evaluate one signal. Any failure fails the whole assessment."""
        try:
            return signal.evaluate(*args)
        except Exception as exc:
            logger.exception(
                "signal_evaluation_error",
                signal=signal.signal_type.value,
                transaction_id=transaction.id,
            )
            raise ScoringError(
                f"Signal {signal.signal_type.value} failed for transaction {transaction.id}"
            ) from exc
