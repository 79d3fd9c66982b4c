"""Repetition and counterparty pattern signals."""

from collections.abc import Sequence
from decimal import Decimal

from ..models import FraudPattern, RiskFactor, Severity, SignalType
from .base import CorroboratingSignal, FraudSignal, SignalContext


class RoundNumberSignal(FraudSignal):
    """Fires when a round amount repeats a customer's earlier round-amount payments."""

    signal_type = SignalType.ROUND_NUMBER

    def evaluate(self, context: SignalContext, pattern: FraudPattern) -> RiskFactor | None:
        thresholds = context.config.patterns
        amount = context.transaction.amount
        if not any(amount == Decimal(n) for n in thresholds.round_numbers):
            return None

        prior_round = context.customer.round_number_transactions
        if prior_round < thresholds.round_repeat_min:
            return None

        return self._fired(
            contribution=pattern.weight,
            description="Multiple round number transactions",
            severity=Severity.LOW,
            details={
                "amount": float(amount),
                "round_transaction_count": prior_round,
            },
        )


class PrefixAnomalySignal(CorroboratingSignal):
    """Fires for a suspicious phone prefix, but only to corroborate other factors."""

    signal_type = SignalType.PREFIX_ANOMALY

    def evaluate(
        self,
        context: SignalContext,
        pattern: FraudPattern,
        fired: Sequence[RiskFactor] = (),
    ) -> RiskFactor | None:
        if not fired:
            return None

        thresholds = context.config.patterns
        msisdn = context.transaction.msisdn
        prefix = next((p for p in thresholds.suspicious_prefixes if msisdn.startswith(p)), None)
        if prefix is None:
            return None

        return self._fired(
            contribution=pattern.weight * thresholds.prefix_weight_factor,
            description="Unusual phone prefix detected",
            severity=Severity.LOW,
            details={
                "phone": msisdn,
                "prefix": prefix,
                "corroborates": [f.type.value for f in fired],
            },
        )
