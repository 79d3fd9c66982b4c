"""Amount-based fraud signals."""

from ..models import FraudPattern, RiskFactor, Severity, SignalType
from .base import FraudSignal, SignalContext


class UnusualAmountSignal(FraudSignal):
    """Fires when the amount is more than N standard deviations from the business mean."""

    signal_type = SignalType.UNUSUAL_AMOUNT

    def evaluate(self, context: SignalContext, pattern: FraudPattern) -> RiskFactor | None:
        business = context.business
        # No baseline on a cold start or a zero-variance history
        if not business.has_baseline:
            return None

        thresholds = context.config.amount
        amount = context.transaction.amount_float
        zscore = abs(amount - business.avg_amount) / business.stddev_amount

        if zscore <= thresholds.zscore_threshold:
            return None

        contribution = pattern.weight * min(zscore / thresholds.zscore_saturation, 1.0)
        severity = Severity.HIGH if zscore > thresholds.zscore_high_severity else Severity.MEDIUM

        return self._fired(
            contribution=contribution,
            description="Transaction amount significantly deviates from average",
            severity=severity,
            details={
                "amount": amount,
                "avg_amount": business.avg_amount,
                "stddev_amount": business.stddev_amount,
                "z_score": round(zscore, 2),
            },
        )


class LargeAmountSignal(FraudSignal):
    """Fires for amounts above the large-amount threshold, heavier for first-time customers."""

    signal_type = SignalType.LARGE_AMOUNT

    def evaluate(self, context: SignalContext, pattern: FraudPattern) -> RiskFactor | None:
        thresholds = context.config.amount
        amount = context.transaction.amount_float
        if amount <= thresholds.large_amount_min:
            return None

        is_new_customer = context.customer.prior_transactions == 0
        if is_new_customer:
            contribution = pattern.weight
            description = "First-time customer with large transaction"
        else:
            contribution = pattern.weight * thresholds.returning_customer_factor
            description = "Large transaction amount detected"

        return self._fired(
            contribution=contribution,
            description=description,
            severity=Severity.HIGH,
            details={
                "amount": amount,
                "is_first_transaction": is_new_customer,
                "threshold": thresholds.large_amount_min,
            },
        )
