"""Time-of-day and velocity fraud signals."""

from ..models import FraudPattern, RiskFactor, Severity, SignalType
from .base import FraudSignal, SignalContext


class UnusualTimeSignal(FraudSignal):
    """Fires for transactions made during off-hours (local time)."""

    signal_type = SignalType.UNUSUAL_TIME

    def evaluate(self, context: SignalContext, pattern: FraudPattern) -> RiskFactor | None:
        hour = context.local_hour
        if hour not in context.config.timing.unusual_hours:
            return None

        return self._fired(
            contribution=pattern.weight,
            description="Transaction at unusual hours",
            severity=Severity.LOW,
            details={
                "hour": hour,
                "time": context.transaction.trans_time.isoformat(),
            },
        )


class RapidSuccessionSignal(FraudSignal):
    """Fires when a customer pays the same business several times in the trailing window."""

    signal_type = SignalType.RAPID_SUCCESSION

    def evaluate(self, context: SignalContext, pattern: FraudPattern) -> RiskFactor | None:
        timing = context.config.timing
        count = context.customer.velocity_count
        if count < timing.velocity_min_count:
            return None

        multiplier = min(count / timing.velocity_min_count, timing.velocity_max_multiplier)
        severity = Severity.HIGH if count >= timing.velocity_high_count else Severity.MEDIUM

        return self._fired(
            contribution=pattern.weight * multiplier,
            description="Multiple transactions in short time window",
            severity=severity,
            details={
                "transaction_count": count,
                "time_window": f"{timing.velocity_window_minutes} minutes",
            },
        )
