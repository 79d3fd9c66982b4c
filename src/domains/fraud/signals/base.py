"""Abstract base classes for fraud signal evaluators."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from ..config import FraudConfig
from ..models import (
    BusinessStatistics,
    CustomerStatistics,
    FraudPattern,
    RiskFactor,
    Severity,
    SignalType,
    Transaction,
)


@dataclass(frozen=True)
class SignalContext:
    """Everything an evaluator may look at. Shared read-only across signals."""

    transaction: Transaction
    business: BusinessStatistics
    customer: CustomerStatistics
    local_hour: int
    config: FraudConfig


class FraudSignal(ABC):
    """Base class for independent signals.

    Evaluators are pure: they read the context and the pattern, and return a
    RiskFactor when they fire or None when they do not.
    """

    signal_type: SignalType

    @abstractmethod
    def evaluate(self, context: SignalContext, pattern: FraudPattern) -> RiskFactor | None:
        ...

    def _fired(
        self,
        contribution: float,
        description: str,
        severity: Severity,
        details: dict | None = None,
    ) -> RiskFactor:
        return RiskFactor(
            type=self.signal_type,
            description=description,
            severity=severity,
            contribution=contribution,
            details=details or {},
        )


class CorroboratingSignal(FraudSignal):
    """A signal that may only fire alongside factors already accumulated."""

    @abstractmethod
    def evaluate(
        self,
        context: SignalContext,
        pattern: FraudPattern,
        fired: Sequence[RiskFactor] = (),
    ) -> RiskFactor | None:
        ...
