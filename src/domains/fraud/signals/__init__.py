"""Fraud signal evaluators.

PRIMARY_SIGNALS run first, in order; CORROBORATING_SIGNALS run afterwards
against the factors the primary pass produced.
"""

from .amount import LargeAmountSignal, UnusualAmountSignal
from .base import CorroboratingSignal, FraudSignal, SignalContext
from .patterns import PrefixAnomalySignal, RoundNumberSignal
from .timing import RapidSuccessionSignal, UnusualTimeSignal

PRIMARY_SIGNALS: list[FraudSignal] = [
    UnusualAmountSignal(),
    UnusualTimeSignal(),
    RapidSuccessionSignal(),
    LargeAmountSignal(),
    RoundNumberSignal(),
]

CORROBORATING_SIGNALS: list[CorroboratingSignal] = [
    PrefixAnomalySignal(),
]

__all__ = [
    "CORROBORATING_SIGNALS",
    "PRIMARY_SIGNALS",
    "CorroboratingSignal",
    "FraudSignal",
    "SignalContext",
    # Amount
    "UnusualAmountSignal",
    "LargeAmountSignal",
    # Timing
    "UnusualTimeSignal",
    "RapidSuccessionSignal",
    # Patterns
    "RoundNumberSignal",
    "PrefixAnomalySignal",
]
