"""Unit tests for round-number and phone-prefix signals."""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import (
    BusinessStatistics,
    CustomerStatistics,
    FraudPattern,
    RiskFactor,
    Severity,
    SignalType,
    Transaction,
)
from src.domains.fraud.signals.base import SignalContext
from src.domains.fraud.signals.patterns import PrefixAnomalySignal, RoundNumberSignal

CONFIG = FraudConfig()
NAIROBI = ZoneInfo("Africa/Nairobi")

PRIOR_FACTOR = RiskFactor(
    type=SignalType.UNUSUAL_TIME,
    description="Transaction at unusual hours",
    severity=Severity.LOW,
    contribution=0.15,
)


def _context(
    amount: str = "250.00",
    msisdn: str = "254712345678",
    round_count: int = 0,
) -> SignalContext:
    transaction = Transaction(
        id="txn-1",
        business_id="biz-1",
        amount=Decimal(amount),
        msisdn=msisdn,
        trans_time=datetime(2026, 1, 15, 14, 0, 0, tzinfo=NAIROBI),
    )
    return SignalContext(
        transaction=transaction,
        business=BusinessStatistics(),
        customer=CustomerStatistics(round_number_transactions=round_count, velocity_count=1),
        local_hour=14,
        config=CONFIG,
    )


class TestRoundNumberSignal:
    signal = RoundNumberSignal()
    pattern = FraudPattern(pattern_type=SignalType.ROUND_NUMBER, weight=0.1)

    def test_round_amount_with_two_prior_round_transactions(self):
        result = self.signal.evaluate(_context(amount="1000", round_count=2), self.pattern)
        assert result is not None
        assert result.severity == Severity.LOW
        assert result.contribution == pytest.approx(0.1)
        assert result.details["round_transaction_count"] == 2

    def test_decimal_places_still_match(self):
        result = self.signal.evaluate(_context(amount="5000.00", round_count=3), self.pattern)
        assert result is not None

    def test_single_prior_round_transaction_does_not_fire(self):
        assert self.signal.evaluate(_context(amount="1000", round_count=1), self.pattern) is None

    def test_amount_outside_round_set_does_not_fire(self):
        # Multiple of 1000 but not in the configured set
        assert self.signal.evaluate(_context(amount="2000", round_count=5), self.pattern) is None
        assert self.signal.evaluate(_context(amount="1500", round_count=5), self.pattern) is None


class TestPrefixAnomalySignal:
    signal = PrefixAnomalySignal()
    pattern = FraudPattern(pattern_type=SignalType.PREFIX_ANOMALY, weight=0.2)

    def test_never_fires_alone(self):
        context = _context(msisdn="0700123456")
        assert self.signal.evaluate(context, self.pattern) is None
        assert self.signal.evaluate(context, self.pattern, ()) is None

    def test_corroborates_existing_factor(self):
        result = self.signal.evaluate(_context(msisdn="0700123456"), self.pattern, [PRIOR_FACTOR])
        assert result is not None
        assert result.severity == Severity.LOW
        assert result.contribution == pytest.approx(0.1)
        assert result.details["prefix"] == "0700"
        assert result.details["corroborates"] == ["unusual_time"]

    def test_international_prefix_matches(self):
        result = self.signal.evaluate(
            _context(msisdn="+254712345678"), self.pattern, [PRIOR_FACTOR]
        )
        assert result is not None
        assert result.details["prefix"] == "+2547"

    def test_ordinary_prefix_does_not_fire(self):
        result = self.signal.evaluate(_context(msisdn="254712345678"), self.pattern, [PRIOR_FACTOR])
        assert result is None
