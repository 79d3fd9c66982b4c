"""Unit tests for time-of-day and velocity signals."""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from src.domains.fraud.config import FraudConfig
from src.domains.fraud.models import (
    BusinessStatistics,
    CustomerStatistics,
    FraudPattern,
    Severity,
    SignalType,
    Transaction,
)
from src.domains.fraud.signals.base import SignalContext
from src.domains.fraud.signals.timing import RapidSuccessionSignal, UnusualTimeSignal

CONFIG = FraudConfig()
NAIROBI = ZoneInfo("Africa/Nairobi")


def _context(hour: int = 14, velocity_count: int = 1) -> SignalContext:
    transaction = Transaction(
        id="txn-1",
        business_id="biz-1",
        amount=Decimal("250.00"),
        msisdn="254712345678",
        trans_time=datetime(2026, 1, 15, hour, 30, 0, tzinfo=NAIROBI),
    )
    return SignalContext(
        transaction=transaction,
        business=BusinessStatistics(),
        customer=CustomerStatistics(velocity_count=velocity_count),
        local_hour=hour,
        config=CONFIG,
    )


class TestUnusualTimeSignal:
    signal = UnusualTimeSignal()
    pattern = FraudPattern(pattern_type=SignalType.UNUSUAL_TIME, weight=0.15)

    @pytest.mark.parametrize("hour", [23, 0, 1, 2, 3, 4, 5])
    def test_off_hours_fire(self, hour):
        result = self.signal.evaluate(_context(hour=hour), self.pattern)
        assert result is not None
        assert result.severity == Severity.LOW
        assert result.contribution == pytest.approx(0.15)
        assert result.details["hour"] == hour

    @pytest.mark.parametrize("hour", [6, 9, 12, 18, 22])
    def test_business_hours_do_not_fire(self, hour):
        assert self.signal.evaluate(_context(hour=hour), self.pattern) is None


class TestRapidSuccessionSignal:
    signal = RapidSuccessionSignal()
    pattern = FraudPattern(pattern_type=SignalType.RAPID_SUCCESSION, weight=0.2)

    def test_below_minimum_does_not_fire(self):
        assert self.signal.evaluate(_context(velocity_count=2), self.pattern) is None

    def test_at_minimum_is_medium(self):
        result = self.signal.evaluate(_context(velocity_count=3), self.pattern)
        assert result is not None
        assert result.severity == Severity.MEDIUM
        assert result.contribution == pytest.approx(0.2)
        assert result.details == {"transaction_count": 3, "time_window": "5 minutes"}

    def test_five_in_window_is_high(self):
        result = self.signal.evaluate(_context(velocity_count=5), self.pattern)
        assert result is not None
        assert result.severity == Severity.HIGH
        assert result.contribution == pytest.approx(0.2 * 5 / 3)
        assert result.contribution == pytest.approx(0.333, abs=1e-3)

    def test_multiplier_caps_at_two(self):
        result = self.signal.evaluate(_context(velocity_count=12), self.pattern)
        assert result is not None
        assert result.contribution == pytest.approx(0.4)
