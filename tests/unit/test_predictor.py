"""Unit tests for feature extraction, the placeholder predictor and ensemble blending."""

from datetime import UTC, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from src.domains.fraud.config import EnsembleWeights, FraudConfig
from src.domains.fraud.models import (
    BusinessStatistics,
    CustomerStatistics,
    PredictorFeatures,
    Transaction,
)
from src.domains.fraud.predictor import (
    LinearPlaceholderPredictor,
    ensemble_predict,
    extract_features,
)

CONFIG = FraudConfig()
NAIROBI = ZoneInfo("Africa/Nairobi")


def _make_transaction(**kwargs) -> Transaction:
    defaults = {
        "id": "txn-1",
        "business_id": "biz-1",
        "amount": Decimal("1500.00"),
        "msisdn": "254712345678",
        "trans_time": datetime(2026, 1, 15, 14, 0, 0, tzinfo=NAIROBI),
    }
    defaults.update(kwargs)
    return Transaction(**defaults)


def _features(**kwargs) -> PredictorFeatures:
    defaults = {"amount": 100.0, "hour_of_day": 12, "day_of_week": 2}
    defaults.update(kwargs)
    return PredictorFeatures(**defaults)


class TestExtractFeatures:
    def test_established_business(self):
        features = extract_features(
            _make_transaction(),
            BusinessStatistics(avg_amount=1000.0, stddev_amount=250.0, total_transactions=30),
            CustomerStatistics(prior_transactions=4, velocity_count=1),
            CONFIG,
        )
        assert features.amount == 1500.0
        assert features.amount_deviation == pytest.approx(2.0)
        assert features.hour_of_day == 14
        # 2026-01-15 is a Thursday
        assert features.day_of_week == 3
        assert features.is_round_number == 0
        assert features.is_unusual_hour == 0
        assert features.customer_transaction_count == 4
        assert features.phone_length == 12
        assert features.has_country_code == 0

    def test_cold_start_has_zero_deviation(self):
        features = extract_features(
            _make_transaction(amount=Decimal("3000")),
            BusinessStatistics(),
            CustomerStatistics(),
            CONFIG,
        )
        assert features.amount_deviation == 0.0
        assert features.is_round_number == 1

    def test_missing_stddev_divides_by_one(self):
        features = extract_features(
            _make_transaction(amount=Decimal("700")),
            BusinessStatistics(avg_amount=500.0, stddev_amount=None, total_transactions=1),
            CustomerStatistics(),
            CONFIG,
        )
        assert features.amount_deviation == pytest.approx(200.0)

    def test_local_time_and_country_code(self):
        features = extract_features(
            _make_transaction(
                msisdn="+254712345678",
                trans_time=datetime(2026, 1, 15, 22, 30, 0, tzinfo=UTC),
            ),
            BusinessStatistics(),
            CustomerStatistics(),
            CONFIG,
        )
        assert features.hour_of_day == 1
        assert features.day_of_week == 4
        assert features.is_unusual_hour == 1
        assert features.has_country_code == 1
        assert features.phone_length == 13


class TestLinearPlaceholderPredictor:
    def setup_method(self):
        self.predictor = LinearPlaceholderPredictor()

    def test_neutral_features_return_bias(self):
        assert self.predictor.predict(_features()) == pytest.approx(0.5)

    def test_history_lowers_score(self):
        score = self.predictor.predict(_features(customer_transaction_count=9))
        assert score == pytest.approx(0.3849, abs=1e-4)

    def test_risky_features_saturate(self):
        score = self.predictor.predict(
            _features(amount_deviation=-8.0, is_round_number=1, is_unusual_hour=1)
        )
        assert score == pytest.approx(1.0)
        assert score <= 1.0

    def test_long_history_is_clipped_at_zero(self):
        score = self.predictor.predict(_features(customer_transaction_count=100_000))
        assert score == 0.0

    def test_model_version(self):
        assert self.predictor.model_version == "placeholder-linear-v1"


class TestEnsemblePredict:
    def test_default_weights(self):
        assert ensemble_predict(0.8, 0.2, EnsembleWeights()) == pytest.approx(0.56)

    def test_custom_weights(self):
        weights = EnsembleWeights(rule_weight=0.5, ml_weight=0.5)
        assert ensemble_predict(0.2, 0.8, weights) == pytest.approx(0.5)

    def test_clamped(self):
        weights = EnsembleWeights(rule_weight=1.0, ml_weight=1.0)
        assert ensemble_predict(0.9, 0.9, weights) == 1.0
