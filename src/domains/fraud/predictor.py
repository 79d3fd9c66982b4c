"""Secondary fraud predictor and rule/ML ensemble blending.

The predictor shipped here is a fixed-weight linear placeholder, not a
trained model. Anything implementing ``FraudPredictor`` (feature vector in,
score in [0, 1] out) can replace it without touching the rules engine.

Feature Schema
--------------
| Feature                    | Type  | Computation                                       |
|----------------------------|-------|---------------------------------------------------|
| amount                     | float | Raw transaction amount                            |
| amount_deviation           | float | (amount - business_avg) / (business_std or 1)     |
| hour_of_day                | int   | Local hour of the transaction                     |
| day_of_week                | int   | Local weekday (0=Monday, 6=Sunday)                |
| is_round_number            | int   | 1 if amount is a multiple of 1000                 |
| is_unusual_hour            | int   | 1 if the local hour is an off-hour                |
| customer_transaction_count | int   | Customer's prior transactions with this business  |
| phone_length               | int   | Length of the counterparty phone number           |
| has_country_code           | int   | 1 if the phone number starts with "+"             |
"""

from typing import Protocol

import numpy as np

from src.shared.time_utils import to_local_time

from .config import EnsembleWeights, FraudConfig
from .models import BusinessStatistics, CustomerStatistics, PredictorFeatures, Transaction


def extract_features(
    transaction: Transaction,
    business: BusinessStatistics,
    customer: CustomerStatistics,
    config: FraudConfig,
) -> PredictorFeatures:
    local = to_local_time(transaction.trans_time, config.timing.local_timezone)
    amount = transaction.amount_float

    deviation = 0.0
    if business.avg_amount:
        deviation = (amount - business.avg_amount) / (business.stddev_amount or 1.0)

    return PredictorFeatures(
        amount=amount,
        amount_deviation=deviation,
        hour_of_day=local.hour,
        day_of_week=local.weekday(),
        is_round_number=int(transaction.amount % 1000 == 0),
        is_unusual_hour=int(local.hour in config.timing.unusual_hours),
        customer_transaction_count=customer.prior_transactions,
        phone_length=len(transaction.msisdn),
        has_country_code=int(transaction.msisdn.startswith("+")),
    )


class FraudPredictor(Protocol):
    model_version: str

    def predict(self, features: PredictorFeatures) -> float:
        ...


class LinearPlaceholderPredictor:
    """Static logistic-style stand-in. Weights are constants, not learned."""

    model_version = "placeholder-linear-v1"
    bias = 0.5
    weights = {
        "amount_deviation": 0.25,
        "is_round_number": 0.10,
        "is_unusual_hour": 0.15,
        # More history with the business is less suspicious
        "customer_transaction_count": -0.05,
    }

    def __init__(self) -> None:
        self._weight_vector = np.array(list(self.weights.values()), dtype=float)

    def _terms(self, features: PredictorFeatures) -> np.ndarray:
        return np.array(
            [
                min(abs(features.amount_deviation), 1.0),
                features.is_round_number,
                features.is_unusual_hour,
                np.log1p(features.customer_transaction_count),
            ],
            dtype=float,
        )

    def predict(self, features: PredictorFeatures) -> float:
        score = self.bias + float(self._weight_vector @ self._terms(features))
        return float(np.clip(score, 0.0, 1.0))


def ensemble_predict(rule_score: float, ml_score: float, weights: EnsembleWeights) -> float:
    """Blend the rule score with the predictor score."""
    blended = rule_score * weights.rule_weight + ml_score * weights.ml_weight
    return min(max(blended, 0.0), 1.0)
