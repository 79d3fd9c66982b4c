"""Pydantic models for the fraud domain."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class SignalType(StrEnum):
    UNUSUAL_AMOUNT = "unusual_amount"
    UNUSUAL_TIME = "unusual_time"
    RAPID_SUCCESSION = "rapid_succession"
    LARGE_AMOUNT = "new_customer_large_amount"
    ROUND_NUMBER = "round_number_pattern"
    PREFIX_ANOMALY = "prefix_anomaly"


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Transaction(BaseModel):
    """A recorded mobile-money payment. Never mutated after ingestion."""

    model_config = ConfigDict(frozen=True)

    id: str
    business_id: str
    transaction_id: str | None = None
    amount: Decimal = Field(gt=0)
    msisdn: str
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    # Must carry an offset
    trans_time: AwareDatetime
    trans_type: str | None = None
    bill_ref_number: str | None = None
    business_short_code: str | None = None

    @property
    def amount_float(self) -> float:
        return float(self.amount)

    @classmethod
    def from_record(cls, row) -> "Transaction":
        """Build from a `transactions` ORM row."""
        return cls(
            id=row.id,
            business_id=row.business_id,
            transaction_id=row.transaction_id,
            amount=row.trans_amount,
            msisdn=row.msisdn,
            first_name=row.first_name,
            middle_name=row.middle_name,
            last_name=row.last_name,
            trans_time=row.trans_time,
            trans_type=row.trans_type,
            bill_ref_number=row.bill_ref_number,
            business_short_code=row.business_short_code,
        )


class BusinessStatistics(BaseModel):
    avg_amount: float | None = None
    stddev_amount: float | None = None
    total_transactions: int = 0

    @property
    def has_baseline(self) -> bool:
        return (
            self.avg_amount is not None
            and self.stddev_amount is not None
            and self.stddev_amount > 0
        )


class CustomerStatistics(BaseModel):
    prior_transactions: int = 0
    round_number_transactions: int = 0
    velocity_count: int = 0


class FraudPattern(BaseModel):
    pattern_type: SignalType
    name: str = ""
    weight: float = Field(ge=0.0)
    active: bool = True


class RiskFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SignalType
    description: str
    severity: Severity
    contribution: float
    details: dict = Field(default_factory=dict)


class ScoringOutcome(BaseModel):
    """Rule engine output before the secondary predictor is applied."""

    raw_score: float
    score: float = Field(ge=0.0, le=1.0)
    risk_level: RiskLevel
    flagged: bool
    factors: list[RiskFactor] = []


class ReviewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    reviewed: bool = False
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    notes: str | None = None


class FraudAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_id: str
    score: float = Field(ge=0.0, le=1.0)
    risk_level: RiskLevel
    flagged: bool
    factors: list[RiskFactor] = []
    analyzed_at: datetime
    ml_score: float | None = None
    ensemble_score: float | None = None
    model_version: str = "rules-v1"
    review: ReviewState = Field(default_factory=ReviewState)


class PredictorFeatures(BaseModel):
    """Input vector for the secondary predictor."""

    amount: float
    amount_deviation: float = 0.0
    hour_of_day: int = Field(ge=0, le=23)
    day_of_week: int = Field(ge=0, le=6)
    is_round_number: int = 0
    is_unusual_hour: int = 0
    customer_transaction_count: int = 0
    phone_length: int = 0
    has_country_code: int = 0


class BatchItemResult(BaseModel):
    transaction_id: str
    assessment: FraudAssessment | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.assessment is not None


class AssessmentSummary(BaseModel):
    total: int = 0
    flagged: int = 0
    flagged_percentage: float = 0.0
    by_risk_level: dict[str, int] = Field(
        default_factory=lambda: {level.value: 0 for level in RiskLevel}
    )
    average_score: float = 0.0
