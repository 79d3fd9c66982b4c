"""Fraud detection domain."""

from .catalog import PatternCatalog, load_pattern_catalog, seed_default_patterns
from .exceptions import (
    AssessmentNotFoundError,
    FraudDetectionError,
    ScoringError,
    UpstreamReadError,
)
from .history import HistoryAggregator
from .models import (
    AssessmentSummary,
    BatchItemResult,
    BusinessStatistics,
    CustomerStatistics,
    FraudAssessment,
    FraudPattern,
    ReviewState,
    RiskFactor,
    RiskLevel,
    Severity,
    SignalType,
    Transaction,
)
from .predictor import FraudPredictor, LinearPlaceholderPredictor, ensemble_predict
from .review import list_flagged, review_assessment
from .rules_engine import RulesEngine, classify_risk
from .scorer import FraudScorer
from .summary import summarize_assessments

__all__ = [
    "AssessmentNotFoundError",
    "AssessmentSummary",
    "BatchItemResult",
    "BusinessStatistics",
    "CustomerStatistics",
    "FraudAssessment",
    "FraudDetectionError",
    "FraudPattern",
    "FraudPredictor",
    "FraudScorer",
    "HistoryAggregator",
    "LinearPlaceholderPredictor",
    "PatternCatalog",
    "ReviewState",
    "RiskFactor",
    "RiskLevel",
    "RulesEngine",
    "ScoringError",
    "Severity",
    "SignalType",
    "Transaction",
    "UpstreamReadError",
    "classify_risk",
    "ensemble_predict",
    "list_flagged",
    "load_pattern_catalog",
    "review_assessment",
    "seed_default_patterns",
    "summarize_assessments",
]
