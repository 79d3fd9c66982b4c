"""Fraud domain exceptions."""


class FraudDetectionError(Exception):
    """Base exception for the fraud domain."""


class ScoringError(FraudDetectionError):
    """A transaction could not be scored. No partial assessment exists."""


class UpstreamReadError(ScoringError):
    """Pattern catalog or transaction history could not be read."""


class AssessmentNotFoundError(FraudDetectionError, LookupError):
    """No fraud assessment exists for the requested transaction."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Fraud assessment not found for transaction {transaction_id}")
        self.transaction_id = transaction_id
