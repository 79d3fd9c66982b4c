"""Mapping between FraudAssessment and fraud_scores rows."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import FraudScore as FraudScoreDB

from .models import FraudAssessment, ReviewState, RiskFactor, RiskLevel, Transaction


def assessment_to_row(assessment: FraudAssessment, transaction: Transaction) -> FraudScoreDB:
    return FraudScoreDB(
        transaction_id=assessment.transaction_id,
        business_id=transaction.business_id,
        fraud_score=assessment.score,
        risk_level=assessment.risk_level.value,
        risk_factors=[f.model_dump(mode="json") for f in assessment.factors],
        flagged=assessment.flagged,
        ml_score=assessment.ml_score,
        ensemble_score=assessment.ensemble_score,
        model_version=assessment.model_version,
        analyzed_at=assessment.analyzed_at,
        reviewed=False,
    )


def assessment_from_row(row: FraudScoreDB) -> FraudAssessment:
    return FraudAssessment(
        transaction_id=row.transaction_id,
        score=row.fraud_score,
        risk_level=RiskLevel(row.risk_level),
        flagged=row.flagged,
        factors=[RiskFactor.model_validate(f) for f in row.risk_factors or []],
        analyzed_at=row.analyzed_at,
        ml_score=row.ml_score,
        ensemble_score=row.ensemble_score,
        model_version=row.model_version,
        review=review_state_from_row(row),
    )


def review_state_from_row(row: FraudScoreDB) -> ReviewState:
    return ReviewState(
        reviewed=bool(row.reviewed),
        reviewed_by=row.reviewed_by,
        reviewed_at=row.reviewed_at,
        notes=row.notes,
    )


async def get_assessment_row(session: AsyncSession, transaction_id: str) -> FraudScoreDB | None:
    stmt = select(FraudScoreDB).where(FraudScoreDB.transaction_id == transaction_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()
