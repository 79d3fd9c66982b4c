"""Manual review lifecycle for flagged assessments: unreviewed -> reviewed."""

from datetime import UTC, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import FraudScore as FraudScoreDB

from .exceptions import AssessmentNotFoundError
from .models import FraudAssessment, ReviewState
from .persistence import assessment_from_row, get_assessment_row, review_state_from_row

logger = structlog.get_logger()


def mark_reviewed(
    state: ReviewState,
    reviewer_id: str,
    notes: str | None,
    reviewed_at: datetime,
) -> ReviewState:
    """Apply a reviewer action. Re-reviewing overwrites the previous reviewer and notes."""
    if state.reviewed:
        logger.info(
            "assessment_rereviewed",
            previous_reviewer=state.reviewed_by,
            reviewer_id=reviewer_id,
        )
    return ReviewState(
        reviewed=True,
        reviewed_by=reviewer_id,
        reviewed_at=reviewed_at,
        notes=notes,
    )


async def review_assessment(
    session: AsyncSession,
    transaction_id: str,
    reviewer_id: str,
    notes: str | None = None,
    now: datetime | None = None,
) -> ReviewState:
    """Record a reviewer decision on the assessment for `transaction_id`.

    Raises AssessmentNotFoundError, without writing, if no assessment exists.
    """
    row = await get_assessment_row(session, transaction_id)
    if row is None:
        logger.warning("review_target_not_found", transaction_id=transaction_id)
        raise AssessmentNotFoundError(transaction_id)

    new_state = mark_reviewed(
        review_state_from_row(row),
        reviewer_id=reviewer_id,
        notes=notes,
        reviewed_at=now or datetime.now(UTC),
    )

    row.reviewed = new_state.reviewed
    row.reviewed_by = new_state.reviewed_by
    row.reviewed_at = new_state.reviewed_at
    row.notes = new_state.notes
    await session.commit()

    logger.info(
        "assessment_reviewed",
        transaction_id=transaction_id,
        reviewer_id=reviewer_id,
        risk_level=row.risk_level,
    )
    return new_state


async def list_flagged(
    session: AsyncSession,
    business_id: str | None = None,
    reviewed: bool = False,
    limit: int = 50,
    offset: int = 0,
) -> list[FraudAssessment]:
    """Flagged assessments, highest score first, then most recent."""
    stmt = select(FraudScoreDB).where(
        FraudScoreDB.flagged.is_(True),
        FraudScoreDB.reviewed.is_(reviewed),
    )
    if business_id:
        stmt = stmt.where(FraudScoreDB.business_id == business_id)

    stmt = (
        stmt.order_by(FraudScoreDB.fraud_score.desc(), FraudScoreDB.analyzed_at.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return [assessment_from_row(row) for row in result.scalars().all()]
