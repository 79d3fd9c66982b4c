"""Aggregate statistics over a set of assessments."""

from collections.abc import Sequence

from .models import AssessmentSummary, FraudAssessment, RiskLevel


def summarize_assessments(assessments: Sequence[FraudAssessment]) -> AssessmentSummary:
    total = len(assessments)
    if total == 0:
        return AssessmentSummary()

    flagged = sum(1 for a in assessments if a.flagged)
    by_level = {level.value: 0 for level in RiskLevel}
    for assessment in assessments:
        by_level[assessment.risk_level.value] += 1

    return AssessmentSummary(
        total=total,
        flagged=flagged,
        flagged_percentage=round(flagged / total * 100, 2),
        by_risk_level=by_level,
        average_score=round(sum(a.score for a in assessments) / total, 4),
    )
