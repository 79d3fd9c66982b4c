"""Fraud scoring pipeline: catalog -> history -> signals -> predictor -> persist."""

from collections.abc import Sequence
from datetime import UTC, datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .catalog import load_pattern_catalog
from .config import FraudConfig, default_config
from .history import HistoryAggregator
from .models import (
    BatchItemResult,
    BusinessStatistics,
    CustomerStatistics,
    FraudAssessment,
    Transaction,
)
from .persistence import assessment_from_row, assessment_to_row, get_assessment_row
from .predictor import (
    FraudPredictor,
    LinearPlaceholderPredictor,
    ensemble_predict,
    extract_features,
)
from .rules_engine import RulesEngine

logger = structlog.get_logger()

RULES_MODEL_VERSION = "rules-v1"


class FraudScorer:
    """Orchestrates the full fraud scoring pipeline."""

    def __init__(
        self,
        config: FraudConfig | None = None,
        predictor: FraudPredictor | None = None,
    ) -> None:
        self._config = config or default_config
        self._history = HistoryAggregator(config=self._config)
        self._rules_engine = RulesEngine(config=self._config)
        self._predictor = predictor or LinearPlaceholderPredictor()

    async def analyze(self, transaction: Transaction, session: AsyncSession) -> FraudAssessment:
        """Score a transaction without writing anything.

        Raises UpstreamReadError if the catalog or history cannot be read and
        ScoringError if a signal fails.
        """
        # 1. Read the active catalog and fresh statistics
        catalog = await load_pattern_catalog(session)
        business, customer = await self._history.compute(session, transaction, self._config)

        # 2. Rule-based score and classification
        outcome = self._rules_engine.evaluate(
            transaction, business, customer, catalog, self._config
        )

        # 3. Secondary predictor blend (advisory; classification stays rule-based)
        ml_score, ensemble_score = self._blend(transaction, business, customer, outcome.score)
        model_version = RULES_MODEL_VERSION
        if ml_score is not None:
            model_version = f"{RULES_MODEL_VERSION}+{self._predictor.model_version}"

        return FraudAssessment(
            transaction_id=transaction.id,
            score=outcome.score,
            risk_level=outcome.risk_level,
            flagged=outcome.flagged,
            factors=outcome.factors,
            analyzed_at=datetime.now(UTC),
            ml_score=ml_score,
            ensemble_score=ensemble_score,
            model_version=model_version,
        )

    async def score_transaction(
        self,
        transaction: Transaction,
        session: AsyncSession,
    ) -> FraudAssessment:
        """Score and persist a transaction. An existing assessment is returned unchanged."""
        existing = await get_assessment_row(session, transaction.id)
        if existing is not None:
            logger.info("transaction_already_scored", transaction_id=transaction.id)
            return assessment_from_row(existing)

        assessment = await self.analyze(transaction, session)

        session.add(assessment_to_row(assessment, transaction))
        await session.commit()

        logger.info(
            "transaction_scored",
            transaction_id=transaction.id,
            business_id=transaction.business_id,
            score=assessment.score,
            risk_level=assessment.risk_level.value,
            flagged=assessment.flagged,
            factor_count=len(assessment.factors),
            ml_score=assessment.ml_score,
            ensemble_score=assessment.ensemble_score,
        )

        return assessment

    async def batch_analyze(
        self,
        transactions: Sequence[Transaction],
        session: AsyncSession,
    ) -> list[BatchItemResult]:
        """Analyze each transaction independently, preserving input order.

        A failing item is recorded with its error and does not stop the batch.
        """
        results: list[BatchItemResult] = []
        for transaction in transactions:
            try:
                assessment = await self.analyze(transaction, session)
            except Exception as exc:
                logger.exception("batch_item_failed", transaction_id=transaction.id)
                await session.rollback()
                results.append(BatchItemResult(transaction_id=transaction.id, error=str(exc)))
                continue
            results.append(BatchItemResult(transaction_id=transaction.id, assessment=assessment))

        failed = sum(1 for r in results if not r.succeeded)
        logger.info("batch_analyzed", total=len(results), failed=failed)
        return results

    def _blend(
        self,
        transaction: Transaction,
        business: BusinessStatistics,
        customer: CustomerStatistics,
        rule_score: float,
    ) -> tuple[float | None, float | None]:
        weights = self._config.ensemble
        if not weights.enabled:
            return None, None

        try:
            features = extract_features(transaction, business, customer, self._config)
            ml_score = self._predictor.predict(features)
        except Exception:
            logger.warning(
                "predictor_fallback",
                transaction_id=transaction.id,
                model_version=self._predictor.model_version,
                exc_info=True,
            )
            return None, None

        return round(ml_score, 4), round(ensemble_predict(rule_score, ml_score, weights), 4)
