"""Compute business baselines and customer counters from persisted transactions."""

import asyncio
from datetime import timedelta
from decimal import Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import TransactionDB

from .config import FraudConfig, default_config
from .exceptions import UpstreamReadError
from .models import BusinessStatistics, CustomerStatistics, Transaction

logger = structlog.get_logger()


class HistoryAggregator:
    """Reads the transactions table to build scoring statistics for one transaction.

    Nothing is cached: every call sees the latest committed rows. The
    transaction being scored is excluded from every aggregate, and counted
    once in the velocity window.
    """

    def __init__(self, config: FraudConfig | None = None) -> None:
        self._config = config or default_config

    async def compute(
        self,
        session: AsyncSession,
        transaction: Transaction,
        config: FraudConfig | None = None,
    ) -> tuple[BusinessStatistics, CustomerStatistics]:
        cfg = config or self._config
        timeout = cfg.history.query_timeout_seconds
        try:
            return await asyncio.wait_for(self._read(session, transaction, cfg), timeout=timeout)
        except TimeoutError as exc:
            logger.error(
                "history_read_timeout",
                transaction_id=transaction.id,
                business_id=transaction.business_id,
                timeout_seconds=timeout,
            )
            raise UpstreamReadError(
                f"History read timed out after {timeout}s for transaction {transaction.id}"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(
                "history_read_failed",
                transaction_id=transaction.id,
                business_id=transaction.business_id,
                error=str(exc),
            )
            raise UpstreamReadError(
                f"Could not read history for transaction {transaction.id}"
            ) from exc

    async def _read(
        self,
        session: AsyncSession,
        transaction: Transaction,
        cfg: FraudConfig,
    ) -> tuple[BusinessStatistics, CustomerStatistics]:
        business = await self._business_stats(session, transaction)
        customer = await self._customer_stats(session, transaction, cfg)
        return business, customer

    async def _business_stats(
        self,
        session: AsyncSession,
        transaction: Transaction,
    ) -> BusinessStatistics:
        amount = TransactionDB.trans_amount
        stmt = select(
            func.avg(amount).label("avg_amount"),
            func.stddev_samp(amount).label("stddev_amount"),
            func.count().label("total"),
        ).where(
            TransactionDB.business_id == transaction.business_id,
            TransactionDB.id != transaction.id,
        )
        result = await session.execute(stmt)
        row = result.one()

        total = int(row.total or 0)
        if total == 0:
            return BusinessStatistics(total_transactions=0)

        return BusinessStatistics(
            avg_amount=_as_float(row.avg_amount),
            stddev_amount=_as_float(row.stddev_amount),
            total_transactions=total,
        )

    async def _customer_stats(
        self,
        session: AsyncSession,
        transaction: Transaction,
        cfg: FraudConfig,
    ) -> CustomerStatistics:
        amount = TransactionDB.trans_amount
        round_numbers = [Decimal(n) for n in cfg.patterns.round_numbers]
        window_start = transaction.trans_time - timedelta(
            minutes=cfg.timing.velocity_window_minutes
        )

        stmt = select(
            func.count().label("lifetime"),
            func.count().filter(amount.in_(round_numbers)).label("round_count"),
            func.count()
            .filter(
                TransactionDB.trans_time >= window_start,
                TransactionDB.trans_time <= transaction.trans_time,
            )
            .label("recent"),
        ).where(
            TransactionDB.business_id == transaction.business_id,
            TransactionDB.msisdn == transaction.msisdn,
            TransactionDB.id != transaction.id,
        )
        result = await session.execute(stmt)
        row = result.one()

        return CustomerStatistics(
            prior_transactions=int(row.lifetime or 0),
            round_number_transactions=int(row.round_count or 0),
            velocity_count=int(row.recent or 0) + 1,
        )


def _as_float(value) -> float | None:
    if value is None:
        return None
    return float(value)
