"""Operator CLI for PesaGuard.

Usage:
    pesaguard init-db
    pesaguard check-db
    pesaguard seed-patterns
    pesaguard analyze --business-id biz-001 --limit 200
"""

import argparse
import asyncio
import json
import sys

import structlog
from sqlalchemy import select

from src.config import settings
from src.shared.logging import setup_logging

logger = structlog.get_logger()


async def _init_db() -> None:
    from src.db.database import async_session_factory, init_db
    from src.domains.fraud.catalog import seed_default_patterns

    await init_db()
    async with async_session_factory() as session:
        await seed_default_patterns(session)


async def _check_db() -> bool:
    from src.db.database import check_db

    return await check_db()


async def _seed_patterns() -> int:
    from src.db.database import async_session_factory
    from src.domains.fraud.catalog import seed_default_patterns

    async with async_session_factory() as session:
        return await seed_default_patterns(session)


async def _analyze(business_id: str, limit: int) -> dict:
    from src.db.database import async_session_factory
    from src.db.models import TransactionDB
    from src.domains.fraud.config import FraudConfig
    from src.domains.fraud.models import Transaction
    from src.domains.fraud.scorer import FraudScorer
    from src.domains.fraud.summary import summarize_assessments

    scorer = FraudScorer(config=FraudConfig.from_env())
    async with async_session_factory() as session:
        stmt = (
            select(TransactionDB)
            .where(TransactionDB.business_id == business_id)
            .order_by(TransactionDB.trans_time.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        transactions = [Transaction.from_record(row) for row in result.scalars().all()]
        results = await scorer.batch_analyze(transactions, session)

    assessments = [r.assessment for r in results if r.assessment is not None]
    summary = summarize_assessments(assessments)
    logger.info(
        "business_analyzed",
        business_id=business_id,
        total=summary.total,
        flagged=summary.flagged,
        failed=len(results) - len(assessments),
    )
    return {
        "business_id": business_id,
        "summary": summary.model_dump(),
        "errors": [
            {"transaction_id": r.transaction_id, "error": r.error}
            for r in results
            if not r.succeeded
        ],
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="PesaGuard fraud scoring operations")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create tables and seed the default pattern catalog")
    sub.add_parser("check-db", help="Check that the scoring database is reachable")
    sub.add_parser("seed-patterns", help="Insert missing default fraud patterns")

    analyze = sub.add_parser("analyze", help="Batch-analyze a business's recent transactions")
    analyze.add_argument("--business-id", type=str, required=True, help="Business to analyze")
    analyze.add_argument(
        "--limit", type=int, default=100, help="Number of most recent transactions"
    )

    args = parser.parse_args()
    setup_logging(settings.log_level)

    if args.command == "init-db":
        asyncio.run(_init_db())
    elif args.command == "check-db":
        if not asyncio.run(_check_db()):
            print("Database unreachable", file=sys.stderr)
            sys.exit(1)
        print("Database reachable", file=sys.stderr)
    elif args.command == "seed-patterns":
        added = asyncio.run(_seed_patterns())
        print(f"Seeded {added} fraud patterns", file=sys.stderr)
    elif args.command == "analyze":
        report = asyncio.run(_analyze(args.business_id, args.limit))
        print(json.dumps(report, indent=2, default=str))


if __name__ == "__main__":
    main()
