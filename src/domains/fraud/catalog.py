"""Pattern catalog: per-signal weight and active flag, loaded from fraud_patterns."""

from collections.abc import Iterable

import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import FraudPatternDB

from .exceptions import UpstreamReadError
from .models import FraudPattern, SignalType

logger = structlog.get_logger()

DEFAULT_PATTERNS: list[FraudPattern] = [
    FraudPattern(pattern_type=SignalType.UNUSUAL_AMOUNT, name="Unusual amount", weight=0.35),
    FraudPattern(pattern_type=SignalType.UNUSUAL_TIME, name="Unusual time", weight=0.15),
    FraudPattern(pattern_type=SignalType.RAPID_SUCCESSION, name="Rapid succession", weight=0.25),
    FraudPattern(
        pattern_type=SignalType.LARGE_AMOUNT, name="Large amount, new customer", weight=0.3
    ),
    FraudPattern(pattern_type=SignalType.ROUND_NUMBER, name="Round number pattern", weight=0.1),
    FraudPattern(pattern_type=SignalType.PREFIX_ANOMALY, name="Phone prefix anomaly", weight=0.2),
]


class PatternCatalog:
    """Fixed table of SignalType -> active pattern.

    A signal with no entry, or an inactive one, is disabled.
    """

    def __init__(self, patterns: Iterable[FraudPattern] = ()) -> None:
        self._table: dict[SignalType, FraudPattern | None] = dict.fromkeys(SignalType)
        for pattern in patterns:
            self._table[pattern.pattern_type] = pattern

    def get(self, signal_type: SignalType) -> FraudPattern | None:
        pattern = self._table[signal_type]
        if pattern is None or not pattern.active:
            return None
        return pattern

    def active_types(self) -> list[SignalType]:
        return [t for t in SignalType if self.get(t) is not None]

    @classmethod
    def default(cls) -> "PatternCatalog":
        return cls(DEFAULT_PATTERNS)


async def load_pattern_catalog(session: AsyncSession) -> PatternCatalog:
    """Read the active fraud_patterns rows into a catalog.

    Rows whose pattern_type is not a known signal are skipped. A known row
    that fails validation raises UpstreamReadError.
    """
    stmt = select(FraudPatternDB).where(FraudPatternDB.active.is_(True))
    try:
        result = await session.execute(stmt)
        rows = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.error("pattern_catalog_read_failed", error=str(exc))
        raise UpstreamReadError("Could not read fraud pattern catalog") from exc

    patterns: list[FraudPattern] = []
    for row in rows:
        try:
            signal_type = SignalType(row.pattern_type)
        except ValueError:
            logger.debug("unknown_pattern_type_skipped", pattern_type=row.pattern_type)
            continue
        try:
            pattern = FraudPattern(
                pattern_type=signal_type,
                name=row.name,
                weight=row.weight,
                active=row.active,
            )
        except ValidationError as exc:
            logger.error(
                "pattern_catalog_invalid_row",
                pattern_type=row.pattern_type,
                weight=row.weight,
                error=str(exc),
            )
            raise UpstreamReadError(
                f"Invalid fraud pattern row for {row.pattern_type}"
            ) from exc
        patterns.append(pattern)

    return PatternCatalog(patterns)


async def seed_default_patterns(session: AsyncSession) -> int:
    """Insert any default pattern missing from fraud_patterns. Returns rows added."""
    result = await session.execute(select(FraudPatternDB.pattern_type))
    existing = set(result.scalars().all())

    added = 0
    for pattern in DEFAULT_PATTERNS:
        if pattern.pattern_type.value in existing:
            continue
        session.add(
            FraudPatternDB(
                pattern_type=pattern.pattern_type.value,
                name=pattern.name,
                weight=pattern.weight,
                active=pattern.active,
            )
        )
        added += 1

    await session.commit()
    logger.info("fraud_patterns_seeded", added=added, existing=len(existing))
    return added
