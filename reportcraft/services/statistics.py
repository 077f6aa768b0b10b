"""
Generation statistics - per-day, per-field outline generation counter.
"""

from typing import Optional
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reportcraft.logging_config import get_logger
from reportcraft.models import GenerationStat
from reportcraft.services.usage_limit import utc_today

logger = get_logger(__name__)


async def record_generation(db: AsyncSession, field: str, day: Optional[date] = None) -> None:
    """Increment today's counter for a field. Failures are logged and ignored."""
    day = day or utc_today()
    try:
        async with db.begin_nested():
            q = select(GenerationStat).where(
                GenerationStat.day == day,
                GenerationStat.field == field,
            )
            result = await db.execute(q)
            stat = result.scalar_one_or_none()
            if stat:
                stat.count += 1
            else:
                db.add(GenerationStat(day=day, field=field, count=1))
    except SQLAlchemyError as e:
        logger.error("Failed to save statistics for %s: %s", field, e)


async def get_generation_count(db: AsyncSession, field: str, day: Optional[date] = None) -> int:
    q = select(GenerationStat.count).where(
        GenerationStat.day == (day or utc_today()),
        GenerationStat.field == field,
    )
    result = await db.execute(q)
    return result.scalar_one_or_none() or 0
