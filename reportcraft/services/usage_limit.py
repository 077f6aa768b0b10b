"""
Freemium gate - daily generation limit for free-plan users.

Counts usage logs per email per UTC day. Pro users are unlimited. Database
errors are permissive: the user is allowed through and the error is logged.
"""

from dataclasses import dataclass
from datetime import datetime, timezone, date
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reportcraft.config import get_settings
from reportcraft.logging_config import get_logger
from reportcraft.models import Plan, Profile, UsageLog

logger = get_logger(__name__)

LOGIN_REQUIRED = "ログインが必要です"


@dataclass
class UsageStatus:
    allowed: bool
    count: int
    limit: Optional[int]  # None = unlimited
    error: Optional[str] = None


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


async def get_plan(db: AsyncSession, email: str) -> str:
    """Plan of a user; users without a profile are on the free plan."""
    result = await db.execute(select(Profile.plan).where(Profile.email == email))
    return result.scalar_one_or_none() or Plan.FREE.value


async def count_usage(db: AsyncSession, email: str, day: Optional[date] = None) -> int:
    q = select(func.count(UsageLog.id)).where(
        UsageLog.email == email,
        UsageLog.day == (day or utc_today()),
    )
    result = await db.execute(q)
    return int(result.scalar_one() or 0)


async def check_usage_limit(db: AsyncSession, email: Optional[str]) -> UsageStatus:
    """
    Whether the user may run another metered generation today.

    Anonymous users are never allowed.
    """
    if not email:
        return UsageStatus(allowed=False, count=0, limit=0, error=LOGIN_REQUIRED)

    limit = get_settings().free_plan_daily_limit
    try:
        if await get_plan(db, email) == Plan.PRO.value:
            return UsageStatus(allowed=True, count=await count_usage(db, email), limit=None)
        count = await count_usage(db, email)
    except SQLAlchemyError as e:
        logger.error("Usage lookup failed for %s, allowing request: %s", email, e)
        return UsageStatus(allowed=True, count=0, limit=None)

    if count >= limit:
        return UsageStatus(
            allowed=False,
            count=count,
            limit=limit,
            error=f"1日の制限（{limit}回）に達しました",
        )
    return UsageStatus(allowed=True, count=count, limit=limit)


async def log_usage(db: AsyncSession, email: Optional[str], action_type: str) -> None:
    """Record one metered action. Anonymous calls and failures are ignored."""
    if not email:
        return
    try:
        async with db.begin_nested():
            db.add(UsageLog(email=email, day=utc_today(), action_type=action_type))
    except SQLAlchemyError as e:
        logger.error("Failed to log usage for %s: %s", email, e)
