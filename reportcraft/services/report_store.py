"""
Report store - saved outlines (owner-only) and public share snapshots.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reportcraft.engines.outline.types import ReportOutline
from reportcraft.logging_config import get_logger
from reportcraft.models import ReportOutlineRecord, SharedReport

logger = get_logger(__name__)


@dataclass
class PublicReport:
    id: str
    field: str
    topic: str
    created_at: datetime


async def save_report_outline(
    db: AsyncSession,
    user_email: str,
    *,
    field: str,
    topic: str,
    word_count: int,
    instructor_type: str,
    outline: ReportOutline,
) -> ReportOutlineRecord:
    """Persist an outline snapshot for its owner."""
    record = ReportOutlineRecord(
        user_email=user_email,
        field=field,
        topic=topic,
        word_count=word_count,
        instructor_type=instructor_type,
        sections=[
            {"title": s.title, "points": list(s.points)} for s in outline.sections
        ],
        core_question=outline.core_question,
    )
    db.add(record)
    await db.flush()
    await db.refresh(record)
    logger.info("Saved report outline %s", record.id)
    return record


async def list_report_outlines(db: AsyncSession, user_email: str) -> List[ReportOutlineRecord]:
    """The user's saved outlines, newest first."""
    q = (
        select(ReportOutlineRecord)
        .where(ReportOutlineRecord.user_email == user_email)
        .order_by(ReportOutlineRecord.created_at.desc())
    )
    result = await db.execute(q)
    return list(result.scalars().all())


async def get_report_outline(
    db: AsyncSession,
    report_id: uuid.UUID,
    user_email: str,
) -> Optional[ReportOutlineRecord]:
    """A saved outline, or None when missing or owned by someone else."""
    q = select(ReportOutlineRecord).where(
        ReportOutlineRecord.id == report_id,
        ReportOutlineRecord.user_email == user_email,
    )
    result = await db.execute(q)
    return result.scalar_one_or_none()


async def publish_shared_report(
    db: AsyncSession,
    report_id: str,
    content: Dict[str, Any],
    is_public: bool = False,
) -> SharedReport:
    """Store a durable copy of shared content; public ones appear in the gallery."""
    row = await db.get(SharedReport, report_id)
    if row is None:
        row = SharedReport(id=report_id, content=content, is_public=is_public)
        db.add(row)
    else:
        row.content = content
        row.is_public = is_public
    await db.flush()
    return row


async def get_shared_report(db: AsyncSession, report_id: str) -> Optional[Dict[str, Any]]:
    row = await db.get(SharedReport, report_id)
    return row.content if row else None


async def list_public_reports(db: AsyncSession, limit: int = 6) -> List[PublicReport]:
    """
    Newest public reports for the gallery.

    Entries whose content lacks a field or question are skipped.
    """
    q = (
        select(SharedReport)
        .where(SharedReport.is_public.is_(True))
        .order_by(SharedReport.created_at.desc())
        .limit(limit)
    )
    result = await db.execute(q)

    reports: List[PublicReport] = []
    for row in result.scalars().all():
        content = row.content if isinstance(row.content, dict) else {}
        field = content.get("field")
        question = content.get("question")
        if not field or not question:
            continue
        reports.append(
            PublicReport(id=row.id, field=field, topic=question, created_at=row.created_at)
        )
    return reports
