"""
Saved outlines, public share snapshots, usage logs and generation statistics.
"""

import uuid
from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from reportcraft.models.base import Base, TimestampMixin, generate_uuid


class ReportOutlineRecord(Base, TimestampMixin):
    """An outline saved by a signed-in user (immutable snapshot)."""

    __tablename__ = "report_outlines"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    user_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    field: Mapped[str] = mapped_column(String(50), nullable=False)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    word_count: Mapped[int] = mapped_column(Integer, nullable=False)
    instructor_type: Mapped[str] = mapped_column(String(100), nullable=False)
    sections: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    core_question: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class SharedReport(Base):
    """Snapshot published through a share link; public ones feed the gallery."""

    __tablename__ = "shared_reports"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )


class UsageLog(Base):
    """One metered action; counted per email per UTC day."""

    __tablename__ = "usage_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    day: Mapped[date] = mapped_column("date", Date, index=True, nullable=False)
    action_type: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class GenerationStat(Base):
    """Daily count of outline generations per field."""

    __tablename__ = "generation_stats"
    __table_args__ = (UniqueConstraint("date", "field", name="uq_generation_stats_date_field"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    day: Mapped[date] = mapped_column("date", Date, nullable=False)
    field: Mapped[str] = mapped_column(String(50), nullable=False)
    count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
