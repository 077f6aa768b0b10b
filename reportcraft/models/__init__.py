"""
Data Models

SQLAlchemy models for profiles, saved outlines, share snapshots and metering.
"""

from reportcraft.models.base import Base, TimestampMixin, generate_uuid
from reportcraft.models.profile import Plan, Profile
from reportcraft.models.report import (
    GenerationStat,
    ReportOutlineRecord,
    SharedReport,
    UsageLog,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "generate_uuid",
    "Plan",
    "Profile",
    "GenerationStat",
    "ReportOutlineRecord",
    "SharedReport",
    "UsageLog",
]
