"""
Profile model - subscription plan per signed-in email.
"""

import uuid
from enum import Enum

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from reportcraft.models.base import Base, TimestampMixin, generate_uuid


class Plan(str, Enum):
    FREE = "free"
    PRO = "pro"


class Profile(Base, TimestampMixin):
    """A user's plan. Users without a profile are on the free plan."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=generate_uuid,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    plan: Mapped[str] = mapped_column(
        String(20),
        default=Plan.FREE.value,
        nullable=False,
    )
