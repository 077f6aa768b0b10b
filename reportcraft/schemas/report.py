"""
Saved outline, share link, usage and checkout schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from reportcraft.engines.outline.ranker import InstructorType
from reportcraft.engines.outline.templates import Field as ReportField
from reportcraft.engines.outline.types import ReportOutline, Section


class ReportOutlineCreate(BaseModel):
    field: ReportField
    topic: str = Field(..., min_length=1, max_length=2000)
    word_count: int = Field(..., ge=100, le=50000)
    instructor_type: InstructorType
    outline: ReportOutline


class ReportOutlineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    field: str
    topic: str
    word_count: int
    instructor_type: str
    sections: List[Section]
    core_question: Optional[str] = None
    created_at: datetime


class ShareCreate(BaseModel):
    field: ReportField
    question: str = Field(..., min_length=1, max_length=2000)
    word_count: int = Field(..., ge=100, le=50000)
    instructor_type: InstructorType
    outline: ReportOutline
    is_public: bool = False


class ShareCreateResponse(BaseModel):
    report_id: str
    url: str


class ShareDataResponse(BaseModel):
    field: str
    question: str
    word_count: int
    instructor_type: str
    outline: ReportOutline
    created_at: str


class PublicReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    field: str
    topic: str
    created_at: datetime


class UsageResponse(BaseModel):
    allowed: bool
    count: int
    limit: Optional[int] = Field(None, description="None means unlimited")
    error: Optional[str] = None


class CheckoutRequest(BaseModel):
    email: Optional[str] = None
    user_id: Optional[str] = None


class CheckoutResponse(BaseModel):
    url: str


class CheckoutVerifyRequest(BaseModel):
    session_id: str = Field(..., min_length=1)


class CheckoutVerifyResponse(BaseModel):
    success: bool = True
    message: str
    user_id: str
    email: str
