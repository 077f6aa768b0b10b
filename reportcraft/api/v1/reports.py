"""
Saved outlines API - owner-only snapshots of generated outlines.
"""

import uuid
from typing import List

from fastapi import APIRouter, HTTPException, status

from reportcraft.api.deps import CurrentUser, DbSession
from reportcraft.schemas.report import ReportOutlineCreate, ReportOutlineResponse
from reportcraft.services.report_store import (
    get_report_outline,
    list_report_outlines,
    save_report_outline,
)

router = APIRouter()


@router.post("", response_model=ReportOutlineResponse, status_code=status.HTTP_201_CREATED)
async def save_report(body: ReportOutlineCreate, user: CurrentUser, db: DbSession):
    return await save_report_outline(
        db,
        user.email,
        field=body.field.value,
        topic=body.topic,
        word_count=body.word_count,
        instructor_type=body.instructor_type.value,
        outline=body.outline,
    )


@router.get("", response_model=List[ReportOutlineResponse])
async def list_reports(user: CurrentUser, db: DbSession):
    return await list_report_outlines(db, user.email)


@router.get("/{report_id}", response_model=ReportOutlineResponse)
async def get_report(report_id: uuid.UUID, user: CurrentUser, db: DbSession):
    record = await get_report_outline(db, report_id, user.email)
    if not record:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Report not found")
    return record
