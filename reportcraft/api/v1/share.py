"""
Share API - share links for outlines and the public gallery.
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, HTTPException, status

from reportcraft.api.deps import DbSession, ShareStoreDep
from reportcraft.config import get_settings
from reportcraft.logging_config import get_logger
from reportcraft.schemas.report import (
    PublicReportResponse,
    ShareCreate,
    ShareCreateResponse,
    ShareDataResponse,
)
from reportcraft.services.report_store import (
    get_shared_report,
    list_public_reports,
    publish_shared_report,
)
from reportcraft.services.share_store import get_share_data, save_share_data

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=ShareCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_share(body: ShareCreate, store: ShareStoreDep, db: DbSession):
    """Create a share link. Public shares are also persisted for the gallery."""
    data = {
        "field": body.field.value,
        "question": body.question,
        "word_count": body.word_count,
        "instructor_type": body.instructor_type.value,
        "outline": body.outline.model_dump(),
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    report_id = save_share_data(store, data)
    if body.is_public:
        await publish_shared_report(db, report_id, data, is_public=True)

    settings = get_settings()
    return ShareCreateResponse(
        report_id=report_id,
        url=f"{settings.base_url.rstrip('/')}/share/{report_id}",
    )


@router.get("/public", response_model=List[PublicReportResponse])
async def public_reports(db: DbSession):
    settings = get_settings()
    return await list_public_reports(db, limit=settings.public_gallery_size)


@router.get("/{report_id}", response_model=ShareDataResponse)
async def get_share(report_id: str, store: ShareStoreDep, db: DbSession):
    data = get_share_data(store, report_id)
    if data is None:
        data = await get_shared_report(db, report_id)
    if data is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Shared report not found")
    return data
