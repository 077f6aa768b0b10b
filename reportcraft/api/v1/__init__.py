"""
API v1 routes.
"""

from fastapi import APIRouter

from reportcraft.api.v1 import account, outlines, reports, share

router = APIRouter()

router.include_router(outlines.router, prefix="/outlines", tags=["Outlines"])
router.include_router(reports.router, prefix="/reports", tags=["Reports"])
router.include_router(share.router, prefix="/share", tags=["Share"])
router.include_router(account.router, tags=["Account"])
