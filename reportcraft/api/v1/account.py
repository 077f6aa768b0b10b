"""
Account API - daily usage status and the pro subscription checkout.

Endpoints:
  GET  /usage
  POST /checkout
  POST /checkout/verify
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from reportcraft.api.deps import DbSession, OptionalUser
from reportcraft.schemas.report import (
    CheckoutRequest,
    CheckoutResponse,
    CheckoutVerifyRequest,
    CheckoutVerifyResponse,
    UsageResponse,
)
from reportcraft.services.checkout import CheckoutClient, CheckoutError, activate_pro_plan
from reportcraft.services.usage_limit import check_usage_limit

router = APIRouter()


def get_checkout_client() -> CheckoutClient:
    return CheckoutClient()


CheckoutClientDep = Annotated[CheckoutClient, Depends(get_checkout_client)]


@router.get("/usage", response_model=UsageResponse)
async def usage(user: OptionalUser, db: DbSession):
    status_ = await check_usage_limit(db, user.email if user else None)
    return UsageResponse(
        allowed=status_.allowed,
        count=status_.count,
        limit=status_.limit,
        error=status_.error,
    )


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, user: OptionalUser, client: CheckoutClientDep):
    """Start a subscription checkout. Falls back to the signed-in user's email."""
    email = body.email or (user.email if user else None)
    user_id = body.user_id or (user.id if user else None)
    try:
        url = await client.create_checkout_session(email, user_id)
    except CheckoutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return CheckoutResponse(url=url)


@router.post("/checkout/verify", response_model=CheckoutVerifyResponse)
async def verify_checkout(
    body: CheckoutVerifyRequest,
    db: DbSession,
    client: CheckoutClientDep,
):
    """Confirm payment and move the payer to the pro plan."""
    try:
        verification = await client.verify_checkout_session(body.session_id)
    except CheckoutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    profile = await activate_pro_plan(db, verification.email, verification.user_id)
    return CheckoutVerifyResponse(
        message="Proプランへの更新が完了しました",
        user_id=str(profile.id),
        email=verification.email,
    )
