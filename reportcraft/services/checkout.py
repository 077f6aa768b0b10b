"""
Subscription checkout - Stripe Checkout through its REST API.

create_checkout_session starts a subscription checkout for a user;
verify_checkout_session confirms payment after the redirect, and
activate_pro_plan upgrades the user's profile.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reportcraft.config import get_settings
from reportcraft.logging_config import get_logger
from reportcraft.models import Plan, Profile

logger = get_logger(__name__)

HTTP_TIMEOUT = 15.0


class CheckoutError(Exception):
    """Checkout failure carrying the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class CheckoutVerification:
    email: str
    user_id: Optional[str]
    payment_status: str


def resolve_email(session: Dict[str, Any]) -> Optional[str]:
    """customer_details.email, then customer_email, then metadata."""
    details = session.get("customer_details") or {}
    metadata = session.get("metadata") or {}
    return (
        details.get("email")
        or session.get("customer_email")
        or metadata.get("email")
        or metadata.get("userEmail")
    )


def parse_user_id(value: Optional[str]) -> uuid.UUID:
    """Reuse a valid UUID, otherwise generate a new one."""
    if value:
        try:
            return uuid.UUID(str(value))
        except ValueError:
            pass
    return uuid.uuid4()


class CheckoutClient:
    """Thin Stripe Checkout client over httpx."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        price_id: Optional[str] = None,
        api_base: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key if secret_key is not None else settings.stripe_secret_key
        self.price_id = price_id if price_id is not None else settings.stripe_price_id
        self.api_base = (api_base or settings.stripe_api_base).rstrip("/")
        self.base_url = (base_url or settings.base_url).rstrip("/")

    def _require_key(self) -> None:
        if not self.secret_key:
            raise CheckoutError("STRIPE_SECRET_KEY is not set", status_code=500)

    async def _request(self, method: str, path: str, data: Optional[dict] = None) -> dict:
        self._require_key()
        url = f"{self.api_base}{path}"
        try:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
                response = await client.request(
                    method,
                    url,
                    data=data,
                    headers={"Authorization": f"Bearer {self.secret_key}"},
                )
        except httpx.HTTPError as e:
            logger.error("Stripe request failed: %s %s: %s", method, path, e)
            raise CheckoutError("決済サービスに接続できませんでした", status_code=502) from e

        try:
            payload = response.json() if response.content else {}
        except ValueError as e:
            logger.error("Non-JSON Stripe response %s on %s", response.status_code, path)
            raise CheckoutError("決済サービスから不正な応答がありました", status_code=502) from e
        if response.status_code >= 400:
            message = (payload.get("error") or {}).get("message") or "Stripe error"
            logger.error("Stripe error %s on %s: %s", response.status_code, path, message)
            status_code = 400 if response.status_code < 500 else 502
            raise CheckoutError(message, status_code=status_code)
        return payload

    async def create_checkout_session(self, email: str, user_id: Optional[str] = None) -> str:
        """Start a subscription checkout and return the hosted checkout URL."""
        if not email:
            raise CheckoutError("ログインが必要です（メールアドレス不明）", status_code=401)

        data = {
            "payment_method_types[0]": "card",
            "line_items[0][price]": self.price_id,
            "line_items[0][quantity]": "1",
            "mode": "subscription",
            "success_url": f"{self.base_url}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{self.base_url}/",
            "customer_email": email,
            "metadata[email]": email,
        }
        if user_id:
            data["client_reference_id"] = user_id
            data["metadata[userId]"] = user_id

        session = await self._request("POST", "/checkout/sessions", data)
        logger.info("Created checkout session %s", session.get("id"))
        return session["url"]

    async def verify_checkout_session(self, session_id: str) -> CheckoutVerification:
        """Confirm that a checkout session was paid and resolve the payer's email."""
        if not session_id:
            raise CheckoutError("session_idが必要です", status_code=400)

        session = await self._request("GET", f"/checkout/sessions/{session_id}")
        payment_status = session.get("payment_status") or ""
        if payment_status != "paid":
            logger.warning("Checkout %s not paid: %s", session_id, payment_status)
            raise CheckoutError("決済が完了していません", status_code=400)

        email = resolve_email(session)
        if not email:
            raise CheckoutError("メールアドレスが取得できませんでした", status_code=400)

        metadata = session.get("metadata") or {}
        return CheckoutVerification(
            email=email,
            user_id=session.get("client_reference_id") or metadata.get("userId"),
            payment_status=payment_status,
        )


async def activate_pro_plan(db: AsyncSession, email: str, user_id: Optional[str] = None) -> Profile:
    """Upsert the user's profile onto the pro plan."""
    result = await db.execute(select(Profile).where(Profile.email == email))
    profile = result.scalar_one_or_none()
    if profile:
        profile.plan = Plan.PRO.value
    else:
        profile = Profile(id=parse_user_id(user_id), email=email, plan=Plan.PRO.value)
        db.add(profile)
    await db.flush()
    logger.info("Activated pro plan for %s", email)
    return profile
