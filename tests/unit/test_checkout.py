"""Unit tests for Stripe checkout over httpx."""

import json
import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from reportcraft.models import Plan
from reportcraft.services.checkout import (
    CheckoutClient,
    CheckoutError,
    activate_pro_plan,
    parse_user_id,
    resolve_email,
)
from reportcraft.services.usage_limit import get_plan


def _response(status_code: int, payload: dict) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = json.dumps(payload).encode()
    response.json.return_value = payload
    return response


def _mock_http(response=None, side_effect=None):
    """Patch httpx.AsyncClient in the checkout module; returns (patcher, inner client)."""
    mock_instance = AsyncMock()
    mock_instance.request = AsyncMock(return_value=response, side_effect=side_effect)
    patcher = patch("reportcraft.services.checkout.httpx.AsyncClient")
    return patcher, mock_instance


def _client() -> CheckoutClient:
    return CheckoutClient(
        secret_key="sk_test_123",
        price_id="price_123",
        api_base="https://stripe.test/v1",
        base_url="https://app.test",
    )


class TestResolveEmail:
    def test_precedence(self):
        assert resolve_email({
            "customer_details": {"email": "a@x"},
            "customer_email": "b@x",
            "metadata": {"email": "c@x"},
        }) == "a@x"
        assert resolve_email({"customer_email": "b@x", "metadata": {"email": "c@x"}}) == "b@x"
        assert resolve_email({"metadata": {"userEmail": "d@x"}}) == "d@x"
        assert resolve_email({"customer_details": None}) is None


class TestParseUserId:
    def test_valid(self):
        value = str(uuid.uuid4())
        assert str(parse_user_id(value)) == value

    def test_invalid_generates(self):
        assert isinstance(parse_user_id("not-a-uuid"), uuid.UUID)
        assert isinstance(parse_user_id(None), uuid.UUID)


class TestCreateCheckoutSession:
    """Session creation against a mocked Stripe."""

    @pytest.mark.asyncio
    async def test_returns_url(self):
        patcher, inner = _mock_http(_response(200, {"id": "cs_1", "url": "https://checkout.test/cs_1"}))
        with patcher as mock_client:
            mock_client.return_value.__aenter__ = AsyncMock(return_value=inner)
            mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
            url = await _client().create_checkout_session("a@example.com", "user-1")

        assert url == "https://checkout.test/cs_1"
        args, kwargs = inner.request.call_args
        assert args == ("POST", "https://stripe.test/v1/checkout/sessions")
        assert kwargs["headers"] == {"Authorization": "Bearer sk_test_123"}
        assert kwargs["data"]["mode"] == "subscription"
        assert kwargs["data"]["line_items[0][price]"] == "price_123"
        assert kwargs["data"]["customer_email"] == "a@example.com"
        assert kwargs["data"]["client_reference_id"] == "user-1"
        assert kwargs["data"]["success_url"] == (
            "https://app.test/checkout/success?session_id={CHECKOUT_SESSION_ID}"
        )

    @pytest.mark.asyncio
    async def test_requires_email(self):
        with pytest.raises(CheckoutError) as exc_info:
            await _client().create_checkout_session("")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_requires_secret_key(self):
        client = CheckoutClient(secret_key="", price_id="p", api_base="https://stripe.test/v1")
        with pytest.raises(CheckoutError) as exc_info:
            await client.create_checkout_session("a@example.com")
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_stripe_error(self):
        patcher, inner = _mock_http(_response(400, {"error": {"message": "No such price"}}))
        with patcher as mock_client:
            mock_client.return_value.__aenter__ = AsyncMock(return_value=inner)
            mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
            with pytest.raises(CheckoutError) as exc_info:
                await _client().create_checkout_session("a@example.com")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No such price"

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        response = MagicMock()
        response.status_code = 502
        response.content = b"<html>Bad Gateway</html>"
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
        patcher, inner = _mock_http(response)
        with patcher as mock_client:
            mock_client.return_value.__aenter__ = AsyncMock(return_value=inner)
            mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
            with pytest.raises(CheckoutError) as exc_info:
                await _client().create_checkout_session("a@example.com")

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_connection_error(self):
        patcher, inner = _mock_http(side_effect=httpx.ConnectError("refused"))
        with patcher as mock_client:
            mock_client.return_value.__aenter__ = AsyncMock(return_value=inner)
            mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
            with pytest.raises(CheckoutError) as exc_info:
                await _client().create_checkout_session("a@example.com")

        assert exc_info.value.status_code == 502


class TestVerifyCheckoutSession:
    """Payment confirmation."""

    async def _verify(self, payload: dict):
        patcher, inner = _mock_http(_response(200, payload))
        with patcher as mock_client:
            mock_client.return_value.__aenter__ = AsyncMock(return_value=inner)
            mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
            return await _client().verify_checkout_session("cs_1")

    @pytest.mark.asyncio
    async def test_paid(self):
        result = await self._verify({
            "payment_status": "paid",
            "customer_details": {"email": "a@example.com"},
            "client_reference_id": "user-1",
        })
        assert result.email == "a@example.com"
        assert result.user_id == "user-1"

    @pytest.mark.asyncio
    async def test_unpaid(self):
        with pytest.raises(CheckoutError) as exc_info:
            await self._verify({"payment_status": "unpaid", "customer_email": "a@example.com"})
        assert exc_info.value.message == "決済が完了していません"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_no_email(self):
        with pytest.raises(CheckoutError) as exc_info:
            await self._verify({"payment_status": "paid"})
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_session_id(self):
        with pytest.raises(CheckoutError):
            await _client().verify_checkout_session("")


class TestActivateProPlan:
    @pytest.mark.asyncio
    async def test_creates_profile(self, db_session):
        user_id = str(uuid.uuid4())
        profile = await activate_pro_plan(db_session, "a@example.com", user_id)
        assert str(profile.id) == user_id
        assert await get_plan(db_session, "a@example.com") == Plan.PRO.value

    @pytest.mark.asyncio
    async def test_upgrades_existing(self, db_session):
        first = await activate_pro_plan(db_session, "a@example.com")
        again = await activate_pro_plan(db_session, "a@example.com", str(uuid.uuid4()))
        assert again.id == first.id
        assert again.plan == Plan.PRO.value
