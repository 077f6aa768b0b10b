"""
API rate limiting - fixed windows per user (or IP).

Scopes:
- ai:  POST /outlines/* -> per user, rate_limit_ai_per_hour
- api: everything else under the v1 prefix -> per user or IP, per minute
"""

import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, Response, status
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware

from reportcraft.config import get_settings
from reportcraft.logging_config import get_logger

logger = get_logger(__name__)

AI_PATH_PREFIX = "/outlines"
AI_WINDOW_SECONDS = 3600
API_WINDOW_SECONDS = 60


def _get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _get_identity_from_jwt(request: Request) -> Optional[str]:
    """Email (or sub) from a Bearer token; None when absent or invalid."""
    auth = request.headers.get("authorization")
    if not auth or not auth.lower().startswith("bearer "):
        return None
    token = auth[7:].strip()
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.auth_secret, algorithms=[settings.auth_algorithm])
    except JWTError:
        return None
    identity = payload.get("email") or payload.get("sub")
    return str(identity) if identity else None


class InMemoryRateLimitStore:
    """Fixed-window in-memory store. Key -> (count, window_start, window_seconds)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[int, float, int]] = {}

    def check_and_incr(
        self,
        scope: str,
        identifier: str,
        limit: int,
        window_seconds: int,
    ) -> bool:
        """True if under limit (and counted); False if over limit (not counted)."""
        key = f"{scope}:{identifier}"
        now = self._clock()
        entry = self._data.get(key)
        if entry is None or now - entry[1] >= entry[2]:
            self._data[key] = (1, now, window_seconds)
            return True
        count, start, window = entry
        if count >= limit:
            return False
        self._data[key] = (count + 1, start, window)
        return True

    def cleanup_old(self) -> None:
        """Drop entries whose window has passed."""
        now = self._clock()
        expired = [k for k, (_, start, window) in self._data.items() if now - start >= window]
        for k in expired:
            self._data.pop(k, None)


# Single-process store
_store: Optional[InMemoryRateLimitStore] = None


def get_store() -> InMemoryRateLimitStore:
    global _store
    if _store is None:
        _store = InMemoryRateLimitStore()
    return _store


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests over their scope's window with 429."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return await call_next(request)

        path = request.url.path or ""
        if not path.startswith(settings.api_v1_prefix):
            return await call_next(request)

        store = get_store()
        store.cleanup_old()

        identity = _get_identity_from_jwt(request) or _get_client_ip(request)
        if path.startswith(f"{settings.api_v1_prefix}{AI_PATH_PREFIX}") and request.method == "POST":
            scope, limit, window = "ai", settings.rate_limit_ai_per_hour, AI_WINDOW_SECONDS
        else:
            scope, limit, window = "api", settings.rate_limit_api_per_minute, API_WINDOW_SECONDS

        if not store.check_and_incr(scope, identity, limit, window):
            logger.warning("Rate limit exceeded", extra={"scope": scope, "path": path})
            return Response(
                content='{"detail":"Too many requests. Please try again later."}',
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/json",
            )
        return await call_next(request)
