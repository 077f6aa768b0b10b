"""
FastAPI dependencies for authentication, database sessions and the share store.

Sign-in itself is handled by the auth provider (magic links); the API only
verifies the provider's HS256 session token, which carries `sub` and `email`.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from reportcraft.config import get_settings
from reportcraft.database import get_db
from reportcraft.logging_config import user_email_var
from reportcraft.services.share_store import InMemoryShareStore, ShareStore


# Security scheme
security = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


class AuthenticatedUser(BaseModel):
    """Identity asserted by the auth provider's token."""

    id: Optional[str] = None
    email: str


def verify_session_token(token: str) -> Optional[AuthenticatedUser]:
    """
    Decode a provider session token.

    Returns:
        AuthenticatedUser if the token is valid and carries an email, None otherwise
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret,
            algorithms=[settings.auth_algorithm],
        )
    except JWTError:
        return None

    email = payload.get("email")
    if not email:
        return None
    sub = payload.get("sub")
    return AuthenticatedUser(id=str(sub) if sub else None, email=email)


async def get_current_user_optional(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Optional[AuthenticatedUser]:
    """Get current user if authenticated, None otherwise."""
    if not credentials:
        return None
    user = verify_session_token(credentials.credentials)
    if user:
        user_email_var.set(user.email)
    return user


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> AuthenticatedUser:
    """Get current authenticated user or raise 401."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="ログインが必要です",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = verify_session_token(credentials.credentials)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_email_var.set(user.email)
    return user


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[AuthenticatedUser], Depends(get_current_user_optional)]


def get_share_store(request: Request) -> ShareStore:
    """Share store owned by the application (created on first use)."""
    store = getattr(request.app.state, "share_store", None)
    if store is None:
        store = InMemoryShareStore()
        request.app.state.share_store = store
    return store


ShareStoreDep = Annotated[ShareStore, Depends(get_share_store)]
