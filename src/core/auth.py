"""Authentication guard: bearer token validation for protected routes."""
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.security import InvalidTokenError, TokenIssuer
from db.session import get_async_session
from models.user import User
from schemas.current_user import AuthenticatedUser

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme. auto_error=False so a missing header gets our 401
# (HTTPBearer's own error is a 403).
security = HTTPBearer(auto_error=False)

INVALID_TOKEN_DETAIL = "Invalid or expired token"


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    """Build the token issuer from settings."""
    return TokenIssuer.from_settings(settings)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that validates the bearer token and returns the current user.

    A token whose subject no longer resolves to a user is rejected with the same
    response as a bad signature or an expired token. The resolved user is also
    stored on ``request.state.user``.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        claims = issuer.decode(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("Rejected access token: %s", e)
        raise _unauthorized(INVALID_TOKEN_DETAIL) from e

    result = await db.execute(
        select(User).where(User.id == claims.user_id, User.email == claims.email),
    )
    user = result.scalar_one_or_none()
    if user is None:
        logger.debug("Rejected access token: user %s not found", claims.user_id)
        raise _unauthorized(INVALID_TOKEN_DETAIL)

    current_user = AuthenticatedUser.from_user(user)
    request.state.user = current_user
    return current_user
