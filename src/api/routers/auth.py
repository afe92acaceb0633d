"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_password_hasher, get_token_issuer
from core.security import Argon2PasswordHasher, TokenIssuer
from schemas.auth import AuthRequest, TokenResponse
from services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    hasher: Argon2PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenResponse:
    """Register a new user and return an access token."""
    token = await auth_service.signup(db, data, hasher, issuer)
    return TokenResponse(access_token=token)


@router.post(
    "/signin",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
)
async def signin(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    hasher: Argon2PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenResponse:
    """
    Exchange email and password for an access token.

    Unknown email and wrong password return the same 403 response.
    """
    token = await auth_service.signin(db, data, hasher, issuer)
    return TokenResponse(access_token=token)
