"""Service layer for signup and signin."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.security import Argon2PasswordHasher, TokenIssuer
from models.user import User
from schemas.auth import AuthRequest
from services.exceptions import CredentialsInvalidError, CredentialsTakenError

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL)
UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an IntegrityError comes from a unique constraint."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    # Drivers without a SQLSTATE (SQLite) report it only in the message
    message = str(orig)
    return (
        "UNIQUE constraint failed" in message
        or "duplicate key value violates unique constraint" in message
    )


async def signup(
    db: AsyncSession,
    data: AuthRequest,
    hasher: Argon2PasswordHasher,
    issuer: TokenIssuer,
) -> str:
    """
    Register a new user and return an access token.

    Raises:
        CredentialsTakenError: If the email is already registered.

    Any other database error propagates unchanged.
    """
    user = User(email=data.email, hashed_password=hasher.hash(data.password))
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            logger.info("Signup rejected: email already registered")
            raise CredentialsTakenError() from e
        raise

    logger.info("User %s signed up", user.id)
    return issuer.issue(user.id, user.email)


async def signin(
    db: AsyncSession,
    data: AuthRequest,
    hasher: Argon2PasswordHasher,
    issuer: TokenIssuer,
) -> str:
    """
    Authenticate a user by email and password and return an access token.

    Raises:
        CredentialsInvalidError: If the email is unknown or the password is wrong.
    """
    result = await db.execute(select(User).where(User.email == data.email))
    user = result.scalar_one_or_none()

    if user is None:
        hasher.verify_dummy(data.password)
        logger.info("Signin rejected: unknown email")
        raise CredentialsInvalidError()

    if not hasher.verify(user.hashed_password, data.password):
        logger.info("Signin rejected for user %s: wrong password", user.id)
        raise CredentialsInvalidError()

    logger.info("User %s signed in", user.id)
    return issuer.issue(user.id, user.email)
