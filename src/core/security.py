"""
Password hashing and access token primitives.

Passwords are hashed with Argon2id (argon2-cffi). Access tokens are HS256 JWTs
(PyJWT) carrying the user id in ``sub`` plus the user's email, valid for a fixed
window after issuance. Tokens are not stored server side; validity is decided by
signature and expiry alone.
"""
import logging
from dataclasses import dataclass
from functools import cached_property
from datetime import UTC, datetime, timedelta

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from core.config import Settings

logger = logging.getLogger(__name__)


class Argon2PasswordHasher:
    """Hash and verify passwords with Argon2id."""

    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher()

    def hash(self, password: str) -> str:
        """Return a salted Argon2id hash of ``password``."""
        return self._hasher.hash(password)

    def verify(self, hashed_password: str, password: str) -> bool:
        """
        Check ``password`` against a stored hash.

        Returns False on mismatch and on a malformed stored hash, never raises
        for either.
        """
        try:
            return self._hasher.verify(hashed_password, password)
        except VerificationError:
            # Includes VerifyMismatchError
            return False
        except InvalidHashError:
            logger.warning("Stored password hash is malformed")
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self._hasher.hash("dummy-password-for-unknown-users")

    def verify_dummy(self, password: str) -> bool:
        """
        Run a full verification against a throwaway hash and return False.

        Used when no stored hash exists so the caller spends the same Argon2 time
        as a real mismatch.
        """
        self.verify(self._dummy_hash, password)
        return False


class InvalidTokenError(Exception):
    """Raised when an access token fails signature, expiry or claim checks."""


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims from an access token."""

    user_id: int
    email: str
    expires_at: datetime


class TokenIssuer:
    """Issue and decode signed access tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 15,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_delta = timedelta(minutes=expires_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        """Build an issuer from application settings."""
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.access_token_expire_minutes,
        )

    def issue(self, user_id: int, email: str, now: datetime | None = None) -> str:
        """Create a signed token for the given user."""
        issued_at = now or datetime.now(UTC)
        payload = {
            # PyJWT requires sub to be a string
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self._expires_delta,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            InvalidTokenError: If the signature, expiry or claims are invalid.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        email = payload.get("email")
        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid subject claim") from e
        if not isinstance(email, str) or not email:
            raise InvalidTokenError("Missing email claim")

        return TokenClaims(
            user_id=user_id,
            email=email,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
