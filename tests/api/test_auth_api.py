"""Tests for signup and signin endpoints."""
import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from conftest import bearer, signup
from core.security import TokenIssuer
from models.user import User


async def test__signup__returns_201_and_usable_token(
    client: AsyncClient, token_issuer: TokenIssuer,
) -> None:
    """Signup returns a token the guard accepts."""
    response = await client.post(
        "/auth/signup",
        json={"email": "new@example.com", "password": "123456"},
    )
    assert response.status_code == 201

    token = response.json()["access_token"]
    assert token_issuer.decode(token).email == "new@example.com"

    me = await client.get("/users/me", headers=bearer(token))
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"


async def test__signup__duplicate_email_returns_403_without_new_row(
    client: AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Signing up twice with one email fails the second time and adds no row."""
    await signup(client, "dup@example.com")

    response = await client.post(
        "/auth/signup",
        json={"email": "dup@example.com", "password": "other-password"},
    )
    assert response.status_code == 403
    assert response.json() == {"detail": "Credentials taken"}
    assert "access_token" not in response.json()

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(User))
    assert count == 1


async def test__signup__does_not_store_plaintext_password(
    client: AsyncClient,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Only an Argon2 hash of the password is persisted."""
    await signup(client, "hash@example.com", password="plaintext-pw")

    async with session_factory() as session:
        user = await session.scalar(select(User).where(User.email == "hash@example.com"))
    assert user is not None
    assert user.hashed_password != "plaintext-pw"
    assert user.hashed_password.startswith("$argon2id$")


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "123456"},
        {"email": "ok@example.com", "password": ""},
        {"email": "ok@example.com", "password": "   "},
        {"email": "ok@example.com"},
        {"password": "123456"},
        {"email": "", "password": "123456"},
    ],
)
async def test__signup__invalid_payload_returns_400(
    client: AsyncClient, payload: dict,
) -> None:
    """Malformed signup input is rejected before any user is created."""
    response = await client.post("/auth/signup", json=payload)
    assert response.status_code == 400
    assert isinstance(response.json()["detail"], list)


async def test__signin__returns_200_and_token(
    client: AsyncClient, token_issuer: TokenIssuer,
) -> None:
    """Signin with correct credentials returns a token."""
    await signup(client, "signin@example.com", password="123456")

    response = await client.post(
        "/auth/signin",
        json={"email": "signin@example.com", "password": "123456"},
    )
    assert response.status_code == 200
    claims = token_issuer.decode(response.json()["access_token"])
    assert claims.email == "signin@example.com"


async def test__signin__wrong_password_and_unknown_email_are_indistinguishable(
    client: AsyncClient,
) -> None:
    """Both failure modes return the same 403 status and body."""
    await signup(client, "enum@example.com", password="123456")

    wrong_password = await client.post(
        "/auth/signin",
        json={"email": "enum@example.com", "password": "12345"},
    )
    unknown_email = await client.post(
        "/auth/signin",
        json={"email": "nobody@example.com", "password": "123456"},
    )

    assert wrong_password.status_code == 403
    assert unknown_email.status_code == 403
    assert wrong_password.json() == unknown_email.json() == {"detail": "Credentials invalid"}


async def test__signin__invalid_payload_returns_400(client: AsyncClient) -> None:
    """Signin validates input like signup does."""
    response = await client.post(
        "/auth/signin",
        json={"email": "no-at-sign", "password": "123456"},
    )
    assert response.status_code == 400


async def test__signup_then_signin__end_to_end_scenario(client: AsyncClient) -> None:
    """Signup, signin, create a bookmark and list it."""
    signup_response = await client.post(
        "/auth/signup",
        json={"email": "a@x.com", "password": "pw1"},
    )
    assert signup_response.status_code == 201

    signin_response = await client.post(
        "/auth/signin",
        json={"email": "a@x.com", "password": "pw1"},
    )
    assert signin_response.status_code == 200
    headers = bearer(signin_response.json()["access_token"])

    create_response = await client.post(
        "/bookmarks",
        json={"title": "T", "link": "https://x.com"},
        headers=headers,
    )
    assert create_response.status_code == 201
    assert '"T"' in create_response.text

    list_response = await client.get("/bookmarks", headers=headers)
    assert list_response.status_code == 200
    assert len(list_response.json()) == 1
