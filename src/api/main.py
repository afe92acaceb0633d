"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routers import auth, bookmarks, health, users
from core.config import get_settings
from db.session import engine
from services.exceptions import (
    AccessDeniedError,
    CredentialsInvalidError,
    CredentialsTakenError,
)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    yield
    await engine.dispose()


# Fails fast on missing configuration (e.g. JWT_SECRET)
app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="Personal bookmarks with email/password authentication.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed request input as 400 instead of FastAPI's default 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(CredentialsTakenError)
@app.exception_handler(CredentialsInvalidError)
@app.exception_handler(AccessDeniedError)
async def forbidden_exception_handler(
    _request: Request,
    exc: CredentialsTakenError | CredentialsInvalidError | AccessDeniedError,
) -> JSONResponse:
    """Translate credential and ownership failures into 403 responses."""
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc)},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(bookmarks.router)
