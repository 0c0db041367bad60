"""
AuthVault Backend - FastAPI Application

Registration, login and two-step password recovery backed by MongoDB.

Run with:  uvicorn authvault.main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from authvault.config import Settings, get_settings
from authvault.core.errors import AuthError, ServiceUnavailableError, ValidationFailedError
from authvault.core.security import PasswordHasher, SessionIssuer
from authvault.database.connections import MongoConnection
from authvault.models.identity import utc_now
from authvault.repositories.credential_store import CredentialStore
from authvault.routers import auth, health
from authvault.services.notifier import LoggingNotifier, RecoveryNotifier

logger = logging.getLogger("authvault")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Open the MongoDB connection
    - Create indexes

    Shutdown:
    - Close the MongoDB connection
    """
    logger.info("Starting up AuthVault Backend...")
    connection: MongoConnection = app.state.connection

    await connection.open()
    try:
        await CredentialStore(connection.database).ensure_indexes()
        logger.info("Database indexes created")
    except ServiceUnavailableError as e:
        logger.warning("Database initialization warning: %s", e.detail)

    yield

    logger.info("Shutting down AuthVault Backend...")
    await connection.close()


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Render core failures as {"error_code", "detail"}."""
    content = exc.to_dict()
    if isinstance(exc, ServiceUnavailableError):
        logger.error("Service unavailable on %s %s", request.method, request.url.path)
        if request.app.state.settings.debug and exc.detail:
            content["debug"] = exc.detail

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed requests as ValidationFailed."""
    error = ValidationFailedError()
    content = error.to_dict()
    content["errors"] = jsonable_encoder(exc.errors(), exclude={"input", "ctx"})
    return JSONResponse(status_code=error.status_code, content=content)


def create_app(
    settings: Optional[Settings] = None,
    connection: Optional[MongoConnection] = None,
    notifier: Optional[RecoveryNotifier] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """
    Build the FastAPI application.

    Every collaborator is created here and stored on ``app.state``; routes
    receive them through dependencies. Tests pass their own connection,
    notifier or clock.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="AuthVault API",
        description="""
## Credential and Password Recovery API

### Features
- **Registration**: Create an account with name, email and password
- **Login**: Exchange credentials for a JWT bearer token
- **Password recovery**: forgot-password -> verify-otp -> reset-password

### Authentication
Protected endpoints require `Authorization: Bearer <token>`.
Obtain a token via `POST /auth/login`.
        """,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.connection = connection or MongoConnection.from_settings(settings)
    app.state.hasher = PasswordHasher.from_settings(settings)
    app.state.issuer = SessionIssuer.from_settings(settings)
    app.state.notifier = notifier or LoggingNotifier()
    app.state.clock = clock

    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "AuthVault API",
            "version": "0.1.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()
