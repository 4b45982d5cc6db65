"""LodgeDesk: FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from lodgedesk.api.v1.analytics import router as analytics_router
from lodgedesk.api.v1.auth import router as auth_router
from lodgedesk.api.v1.guests import router as guests_router
from lodgedesk.api.v1.notifications import router as notifications_router
from lodgedesk.api.v1.payments import router as payments_router
from lodgedesk.api.v1.rooms import router as rooms_router
from lodgedesk.api.v1.settings import router as settings_router
from lodgedesk.config import settings
from lodgedesk.database import async_session_factory, engine
from lodgedesk.errors import LodgeError
from lodgedesk.notifications.dispatcher import create_dispatcher

# Configure root logger so all lodgedesk.* loggers output to stderr.
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the notification dispatcher; on shutdown let queued SMS finish."""
    app.state.dispatcher = create_dispatcher(settings, async_session_factory)
    logger.info("SMS channel: %s", app.state.dispatcher.sender.name)
    yield
    await app.state.dispatcher.drain()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Front-desk backend for a single lodge: rooms, guests, payments and SMS notifications.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


@app.exception_handler(LodgeError)
async def lodge_error_handler(request: Request, exc: LodgeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "code": "validation_error"},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Request conflicts with existing data", "code": "conflict"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Database unavailable", "code": "dependency_error"},
    )


# Routers
app.include_router(auth_router)
app.include_router(rooms_router)
app.include_router(guests_router)
app.include_router(payments_router)
app.include_router(settings_router)
app.include_router(notifications_router)
app.include_router(analytics_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
