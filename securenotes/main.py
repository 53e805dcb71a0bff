"""FastAPI application entrypoint. No business logic; only wiring, error mapping and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from securenotes.api import router as api_router
from securenotes.core.config import Settings, get_settings
from securenotes.core.errors import SecureNotesError
from securenotes.core.logging import configure_logging
from securenotes.services.container import build_services

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {field} {msg}" if field else f"Invalid request: {msg}"


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves as {"message": ...}; internal detail stays in the logs."""

    @app.exception_handler(SecureNotesError)
    async def handle_app_error(request: Request, exc: SecureNotesError) -> JSONResponse:
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                extra={"error_type": type(exc).__name__},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _validation_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)
    services = build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.DB_AUTO_CREATE_TABLES:
            services.database.create_tables()
        services.audit.start()
        logger.info("SecureNotes API started", extra={"environment": settings.APP_ENV})
        yield
        services.audit.stop()
        services.database.dispose()

    app = FastAPI(
        title="SecureNotes API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "SecureNotes API"}

    return app


app = create_app()
