"""FastAPI application entrypoint."""

from __future__ import annotations

from datetime import timedelta
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lostpet.adapters.auth import HmacJwtCodec
from lostpet.core.config import Settings, get_settings
from lostpet.core.logging_safety import configure_logging, safe_log_identifier
from lostpet.core.passwords import PasswordHasher
from lostpet.core.secrets import get_signing_secret
from lostpet.errors import ApiError
from lostpet.repositories.memory import InMemoryStore
from lostpet.routes import health_router, pets_router, public_router, users_router
from lostpet.routes.dependencies import get_request_id
from lostpet.schemas.error import ErrorResponse, FieldError
from lostpet.services.pets import PetService
from lostpet.services.seed import seed_demo_data

logger = logging.getLogger(__name__)


def _envelope(status_code: int, errors: list[FieldError]) -> JSONResponse:
    payload = ErrorResponse(error=errors, status=status_code)
    return JSONResponse(status_code=status_code, content=payload.model_dump())


def _validation_field(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "-"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API; refuses to start without a signing secret."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Lost Pet Registry API", version="1.0.0")
    app.state.settings = settings
    app.state.store = InMemoryStore()
    app.state.hasher = PasswordHasher(rounds=settings.password_hash_rounds)
    app.state.codec = HmacJwtCodec(
        get_signing_secret(settings),
        ttl=timedelta(minutes=settings.token_ttl_minutes),
    )

    if settings.seed:
        seeded = seed_demo_data(
            app.state.store,
            app.state.hasher,
            PetService(app.state.store, app.state.codec, settings.frontend_url),
        )
        logger.info("seed.finished applied=%s", seeded)

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if any(error.get("type") == "json_invalid" for error in errors):
            return _envelope(400, [FieldError(field="-", error="Request body is not valid JSON")])
        field_errors = [
            FieldError(field=_validation_field(tuple(error.get("loc", ()))), error=error.get("msg", "Invalid value"))
            for error in errors
        ]
        return _envelope(422, field_errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_, exc: StarletteHTTPException) -> JSONResponse:
        return _envelope(exc.status_code, [FieldError(field="-", error=str(exc.detail))])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = get_request_id(request)
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "http.request request_id=%s method=%s path=%s status=%s duration_ms=%.1f ip=%s forwarded_for=%s",
            safe_log_identifier(request_id, prefix="rid"),
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            request.client.host if request.client else "-",
            request.headers.get("X-Forwarded-For", "-"),
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(pets_router)
    app.include_router(public_router)

    return app
