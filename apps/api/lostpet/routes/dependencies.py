"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated, Callable
from uuid import uuid4

from fastapi import Depends, Path, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lostpet.adapters.auth import (
    AuthVerificationError,
    DecodedToken,
    InvalidClaimsError,
    MalformedTokenError,
    MissingCredentialError,
    ReportScopeBinder,
    ScopeMismatchError,
    TokenCodec,
    read_report_claims,
    read_session_claims,
)
from lostpet.core.config import Settings
from lostpet.core.logging_safety import safe_log_identifier
from lostpet.core.passwords import PasswordHasher
from lostpet.errors import ApiError
from lostpet.repositories.memory import InMemoryStore, PetRecord
from lostpet.schemas.auth import VerifiedIdentity
from lostpet.services.pets import PetService
from lostpet.services.reports import ReportService
from lostpet.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)

AUTH_FIELD = "jwt"
MISSING_TOKEN_MESSAGE = "Missing authentication token"
INVALID_TOKEN_MESSAGE = "Invalid authentication token"

ClaimReader = Callable[[DecodedToken], VerifiedIdentity]

_REJECTION_REASONS: dict[type[AuthVerificationError], str] = {
    MissingCredentialError: "missing_bearer",
    MalformedTokenError: "token_verification_failed",
    InvalidClaimsError: "invalid_claims",
}

# status and fixed message per auth failure; None keeps the exception text
AUTH_ERROR_RESPONSES: dict[type[AuthVerificationError], tuple[int, str | None]] = {
    MissingCredentialError: (401, MISSING_TOKEN_MESSAGE),
    MalformedTokenError: (400, None),
    InvalidClaimsError: (400, None),
    ScopeMismatchError: (400, INVALID_TOKEN_MESSAGE),
}


def auth_error_response(exc: AuthVerificationError) -> ApiError:
    """Map an auth failure to the ``jwt`` field error sent to the client."""
    for error_type, (status_code, message) in AUTH_ERROR_RESPONSES.items():
        if isinstance(exc, error_type):
            message = message or str(exc) or INVALID_TOKEN_MESSAGE
            return ApiError(status_code=status_code, field=AUTH_FIELD, message=message)
    return ApiError(status_code=400, field=AUTH_FIELD, message=INVALID_TOKEN_MESSAGE)


def extract_bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise MissingCredentialError(MISSING_TOKEN_MESSAGE)
    token = credentials.credentials.strip()
    if not token:
        raise MissingCredentialError(MISSING_TOKEN_MESSAGE)
    return token


def get_request_id(request: Request) -> str:
    existing = getattr(request.state, "request_id", None)
    if isinstance(existing, str) and existing:
        return existing

    request_id = request.headers.get("X-Request-ID") or f"req-{uuid4()}"
    request.state.request_id = request_id
    return request_id


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def _authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    codec: TokenCodec,
    read_claims: ClaimReader,
) -> VerifiedIdentity:
    """Extract, verify and normalize the bearer token exactly once per request."""
    safe_request_id = safe_log_identifier(get_request_id(request), prefix="rid")
    try:
        token = extract_bearer_token(credentials)
        decoded = codec.parse_and_verify(token)
        if not decoded.valid:
            raise MalformedTokenError(INVALID_TOKEN_MESSAGE)
        identity = read_claims(decoded)
    except AuthVerificationError as exc:
        logger.warning(
            "auth.rejected request_id=%s method=%s path=%s reason=%s",
            safe_request_id,
            request.method,
            request.url.path,
            _REJECTION_REASONS.get(type(exc), "unknown"),
        )
        raise auth_error_response(exc) from exc

    logger.info(
        "auth.accepted request_id=%s method=%s path=%s kind=%s subject=%s",
        safe_request_id,
        request.method,
        request.url.path,
        identity.kind,
        safe_log_identifier(identity.id, prefix="sub"),
    )
    request.state.identity = identity
    return identity


async def get_session_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> VerifiedIdentity:
    """Gate for owner routes: requires a session token."""
    return _authenticate(request, credentials, codec, read_session_claims)


async def get_report_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> VerifiedIdentity:
    """Gate for the anonymous report route: requires a report token."""
    return _authenticate(request, credentials, codec, read_report_claims)


def get_scope_binder(store: Annotated[InMemoryStore, Depends(get_store)]) -> ReportScopeBinder:
    return ReportScopeBinder(store)


async def get_scoped_pet(
    slug: Annotated[str, Path()],
    identity: Annotated[VerifiedIdentity, Depends(get_report_identity)],
    binder: Annotated[ReportScopeBinder, Depends(get_scope_binder)],
) -> PetRecord:
    try:
        return binder.check_scope(identity, slug)
    except ScopeMismatchError as exc:
        raise auth_error_response(exc) from exc


def get_user_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(store, codec, hasher)


def get_pet_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> PetService:
    return PetService(store, codec, settings.frontend_url)


def get_report_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ReportService:
    return ReportService(store)
