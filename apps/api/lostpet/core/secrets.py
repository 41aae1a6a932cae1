"""Signing secret resolution."""

from __future__ import annotations

import logging

from lostpet.core.config import Settings

logger = logging.getLogger(__name__)


class MissingSigningSecretError(RuntimeError):
    """Raised at startup when no token signing secret is configured."""


def get_signing_secret(settings: Settings) -> bytes:
    """Return the process-wide HMAC key, refusing to continue without one."""
    secret = settings.jwt_secret_key or ""
    if not secret.strip():
        logger.critical(
            "startup.aborted reason=missing_signing_secret setting=LOSTPET_JWT_SECRET_KEY",
        )
        raise MissingSigningSecretError(
            "You must define 'LOSTPET_JWT_SECRET_KEY' for the token authentication system"
        )
    return secret.encode("utf-8")


__all__ = ["MissingSigningSecretError", "get_signing_secret"]
