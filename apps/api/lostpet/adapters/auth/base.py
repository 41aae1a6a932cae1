"""Token codec interface and authentication error taxonomy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class AuthVerificationError(Exception):
    """Raised when a credential cannot be verified or normalized."""


class MissingCredentialError(AuthVerificationError):
    """No bearer token was presented."""


class MalformedTokenError(AuthVerificationError):
    """Decode, algorithm, signature or expiry failure."""


class InvalidClaimsError(AuthVerificationError):
    """A variant-specific required claim is absent, empty or mistyped."""


class ScopeMismatchError(AuthVerificationError):
    """A valid report token was presented against a pet it was not issued for."""


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """Verified token contents; claim semantics are left to the claim readers."""

    header: dict[str, Any]
    claims: dict[str, Any] = field(default_factory=dict)
    valid: bool = False


class TokenCodec(ABC):
    """Issues and verifies the session and report token variants."""

    @abstractmethod
    def issue_session_token(self, user_id: int, email: str) -> str:
        """Return a signed session token for an authenticated owner."""

    @abstractmethod
    def issue_report_token(self, pet_id: int) -> str:
        """Return a signed report token scoped to one pet."""

    @abstractmethod
    def parse_and_verify(self, token: str) -> DecodedToken:
        """Verify algorithm, signature and expiry; raise ``MalformedTokenError`` on failure."""


__all__ = [
    "AuthVerificationError",
    "DecodedToken",
    "InvalidClaimsError",
    "MalformedTokenError",
    "MissingCredentialError",
    "ScopeMismatchError",
    "TokenCodec",
]
