"""Token codec, claim readers and report scope binding."""

from .base import (
    AuthVerificationError,
    DecodedToken,
    InvalidClaimsError,
    MalformedTokenError,
    MissingCredentialError,
    ScopeMismatchError,
    TokenCodec,
)
from .claims import read_report_claims, read_session_claims
from .jwt_codec import HmacJwtCodec
from .scope import ReportScopeBinder

__all__ = [
    "AuthVerificationError",
    "DecodedToken",
    "HmacJwtCodec",
    "InvalidClaimsError",
    "MalformedTokenError",
    "MissingCredentialError",
    "ReportScopeBinder",
    "ScopeMismatchError",
    "TokenCodec",
    "read_report_claims",
    "read_session_claims",
]
