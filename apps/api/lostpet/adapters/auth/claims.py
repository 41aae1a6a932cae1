"""Claim readers for the two token variants.

Session and report tokens carry disjoint claim sets. Each reader insists on
its own required claims and refuses claims that belong to the other variant,
so a session token can never stand in for a report token or vice versa.
"""

from __future__ import annotations

from typing import Any

from lostpet.adapters.auth.base import DecodedToken, InvalidClaimsError
from lostpet.schemas.auth import VerifiedIdentity

MISSING_CLAIMS_MESSAGE = "Missing required claims"

_SESSION_ONLY_CLAIMS = frozenset({"user_id", "email"})
_REPORT_ONLY_CLAIMS = frozenset({"pet_id"})


def read_session_claims(decoded: DecodedToken) -> VerifiedIdentity:
    claims = _verified_claims(decoded)
    _reject_foreign_claims(claims, _REPORT_ONLY_CLAIMS)
    if _is_blank(claims.get("user_id")) or _is_blank(claims.get("email")):
        raise InvalidClaimsError(MISSING_CLAIMS_MESSAGE)

    email = claims["email"]
    if not isinstance(email, str):
        raise InvalidClaimsError("Claim 'email' must be a string")

    return VerifiedIdentity(kind="session", id=_identifier(claims, "user_id"), email=email)


def read_report_claims(decoded: DecodedToken) -> VerifiedIdentity:
    claims = _verified_claims(decoded)
    _reject_foreign_claims(claims, _SESSION_ONLY_CLAIMS)
    if _is_blank(claims.get("pet_id")):
        raise InvalidClaimsError(MISSING_CLAIMS_MESSAGE)

    return VerifiedIdentity(kind="report", id=_identifier(claims, "pet_id"))


def _verified_claims(decoded: DecodedToken) -> dict[str, Any]:
    if not decoded.valid or not isinstance(decoded.claims, dict):
        raise InvalidClaimsError("Token has not been verified")
    if decoded.claims.get("authorized") is not True:
        raise InvalidClaimsError(MISSING_CLAIMS_MESSAGE)
    return decoded.claims


def _reject_foreign_claims(claims: dict[str, Any], foreign: frozenset[str]) -> None:
    present = sorted(foreign.intersection(claims))
    if present:
        raise InvalidClaimsError(f"Unexpected claims for this token type: {', '.join(present)}")


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _identifier(claims: dict[str, Any], name: str) -> int:
    """Numeric claims may arrive as floats; only whole positive numbers are identifiers."""
    value = claims[name]
    if isinstance(value, bool):
        raise InvalidClaimsError(f"Claim '{name}' must be a number")
    if isinstance(value, int):
        identifier = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidClaimsError(f"Claim '{name}' must be a whole number")
        identifier = int(value)
    else:
        raise InvalidClaimsError(f"Claim '{name}' must be a number")

    if identifier <= 0:
        raise InvalidClaimsError(f"Claim '{name}' must be positive")
    return identifier


__all__ = ["MISSING_CLAIMS_MESSAGE", "read_report_claims", "read_session_claims"]
