"""HMAC-signed JWT codec."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import logging
from typing import Any, Callable

import jwt

from lostpet.adapters.auth.base import DecodedToken, MalformedTokenError, TokenCodec

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM = "HS256"
# Fixed by the verifier; the token's own header is never trusted to pick one.
ACCEPTED_ALGORITHMS: tuple[str, ...] = ("HS256", "HS384", "HS512")
DEFAULT_TOKEN_TTL = timedelta(minutes=60)


class HmacJwtCodec(TokenCodec):
    """Signs and verifies tokens with a process-wide symmetric secret."""

    def __init__(
        self,
        secret: bytes,
        *,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret:
            raise ValueError("Signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue_session_token(self, user_id: int, email: str) -> str:
        return self._sign({"authorized": True, "user_id": user_id, "email": email})

    def issue_report_token(self, pet_id: int) -> str:
        return self._sign({"authorized": True, "pet_id": pet_id})

    def parse_and_verify(self, token: str) -> DecodedToken:
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(f"token is malformed: {exc}") from exc

        algorithm = header.get("alg")
        if algorithm not in ACCEPTED_ALGORITHMS:
            logger.warning("token.rejected reason=unexpected_signing_method alg=%s", algorithm)
            raise MalformedTokenError(f"unexpected signing method: {algorithm}")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=list(ACCEPTED_ALGORITHMS),
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise MalformedTokenError("token is expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise MalformedTokenError("signature is invalid") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(f"token is invalid: {exc}") from exc

        return DecodedToken(header=header, claims=claims, valid=True)

    def _sign(self, claims: dict[str, Any]) -> str:
        payload = dict(claims)
        payload["exp"] = self._clock() + self._ttl
        return jwt.encode(payload, self._secret, algorithm=SIGNING_ALGORITHM)


__all__ = ["ACCEPTED_ALGORITHMS", "DEFAULT_TOKEN_TTL", "HmacJwtCodec", "SIGNING_ALGORITHM"]
