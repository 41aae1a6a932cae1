"""Authentication schemas."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from lostpet.core.passwords import MAX_PASSWORD_BYTES

TokenKind = Literal["session", "report"]


class VerifiedIdentity(BaseModel):
    """Identifier extracted from a verified token, scoped to one request."""

    kind: TokenKind
    id: int = Field(gt=0)
    email: str | None = None


class SignInRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3, max_length=50, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=8)
    name: str = Field(default="", max_length=40)
    firstname: str = Field(default="", max_length=25)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class SessionToken(BaseModel):
    email: str
    token: str
