"""Shared fixtures for API tests."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from typing import Any

from fastapi.testclient import TestClient

from lostpet.core.config import Settings
from lostpet.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"
OTHER_SECRET = "another-signing-secret-fedcba9876543210"
FRONTEND_URL = "https://lostpet.example"

PET_BODY = {"name": "Médor", "breed": "Labrador", "sexe": "male", "birthdate": "01/01/2019"}


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "jwt_secret_key": TEST_SECRET,
        "frontend_url": FRONTEND_URL,
        "seed": False,
        "log_level": "WARNING",
        "password_hash_rounds": 4,
    }
    values.update(overrides)
    return Settings(**values)


def make_client(**overrides: Any) -> TestClient:
    return TestClient(create_app(make_settings(**overrides)))


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def sign_up(client: TestClient, email: str, password: str = "correct-horse") -> str:
    response = client.post(
        "/signup",
        json={"email": email, "password": password, "name": "Doe", "firstname": "John"},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["token"]


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def forge_token(header: dict[str, Any], claims: dict[str, Any], secret: str | None = None) -> str:
    """Build a compact JWS by hand, optionally HMAC-SHA256 signed regardless of ``alg``."""
    signing_input = f"{_b64(json.dumps(header).encode())}.{_b64(json.dumps(claims).encode())}"
    if secret is None:
        return f"{signing_input}."
    signature = hmac.new(secret.encode(), signing_input.encode(), hashlib.sha256).digest()
    return f"{signing_input}.{_b64(signature)}"
