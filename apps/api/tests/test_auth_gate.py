"""Bearer gate tests for owner and finder routes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import unittest

from fastapi import Request
from fastapi.security import HTTPAuthorizationCredentials

from lostpet.adapters.auth import (
    HmacJwtCodec,
    InvalidClaimsError,
    MalformedTokenError,
    MissingCredentialError,
    ScopeMismatchError,
)
from lostpet.routes.dependencies import auth_error_response, extract_bearer_token, get_user_service
from lostpet.schemas.user import User

from helpers import OTHER_SECRET, PET_BODY, TEST_SECRET, bearer, forge_token, make_client, sign_up


class _CapturingUserService:
    def __init__(self) -> None:
        self.calls: list[int] = []

    def get_user(self, *, user_id: int) -> User:
        self.calls.append(user_id)
        return User(id=user_id, email="john@doe.org", name="Doe", firstname="John")


class SessionGateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client()
        self.app = self.client.app
        self.token = sign_up(self.client, "john@doe.org")

    def _assert_jwt_error(self, response, status_code: int) -> str:
        self.assertEqual(response.status_code, status_code)
        body = response.json()
        self.assertEqual(body["status"], status_code)
        self.assertEqual(len(body["error"]), 1)
        self.assertEqual(body["error"][0]["field"], "jwt")
        return body["error"][0]["error"]

    def test_missing_authorization_header_returns_401_naming_jwt(self) -> None:
        response = self.client.get("/user/me")

        message = self._assert_jwt_error(response, 401)
        self.assertEqual(message, "Missing authentication token")

    def test_header_without_bearer_prefix_is_a_missing_credential(self) -> None:
        for header in ("Basic dXNlcjpwYXNz", "Bearer", self.token):
            with self.subTest(header=header):
                response = self.client.get("/user/me", headers={"Authorization": header})
                self._assert_jwt_error(response, 401)

    def test_unsigned_and_non_hmac_tokens_return_400_naming_jwt(self) -> None:
        claims = {"authorized": True, "user_id": 1, "email": "john@doe.org", "exp": 4_102_444_800}
        tokens = {
            "none": forge_token({"alg": "none", "typ": "JWT"}, claims),
            "RS256": forge_token({"alg": "RS256", "typ": "JWT"}, claims, secret=TEST_SECRET),
        }
        for alg, token in tokens.items():
            with self.subTest(alg=alg):
                response = self.client.get("/user/me", headers=bearer(token))

                message = self._assert_jwt_error(response, 400)
                self.assertIn("unexpected signing method", message)

    def test_garbage_bearer_token_returns_400_decode_message(self) -> None:
        response = self.client.get("/user/me", headers=bearer("garbage"))

        message = self._assert_jwt_error(response, 400)
        self.assertIn("malformed", message)

    def test_token_signed_with_other_secret_returns_400(self) -> None:
        forged = HmacJwtCodec(OTHER_SECRET.encode()).issue_session_token(1, "john@doe.org")

        response = self.client.get("/user/me", headers=bearer(forged))

        message = self._assert_jwt_error(response, 400)
        self.assertIn("signature", message)

    def test_expired_token_returns_400(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        expired = HmacJwtCodec(TEST_SECRET.encode(), clock=lambda: past).issue_session_token(1, "john@doe.org")

        response = self.client.get("/user/me", headers=bearer(expired))

        message = self._assert_jwt_error(response, 400)
        self.assertIn("expired", message)

    def test_report_token_is_rejected_on_owner_route(self) -> None:
        report_token = self.app.state.codec.issue_report_token(1)

        response = self.client.get("/pets", headers=bearer(report_token))

        self._assert_jwt_error(response, 400)

    def test_rejected_token_causes_no_write_side_effect(self) -> None:
        before = self.app.state.store.pet_write_count

        response = self.client.post("/pets", headers=bearer("garbage"), json=PET_BODY)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.app.state.store.pet_write_count, before)

    def test_valid_session_token_resolves_user_id_for_handler(self) -> None:
        capturing_service = _CapturingUserService()
        self.app.dependency_overrides[get_user_service] = lambda: capturing_service

        response = self.client.get("/user/me", headers=bearer(self.token))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(capturing_service.calls, [1])

    def test_identity_is_attached_to_request_state(self) -> None:
        capturing_service = _CapturingUserService()
        observed: dict[str, object] = {}

        def _override_user_service(request: Request) -> _CapturingUserService:
            observed["identity"] = request.state.identity
            return capturing_service

        self.app.dependency_overrides[get_user_service] = _override_user_service

        response = self.client.get("/user/me", headers=bearer(self.token))

        self.assertEqual(response.status_code, 200)
        identity = observed["identity"]
        self.assertEqual(identity.kind, "session")
        self.assertEqual(identity.id, 1)
        self.assertEqual(identity.email, "john@doe.org")

    def test_request_id_header_is_echoed(self) -> None:
        response = self.client.get("/user/me", headers={"X-Request-ID": "req-fixed", **bearer(self.token)})

        self.assertEqual(response.headers["X-Request-ID"], "req-fixed")

    def test_rejections_are_logged_without_raw_token(self) -> None:
        with self.assertLogs("lostpet.routes.dependencies", level="WARNING") as logs:
            self.client.get("/user/me", headers=bearer("garbage"))

        self.assertTrue(any("reason=token_verification_failed" in line for line in logs.output))
        self.assertFalse(any("garbage" in line for line in logs.output))


class AuthErrorMappingTests(unittest.TestCase):
    def test_absent_or_non_bearer_credentials_raise_missing_credential(self) -> None:
        cases = (
            None,
            HTTPAuthorizationCredentials(scheme="Basic", credentials="dXNlcjpwYXNz"),
            HTTPAuthorizationCredentials(scheme="Bearer", credentials="   "),
        )
        for credentials in cases:
            with self.subTest(credentials=credentials):
                with self.assertRaises(MissingCredentialError):
                    extract_bearer_token(credentials)

    def test_bearer_token_is_returned_trimmed(self) -> None:
        credentials = HTTPAuthorizationCredentials(scheme="bearer", credentials=" abc.def.ghi ")

        self.assertEqual(extract_bearer_token(credentials), "abc.def.ghi")

    def test_each_auth_error_maps_to_a_jwt_field_error(self) -> None:
        cases = (
            (MissingCredentialError("ignored"), 401, "Missing authentication token"),
            (MalformedTokenError("token is expired"), 400, "token is expired"),
            (InvalidClaimsError("Missing required claims"), 400, "Missing required claims"),
            (ScopeMismatchError("pet 2 != pet 1"), 400, "Invalid authentication token"),
        )
        for exc, status_code, message in cases:
            with self.subTest(error=type(exc).__name__):
                error = auth_error_response(exc)

                self.assertEqual(error.status_code, status_code)
                self.assertEqual(error.payload.model_dump(), {
                    "error": [{"field": "jwt", "error": message}],
                    "status": status_code,
                })


class ReportGateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client()
        self.app = self.client.app
        self.session_token = sign_up(self.client, "john@doe.org")
        created = self.client.post("/pets", headers=bearer(self.session_token), json=PET_BODY)
        self.slug = created.json()["data"]["slug"]

    def test_report_without_token_returns_401(self) -> None:
        response = self.client.post(f"/pet/{self.slug}/report", json={"city": "Lyon"})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["error"][0]["field"], "jwt")
        self.assertEqual(self.app.state.store.report_write_count, 0)

    def test_session_token_is_rejected_on_report_route(self) -> None:
        response = self.client.post(
            f"/pet/{self.slug}/report",
            headers=bearer(self.session_token),
            json={"city": "Lyon"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"][0]["field"], "jwt")
        self.assertEqual(self.app.state.store.report_write_count, 0)


if __name__ == "__main__":
    unittest.main()
