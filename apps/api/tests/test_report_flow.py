"""Anonymous finder flow: public pet page, scoped report token, report submission."""

from __future__ import annotations

import unittest

from lostpet.adapters.auth.claims import read_report_claims

from helpers import PET_BODY, bearer, make_client, sign_up

REPORT_BODY = {
    "phone_number": "+33600000000",
    "city": "Lyon",
    "where": "Parc de la Tête d'Or",
    "has_pet": True,
    "additional": "Friendly, wearing a red collar",
}


class ReportFlowApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = make_client()
        self.app = self.client.app
        self.store = self.app.state.store
        self.owner = bearer(sign_up(self.client, "owner@doe.org"))
        self.pet_a = self._create_pet("Médor")
        self.pet_b = self._create_pet("Pyla")

    def _create_pet(self, name: str) -> dict:
        response = self.client.post("/pets", headers=self.owner, json={**PET_BODY, "name": name})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def _report_token(self, slug: str) -> str:
        response = self.client.get(f"/pet/{slug}")
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["data"]["token"]

    def test_public_page_returns_pet_and_report_token_scoped_to_it(self) -> None:
        response = self.client.get(f"/pet/{self.pet_a['slug']}")

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["pet"]["name"], "Médor")
        self.assertNotIn("user_id", data["pet"])
        identity = read_report_claims(self.app.state.codec.parse_and_verify(data["token"]))
        self.assertEqual(identity.id, self.pet_a["id"])

    def test_public_page_for_unknown_slug_returns_404(self) -> None:
        response = self.client.get("/pet/00000000-0000-4000-8000-000000000000")

        self.assertEqual(response.status_code, 404)

    def test_report_with_scoped_token_is_stored(self) -> None:
        token = self._report_token(self.pet_a["slug"])

        response = self.client.post(f"/pet/{self.pet_a['slug']}/report", headers=bearer(token), json=REPORT_BODY)

        self.assertEqual(response.status_code, 201, response.text)
        report = response.json()["data"]
        self.assertEqual(report["pet_id"], self.pet_a["id"])
        self.assertEqual(report["city"], "Lyon")
        self.assertEqual(self.store.report_write_count, 1)

    def test_token_replayed_against_other_pet_is_rejected(self) -> None:
        token = self._report_token(self.pet_a["slug"])

        response = self.client.post(f"/pet/{self.pet_b['slug']}/report", headers=bearer(token), json=REPORT_BODY)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"error": [{"field": "jwt", "error": "Invalid authentication token"}], "status": 400},
        )
        self.assertEqual(self.store.report_write_count, 0)

    def test_garbage_report_token_returns_400(self) -> None:
        response = self.client.post(
            f"/pet/{self.pet_a['slug']}/report",
            headers=bearer("garbage"),
            json=REPORT_BODY,
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.store.report_write_count, 0)

    def test_owner_can_list_reports_for_own_pet_only(self) -> None:
        token = self._report_token(self.pet_a["slug"])
        self.client.post(f"/pet/{self.pet_a['slug']}/report", headers=bearer(token), json=REPORT_BODY)
        stranger = bearer(sign_up(self.client, "stranger@doe.org"))

        own = self.client.get(f"/pets/{self.pet_a['slug']}/reports", headers=self.owner)
        self.assertEqual(own.status_code, 200)
        self.assertEqual([report["city"] for report in own.json()["data"]], ["Lyon"])

        cross = self.client.get(f"/pets/{self.pet_a['slug']}/reports", headers=stranger)
        self.assertEqual(cross.status_code, 404)

    def test_invalid_report_body_returns_422_envelope(self) -> None:
        token = self._report_token(self.pet_a["slug"])

        response = self.client.post(
            f"/pet/{self.pet_a['slug']}/report",
            headers=bearer(token),
            json={"phone_number": "0" * 21},
        )

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"][0]["field"], "phone_number")
        self.assertEqual(self.store.report_write_count, 0)


if __name__ == "__main__":
    unittest.main()
