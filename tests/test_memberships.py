# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sqlite3
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

ADMIN_EMAIL = "boss@gymrats.test"


def _signup_payload(email: str, plan: str, months: int) -> dict:
    return {
        "full_name": "Sam Lifter",
        "email": email,
        "password": "password123",
        "dob": "1990-01-20",
        "gender": "Female",
        "phone": "+44 20 7946 0958",
        "membership_plan": plan,
        "membership_duration": months,
        "card_type": "mastercard",
        "card_number": "5500000000001234",
    }


class TestPricing(unittest.TestCase):
    def test_prices(self) -> None:
        from gymrats.memberships.pricing import monthly_price, total_price  # noqa: WPS433

        self.assertEqual(monthly_price("basic"), 29)
        self.assertEqual(monthly_price("Gold"), 59)
        self.assertEqual(monthly_price("platinum"), 99)
        self.assertEqual(monthly_price("diamond"), 29)
        self.assertEqual(total_price("gold", 3), 177)
        self.assertEqual(total_price("platinum", 12), 1188)

    def test_add_months_clamps_to_month_end(self) -> None:
        from gymrats.memberships.pricing import add_months  # noqa: WPS433

        self.assertEqual(add_months(datetime(2025, 1, 31), 1), datetime(2025, 2, 28))
        self.assertEqual(add_months(datetime(2024, 1, 31), 1), datetime(2024, 2, 29))
        self.assertEqual(add_months(datetime(2025, 11, 15, 9, 30), 3), datetime(2026, 2, 15, 9, 30))
        self.assertEqual(add_months(datetime(2025, 5, 10), 12), datetime(2026, 5, 10))

    def test_tiers(self) -> None:
        from gymrats.memberships.pricing import dashboard_url, tier_of  # noqa: WPS433

        self.assertEqual(tier_of("Platinum"), "platinum")
        self.assertEqual(tier_of(""), "basic")
        self.assertEqual(dashboard_url("gold"), "/userdashboard_g")
        self.assertEqual(dashboard_url("basic"), "/userdashboard_b")

    def test_is_active(self) -> None:
        from gymrats.memberships.storage import is_membership_active  # noqa: WPS433

        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        future = (now + timedelta(days=30)).isoformat()
        past = (now - timedelta(days=1)).isoformat()
        self.assertTrue(is_membership_active({"status": "Active", "months_remaining": 2, "membership_end": future}, now))
        self.assertTrue(is_membership_active({"status": "Active", "months_remaining": 2, "membership_end": None}, now))
        self.assertFalse(is_membership_active({"status": "Active", "months_remaining": 0, "membership_end": future}, now))
        self.assertFalse(is_membership_active({"status": "Expired", "months_remaining": 2, "membership_end": future}, now))
        self.assertFalse(is_membership_active({"status": "Active", "months_remaining": 2, "membership_end": past}, now))


class TestMembershipApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="gymrats-test-"))
        data_root = cls._tmp / "data"
        os.environ["GYMRATS_DATA_ROOT"] = str(data_root)
        os.environ["GYMRATS_DB_PATH"] = str(data_root / "gymrats.db")
        os.environ["GYMRATS_JWT_SECRET"] = "test-secret"
        os.environ["GYMRATS_ADMIN_EMAILS"] = ADMIN_EMAIL

        for name in list(sys.modules.keys()):
            if name == "gymrats" or name.startswith("gymrats."):
                sys.modules.pop(name, None)

        from gymrats.api import app  # noqa: WPS433 (import inside test for env control)

        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _signup(self, email: str, plan: str = "gold", months: int = 3) -> dict:
        resp = self.client.post("/api/auth/signup", json=_signup_payload(email, plan, months))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def _headers(self, body: dict) -> dict:
        return {"Authorization": f"Bearer {body['token']}"}

    def test_signup_records_membership(self) -> None:
        body = self._signup("signup@example.com", "gold", 3)
        self.assertEqual(body["redirect_url"], "/userdashboard_g")
        self.assertEqual(body["user"]["role"], "member")
        headers = self._headers(body)

        status = self.client.get("/api/membership/status", headers=headers).json()
        self.assertEqual(status["membership_type"], "Gold")
        self.assertEqual(status["months_remaining"], 3)
        self.assertTrue(status["is_active"])
        self.assertFalse(status["auto_renew"])

        history = self.client.get("/api/membership/history", headers=headers).json()
        self.assertEqual(history["count"], 1)
        record = history["items"][0]
        self.assertEqual(record["plan"], "gold")
        self.assertEqual(record["price"], 177.0)
        self.assertEqual(record["card_last_four"], "1234")
        self.assertNotIn("card_number", record)

    def test_duplicate_signup_is_rejected(self) -> None:
        self._signup("dupe@example.com")
        resp = self.client.post("/api/auth/signup", json=_signup_payload("DUPE@example.com", "basic", 1))
        self.assertEqual(resp.status_code, 400)

    def test_failed_billing_leaves_no_member(self) -> None:
        import gymrats.auth.api as auth_api  # noqa: WPS433
        from gymrats.api import app  # noqa: WPS433

        payload = _signup_payload("billing-fails@example.com", "gold", 3)
        failing = TestClient(app, raise_server_exceptions=False)
        with mock.patch.object(auth_api, "create_membership", side_effect=sqlite3.OperationalError("disk I/O error")):
            resp = failing.post("/api/auth/signup", json=payload)
        failing.close()
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"success": False, "message": "Internal server error"})

        resp = self.client.post("/api/auth/signup", json=payload)
        self.assertEqual(resp.status_code, 201, resp.text)
        history = self.client.get("/api/membership/history", headers=self._headers(resp.json())).json()
        self.assertEqual(history["count"], 1)

    def test_login_requires_matching_plan(self) -> None:
        self._signup("plan@example.com", "platinum", 6)
        ok = self.client.post(
            "/api/auth/login",
            json={"email": "plan@example.com", "password": "password123", "membership_plan": "platinum"},
        )
        self.assertEqual(ok.status_code, 200, ok.text)
        self.assertEqual(ok.json()["redirect_url"], "/userdashboard_p")

        wrong_plan = self.client.post(
            "/api/auth/login",
            json={"email": "plan@example.com", "password": "password123", "membership_plan": "basic"},
        )
        self.assertEqual(wrong_plan.status_code, 403)

        wrong_password = self.client.post(
            "/api/auth/login",
            json={"email": "plan@example.com", "password": "nope-nope", "membership_plan": "platinum"},
        )
        self.assertEqual(wrong_password.status_code, 401)

    def test_me_reports_role(self) -> None:
        headers = self._headers(self._signup("me@example.com"))
        resp = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "me@example.com")
        self.assertEqual(resp.json()["role"], "member")

    def test_bad_token_is_401(self) -> None:
        resp = self.client.get("/api/membership/status", headers={"Authorization": "Bearer not.a.token"})
        self.assertEqual(resp.status_code, 401)

    def test_extend_and_auto_renew(self) -> None:
        headers = self._headers(self._signup("extend@example.com", "basic", 1))

        resp = self.client.post("/api/membership/extend", json={"additional_months": 2}, headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["months_remaining"], 3)

        status = self.client.get("/api/membership/status", headers=headers).json()
        self.assertEqual(status["months_remaining"], 3)
        self.assertEqual(status["status"], "Active")

        history = self.client.get("/api/membership/history", headers=headers).json()
        self.assertEqual(history["count"], 2)
        self.assertEqual(sorted(r["duration"] for r in history["items"]), [1, 2])

        first = self.client.post("/api/membership/auto-renew", headers=headers).json()
        second = self.client.post("/api/membership/auto-renew", headers=headers).json()
        self.assertTrue(first["auto_renew"])
        self.assertFalse(second["auto_renew"])

    def test_monthly_tick_expires_last_month(self) -> None:
        admin_body = self._signup(ADMIN_EMAIL, "gold", 12)
        resp = self.client.post("/api/auth/admin/login", json={"email": ADMIN_EMAIL, "password": "password123"})
        self.assertEqual(resp.status_code, 200, resp.text)
        admin = self._headers(resp.json())

        one_month = self._signup("onemonth@example.com", "basic", 1)["user"]["id"]
        two_months = self._signup("twomonths@example.com", "basic", 2)["user"]["id"]

        resp = self.client.post("/api/admin/memberships/monthly-tick", headers=admin)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertGreaterEqual(resp.json()["processed"], 3)
        self.assertGreaterEqual(resp.json()["expired"], 1)

        expired = self.client.get(f"/api/admin/members/{one_month}", headers=admin).json()
        self.assertEqual(expired["months_remaining"], 0)
        self.assertEqual(expired["status"], "Expired")

        remaining = self.client.get(f"/api/admin/members/{two_months}", headers=admin).json()
        self.assertEqual(remaining["months_remaining"], 1)
        self.assertEqual(remaining["status"], "Active")

        self.assertEqual(admin_body["user"]["role"], "member")

    def test_admin_routes_need_admin_role(self) -> None:
        headers = self._headers(self._signup("notadmin@example.com"))
        resp = self.client.get("/api/admin/members", headers=headers)
        self.assertEqual(resp.status_code, 403)

        resp = self.client.post(
            "/api/auth/admin/login",
            json={"email": "notadmin@example.com", "password": "password123"},
        )
        self.assertEqual(resp.status_code, 401)


if __name__ == "__main__":
    unittest.main()
