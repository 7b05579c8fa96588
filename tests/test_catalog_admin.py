# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import threading
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

ADMIN_EMAIL = "owner@gymrats.test"


def _signup_payload(email: str, plan: str) -> dict:
    return {
        "full_name": "Chris Member",
        "email": email,
        "password": "password123",
        "dob": "1992-07-07",
        "gender": "Male",
        "phone": "+1 555 444 5555",
        "weight": 80,
        "height": 180,
        "membership_plan": plan,
        "membership_duration": 6,
        "card_type": "visa",
        "card_number": "4111111111111111",
    }


def _exercise(name: str, level: str, verified: bool, muscles: list) -> dict:
    return {
        "name": name,
        "category": "Strength",
        "difficulty": "Intermediate",
        "target_muscles": muscles,
        "instructions": "Keep your back straight.",
        "verified": verified,
        "type": "Reps",
        "default_sets": 3,
        "default_reps_or_duration": "10 reps",
        "equipment": ["Barbell"],
        "workout_plan_level": level,
    }


class TestCatalogAndAdmin(unittest.TestCase):
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

        resp = cls.client.post("/api/auth/signup", json=_signup_payload(ADMIN_EMAIL, "basic"))
        assert resp.status_code == 201, resp.text
        resp = cls.client.post("/api/auth/admin/login", json={"email": ADMIN_EMAIL, "password": "password123"})
        assert resp.status_code == 200, resp.text
        cls.admin = {"Authorization": f"Bearer {resp.json()['token']}"}

        for payload in (
            _exercise("Front Squat", "Intermediate", True, ["Quads", "Core"]),
            _exercise("Goblet Squat", "Basic", True, ["Quads", "Glutes"]),
            _exercise("Zercher Squat", "Intermediate", False, ["Quads"]),
        ):
            resp = cls.client.post("/api/admin/exercises", json=payload, headers=cls.admin)
            assert resp.status_code == 201, resp.text

    @classmethod
    def tearDownClass(cls) -> None:
        cls.client.close()
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _member(self, email: str, plan: str = "gold") -> tuple[str, dict]:
        resp = self.client.post("/api/auth/signup", json=_signup_payload(email, plan))
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    def _trainer(self, email: str, max_clients: int = 5) -> tuple[str, dict]:
        resp = self.client.post(
            "/api/admin/trainers",
            json={
                "name": "Tom Trainer",
                "email": email,
                "password": "password123",
                "phone": "+1 555 777 8888",
                "experience": "1-2",
                "max_clients": max_clients,
            },
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        trainer_id = resp.json()["id"]
        resp = self.client.post("/api/auth/trainer/login", json={"email": email, "password": "password123"})
        self.assertEqual(resp.status_code, 200, resp.text)
        return trainer_id, {"Authorization": f"Bearer {resp.json()['token']}"}

    def test_public_catalog_lists_verified_only(self) -> None:
        from gymrats.api import app  # noqa: WPS433

        anonymous = TestClient(app)
        resp = anonymous.get("/api/catalog/exercises")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(sorted(e["name"] for e in body["items"]), ["Front Squat", "Goblet Squat"])
        self.assertEqual(body["muscle_groups"], ["Quads", "Core", "Glutes"])

        resp = anonymous.get("/api/catalog/exercises?level=Basic")
        self.assertEqual([e["name"] for e in resp.json()["items"]], ["Goblet Squat"])
        anonymous.close()

    def test_member_sees_exercises_for_their_tier(self) -> None:
        _, headers = self._member("gold@example.com", "gold")
        resp = self.client.get("/api/members/me/exercises", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([e["name"] for e in resp.json()["items"]], ["Front Squat"])

    def test_nutrition_plan_meal_totals(self) -> None:
        resp = self.client.post(
            "/api/admin/nutrition-plans",
            json={
                "name": "Lean Bulk",
                "type": "Bulking",
                "target_goal": "Weight Gain",
                "description": "Slow surplus",
                "duration": 8,
                "membership_level": "Platinum",
                "daily_targets": {"calories": 3000, "protein": 180, "carbs": 350, "fats": 90},
                "meals": [
                    {
                        "meal_name": "Breakfast",
                        "time": "8:00 AM",
                        "foods": [
                            {"name": "Oats", "quantity": "100g", "calories": 380, "protein": 13, "carbs": 67, "fats": 7},
                            {"name": "Milk", "quantity": "250ml", "calories": 160, "protein": 8, "carbs": 12, "fats": 9},
                        ],
                    }
                ],
                "verified": True,
            },
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        meal = resp.json()["meals"][0]
        self.assertEqual(meal["total_calories"], 540.0)
        self.assertEqual(meal["total_protein"], 21.0)

        _, platinum = self._member("plat@example.com", "platinum")
        plans = self.client.get("/api/members/me/nutrition-plans", headers=platinum).json()
        self.assertEqual([p["name"] for p in plans["items"]], ["Lean Bulk"])

        _, basic = self._member("basic@example.com", "basic")
        plans = self.client.get("/api/members/me/nutrition-plans", headers=basic).json()
        self.assertEqual(plans["count"], 0)

    def test_exercise_update_and_delete(self) -> None:
        resp = self.client.post(
            "/api/admin/exercises",
            json=_exercise("Hack Squat", "Advanced", False, ["Quads"]),
            headers=self.admin,
        )
        exercise_id = resp.json()["id"]
        resp = self.client.patch(f"/api/admin/exercises/{exercise_id}", json={"verified": True}, headers=self.admin)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.json()["verified"])
        self.assertEqual(self.client.get(f"/api/catalog/exercises/{exercise_id}").status_code, 200)

        self.assertEqual(self.client.delete(f"/api/admin/exercises/{exercise_id}", headers=self.admin).status_code, 200)
        self.assertEqual(self.client.delete(f"/api/admin/exercises/{exercise_id}", headers=self.admin).status_code, 404)

    def test_profile_update_recomputes_bmi(self) -> None:
        _, headers = self._member("bmi@example.com")
        profile = self.client.get("/api/members/me", headers=headers).json()
        self.assertEqual(profile["bmi"], 24.7)
        self.assertNotIn("password_hash", profile)

        resp = self.client.patch(
            "/api/members/me",
            json={"weight": 90, "fitness_goals": {"calorie_goal": 2600}},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["bmi"], 27.8)
        self.assertEqual(resp.json()["fitness_goals"]["calorie_goal"], 2600)
        self.assertEqual(resp.json()["fitness_goals"]["protein_goal"], 90)

    def test_trainer_client_limit(self) -> None:
        trainer_id, _ = self._trainer("full@example.com", max_clients=1)
        first, _ = self._member("first-client@example.com")
        second, _ = self._member("second-client@example.com")

        resp = self.client.post(f"/api/admin/trainers/{trainer_id}/clients", json={"member_id": first}, headers=self.admin)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["trainer_id"], trainer_id)

        resp = self.client.post(f"/api/admin/trainers/{trainer_id}/clients", json={"member_id": second}, headers=self.admin)
        self.assertEqual(resp.status_code, 409)

        clients = self.client.get(f"/api/admin/trainers/{trainer_id}/clients", headers=self.admin).json()
        self.assertEqual([c["id"] for c in clients["items"]], [first])

    def test_concurrent_assignments_respect_client_limit(self) -> None:
        from fastapi import HTTPException  # noqa: WPS433
        from gymrats.trainers.storage import assign_client, get_trainer  # noqa: WPS433

        trainer_id, _ = self._trainer("crowded@example.com", max_clients=1)
        members = [self._member(f"crowd-{i}@example.com")[0] for i in range(6)]
        assigned: list = []
        refused: list = []

        def assign(member_id: str) -> None:
            try:
                assign_client(trainer_id, member_id)
                assigned.append(member_id)
            except HTTPException as exc:
                refused.append(exc.status_code)

        threads = [threading.Thread(target=assign, args=(m,)) for m in members]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(assigned), 1)
        self.assertEqual(refused, [409] * 5)
        self.assertEqual(get_trainer(trainer_id)["client_count"], 1)

    def test_sessions_show_on_member_schedule(self) -> None:
        trainer_id, trainer = self._trainer("sessions@example.com")
        client_id, client = self._member("scheduled@example.com")
        stranger_id, _ = self._member("unscheduled@example.com")
        self.client.post(f"/api/admin/trainers/{trainer_id}/clients", json={"member_id": client_id}, headers=self.admin)

        session = {"member_id": client_id, "name": "Form check", "date": "2025-03-04", "time": "18:00"}
        resp = self.client.post("/api/trainers/me/sessions", json=session, headers=trainer)
        self.assertEqual(resp.status_code, 201, resp.text)

        resp = self.client.post("/api/trainers/me/sessions", json={**session, "member_id": stranger_id}, headers=trainer)
        self.assertEqual(resp.status_code, 403)

        schedule = self.client.get("/api/members/me/schedule", headers=client).json()
        self.assertEqual(schedule["count"], 1)
        self.assertEqual(schedule["items"][0]["name"], "Form check")

        clients = self.client.get("/api/trainers/me/clients", headers=trainer).json()
        self.assertEqual([c["id"] for c in clients["items"]], [client_id])
        me = self.client.get("/api/trainers/me", headers=trainer).json()
        self.assertEqual(me["client_count"], 1)

    def test_admin_member_crud(self) -> None:
        resp = self.client.post(
            "/api/admin/members",
            json={
                "full_name": "Walk In",
                "email": "walkin@example.com",
                "password": "password123",
                "dob": "2000-01-01",
                "gender": "Female",
                "phone": "+1 555 666 7777",
            },
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        member_id = resp.json()["id"]

        resp = self.client.patch(f"/api/admin/members/{member_id}", json={"status": "Suspended"}, headers=self.admin)
        self.assertEqual(resp.json()["status"], "Suspended")
        self.assertEqual(self.client.delete(f"/api/admin/members/{member_id}", headers=self.admin).status_code, 200)
        self.assertEqual(self.client.get(f"/api/admin/members/{member_id}", headers=self.admin).status_code, 404)


if __name__ == "__main__":
    unittest.main()
