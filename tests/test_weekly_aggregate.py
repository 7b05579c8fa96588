# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime

from gymrats.weekly.aggregate import (
    day_totals,
    empty_payload,
    merge_nutrition_day,
    merge_workout_day,
    summarize_workout,
)

MONDAY = datetime(2025, 3, 3)


class TestWorkoutMerge(unittest.TestCase):
    def test_saving_a_day_keeps_other_days(self) -> None:
        payload = empty_payload("workout", MONDAY)
        merge_workout_day(payload, "Monday", [{"name": "Squat", "sets": 4}, {"name": "Lunge", "sets": 3}])
        merge_workout_day(payload, "Wednesday", [{"name": "Bench", "sets": 5}])
        merge_workout_day(payload, "Wednesday", [{"name": "Row", "sets": 2}])

        by_day = {}
        for ex in payload["exercises"]:
            by_day.setdefault(ex["day"], []).append(ex["name"])
        self.assertEqual(by_day["Monday"], ["Squat", "Lunge"])
        self.assertEqual(by_day["Wednesday"], ["Row"])

    def test_exercises_are_ordered_by_weekday(self) -> None:
        payload = empty_payload("workout", MONDAY)
        merge_workout_day(payload, "Friday", [{"name": "Deadlift", "sets": 3}])
        merge_workout_day(payload, "Tuesday", [{"name": "Press", "sets": 3}])
        self.assertEqual([ex["day"] for ex in payload["exercises"]], ["Tuesday", "Friday"])

    def test_resave_is_idempotent(self) -> None:
        payload = empty_payload("workout", MONDAY)
        exercises = [{"name": "Squat", "sets": 4}]
        merge_workout_day(payload, "Monday", exercises)
        first = [dict(ex) for ex in payload["exercises"]]
        merge_workout_day(payload, "Monday", exercises)
        self.assertEqual(payload["exercises"], first)
        self.assertEqual(payload["summary"]["total_exercises"], 1)

    def test_summary(self) -> None:
        summary = summarize_workout(
            [
                {"day": "Monday", "sets": 4},
                {"day": "Monday", "sets": 3},
                {"day": "Thursday", "sets": 5},
            ]
        )
        self.assertEqual(summary["active_days"], 2)
        self.assertEqual(summary["total_exercises"], 3)
        self.assertEqual(summary["total_sets"], 12)
        self.assertEqual(summary["avg_exercises_per_active_day"], 1.5)
        self.assertEqual(summary["days"]["Monday"], {"exercise_count": 2, "total_sets": 7})
        self.assertEqual(summary["days"]["Sunday"], {"exercise_count": 0, "total_sets": 0})

    def test_empty_summary(self) -> None:
        summary = summarize_workout([])
        self.assertEqual(summary["active_days"], 0)
        self.assertEqual(summary["avg_exercises_per_active_day"], 0.0)

    def test_unknown_weekday_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            merge_workout_day(empty_payload("workout", MONDAY), "Funday", [])


class TestNutritionMerge(unittest.TestCase):
    def test_new_week_has_seven_zeroed_days(self) -> None:
        payload = empty_payload("nutrition", MONDAY)
        self.assertEqual(len(payload["days"]), 7)
        self.assertEqual(payload["days"]["Monday"]["date"], "2025-03-03")
        self.assertEqual(payload["days"]["Sunday"]["date"], "2025-03-09")
        for day in payload["days"].values():
            self.assertEqual(day["calories"], 0.0)
            self.assertEqual(day["foods"], [])
        self.assertEqual(payload["averages"]["days_logged"], 0)
        self.assertEqual(payload["averages"]["calories"], 0.0)

    def test_averages_skip_days_without_food(self) -> None:
        payload = empty_payload("nutrition", MONDAY)
        merge_nutrition_day(
            payload, "Monday", "2025-03-03",
            [{"name": "Oats", "calories": 500, "protein": 30, "carbs": 50, "fats": 10}],
        )
        merge_nutrition_day(
            payload, "Wednesday", "2025-03-05",
            [{"name": "Rice", "calories": 700, "protein": 40, "carbs": 60, "fats": 20}],
        )
        averages = payload["averages"]
        self.assertEqual(averages["days_logged"], 2)
        self.assertEqual(averages["calories"], 600.0)
        self.assertEqual(averages["protein"], 35.0)
        self.assertEqual(averages["macros"], {"protein": 35.0, "carbs": 55.0, "fats": 15.0})

    def test_clearing_a_day_drops_it_from_averages(self) -> None:
        payload = empty_payload("nutrition", MONDAY)
        merge_nutrition_day(payload, "Monday", "2025-03-03", [{"name": "Egg", "calories": 80, "protein": 6}])
        merge_nutrition_day(payload, "Monday", "2025-03-03", [])
        self.assertEqual(payload["averages"]["days_logged"], 0)
        self.assertEqual(payload["days"]["Monday"]["calories"], 0.0)

    def test_day_totals(self) -> None:
        totals = day_totals(
            [
                {"name": "Chicken", "calories": 165, "protein": 31, "carbs": 0, "fats": 3.6},
                {"name": "Rice", "calories": 130, "protein": 2.7, "carbs": 28, "fats": 0.3},
            ]
        )
        self.assertEqual(totals["calories"], 295.0)
        self.assertEqual(totals["protein"], 33.7)
        self.assertEqual(totals["macros"], {"protein": 33.7, "carbs": 28.0, "fats": 3.9})


if __name__ == "__main__":
    unittest.main()
