# -*- coding: utf-8 -*-
"""Week document merge + aggregate helpers (pure, no storage)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .week import WEEKDAYS, week_dates


def _r1(value: float) -> float:
    return round(float(value), 1)


def empty_nutrition_day(day_iso: str) -> Dict[str, Any]:
    return {
        "date": day_iso,
        "calories": 0.0,
        "protein": 0.0,
        "macros": {"protein": 0.0, "carbs": 0.0, "fats": 0.0},
        "foods": [],
    }


def empty_payload(kind: str, week_start: datetime) -> Dict[str, Any]:
    if kind == "workout":
        return {"exercises": [], "notes": None, "summary": summarize_workout([])}
    days = {
        name: empty_nutrition_day(day.isoformat())
        for name, day in zip(WEEKDAYS, week_dates(week_start))
    }
    return {"days": days, "averages": nutrition_averages(days)}


# ---- workout ----

def summarize_workout(exercises: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    days = {name: {"exercise_count": 0, "total_sets": 0} for name in WEEKDAYS}
    for ex in exercises:
        bucket = days.get(ex.get("day") or "")
        if bucket is None:
            continue
        bucket["exercise_count"] += 1
        bucket["total_sets"] += int(ex.get("sets") or 0)

    active = [d for d in days.values() if d["exercise_count"] > 0]
    total_exercises = sum(d["exercise_count"] for d in active)
    return {
        "active_days": len(active),
        "total_exercises": total_exercises,
        "total_sets": sum(d["total_sets"] for d in active),
        "avg_exercises_per_active_day": _r1(total_exercises / len(active)) if active else 0.0,
        "days": days,
    }


def merge_workout_day(
    payload: Dict[str, Any],
    day_name: str,
    exercises: List[Dict[str, Any]],
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Replace ``day_name``'s exercises in ``payload`` and refresh the summary.

    Exercises of the other days keep their content and relative order.
    """
    if day_name not in WEEKDAYS:
        raise ValueError(f"unknown weekday: {day_name}")
    kept = [ex for ex in payload.get("exercises") or [] if ex.get("day") != day_name]
    kept.extend({**ex, "day": day_name} for ex in exercises)
    # Stable sort: within a day, insertion order is preserved.
    kept.sort(key=lambda ex: WEEKDAYS.index(ex["day"]))
    payload["exercises"] = kept
    if notes is not None:
        payload["notes"] = notes
    payload.setdefault("notes", None)
    payload["summary"] = summarize_workout(kept)
    return payload


# ---- nutrition ----

def day_totals(foods: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    calories = protein = carbs = fats = 0.0
    for food in foods:
        calories += float(food.get("calories") or 0.0)
        protein += float(food.get("protein") or 0.0)
        carbs += float(food.get("carbs") or 0.0)
        fats += float(food.get("fats") or 0.0)
    return {
        "calories": _r1(calories),
        "protein": _r1(protein),
        "macros": {"protein": _r1(protein), "carbs": _r1(carbs), "fats": _r1(fats)},
    }


def nutrition_averages(days: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    # Placeholder days are zeroed, so only days that actually list foods count.
    logged = [d for d in days.values() if d.get("foods")]
    if not logged:
        return {
            "days_logged": 0,
            "calories": 0.0,
            "protein": 0.0,
            "macros": {"protein": 0.0, "carbs": 0.0, "fats": 0.0},
        }
    n = len(logged)

    def _avg(getter) -> float:
        return _r1(sum(float(getter(d) or 0.0) for d in logged) / n)

    return {
        "days_logged": n,
        "calories": _avg(lambda d: d.get("calories")),
        "protein": _avg(lambda d: d.get("protein")),
        "macros": {
            "protein": _avg(lambda d: (d.get("macros") or {}).get("protein")),
            "carbs": _avg(lambda d: (d.get("macros") or {}).get("carbs")),
            "fats": _avg(lambda d: (d.get("macros") or {}).get("fats")),
        },
    }


def merge_nutrition_day(
    payload: Dict[str, Any],
    day_name: str,
    day_iso: str,
    foods: List[Dict[str, Any]],
) -> Dict[str, Any]:
    if day_name not in WEEKDAYS:
        raise ValueError(f"unknown weekday: {day_name}")
    days = payload.setdefault("days", {})
    entry = {"date": day_iso, "foods": list(foods)}
    entry.update(day_totals(foods))
    days[day_name] = entry
    payload["averages"] = nutrition_averages(days)
    return payload
