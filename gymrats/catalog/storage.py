# -*- coding: utf-8 -*-
"""Catalog storage: exercises and nutrition plan templates."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dump_json, load_json
from ..config import settings

logger = logging.getLogger(__name__)

# field name -> JSON column
_EXERCISE_JSON = {"target_muscles": "target_muscles_json", "equipment": "equipment_json"}
_PLAN_JSON = {"daily_targets": "daily_targets_json", "meals": "meals_json"}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _encode(fields: Dict[str, Any], json_fields: Dict[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        if key in json_fields:
            out[json_fields[key]] = dump_json(value)
        elif key == "verified":
            out[key] = 1 if value else 0
        else:
            out[key] = value
    return out


def _decode(row: Dict[str, Any], json_fields: Dict[str, str], defaults: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(row)
    for key, column in json_fields.items():
        out[key] = load_json(out.pop(column, None), defaults.get(key))
    out["verified"] = bool(out.get("verified"))
    return out


def meal_totals(meal: Dict[str, Any]) -> Dict[str, Any]:
    """``meal`` with total_* fields summed from its foods."""
    foods = meal.get("foods") or []
    out = dict(meal)
    for field in ("calories", "protein", "carbs", "fats"):
        out[f"total_{field}"] = round(sum(float(f.get(field) or 0.0) for f in foods), 1)
    return out


def _insert(table: str, row: Dict[str, Any]) -> None:
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            f"INSERT INTO {table} ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})",
            tuple(row.values()),
        )


def _update(table: str, item_id: str, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        if row:
            assignments = ", ".join(f"{k} = ?" for k in row)
            conn.execute(f"UPDATE {table} SET {assignments} WHERE id = ?", (*row.values(), item_id))
        found = conn.execute(f"SELECT * FROM {table} WHERE id = ?", (item_id,)).fetchone()
    return dict(found) if found else None


def _delete(table: str, item_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        return conn.execute(f"DELETE FROM {table} WHERE id = ?", (item_id,)).rowcount > 0


# ---- exercises ----

def _exercise(row: Dict[str, Any]) -> Dict[str, Any]:
    return _decode(row, _EXERCISE_JSON, {"target_muscles": [], "equipment": []})


def create_exercise(fields: Dict[str, Any]) -> Dict[str, Any]:
    now = _utc_now()
    row = {"id": str(uuid4()), **_encode(fields, _EXERCISE_JSON), "usage_count": 0, "created_at": now}
    _insert("exercises", row)
    logger.info("Exercise %s (%s) created", row["id"], fields.get("name"))
    return _exercise(row)


def get_exercise(exercise_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM exercises WHERE id = ?", (exercise_id,)).fetchone()
    return _exercise(dict(row)) if row else None


def list_exercises(
    *,
    verified: Optional[bool] = None,
    workout_plan_level: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM exercises WHERE 1 = 1"
    params: list[Any] = []
    if verified is not None:
        sql += " AND verified = ?"
        params.append(1 if verified else 0)
    if workout_plan_level:
        sql += " AND workout_plan_level = ?"
        params.append(workout_plan_level)
    sql += " ORDER BY name ASC"
    if limit:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_exercise(dict(r)) for r in rows]


def muscle_groups(exercises: Iterable[Dict[str, Any]]) -> List[str]:
    """Distinct target muscles, in first-seen order."""
    seen: Dict[str, None] = {}
    for ex in exercises:
        for muscle in ex.get("target_muscles") or []:
            seen.setdefault(muscle, None)
    return list(seen)


def update_exercise(exercise_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    updates = _encode({k: v for k, v in fields.items() if v is not None}, _EXERCISE_JSON)
    if updates:
        updates["updated_at"] = _utc_now()
    row = _update("exercises", exercise_id, updates)
    if not row:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return _exercise(row)


def delete_exercise(exercise_id: str) -> bool:
    return _delete("exercises", exercise_id)


# ---- nutrition plans ----

def _plan(row: Dict[str, Any]) -> Dict[str, Any]:
    out = _decode(row, _PLAN_JSON, {"daily_targets": {}, "meals": []})
    out["meals"] = [meal_totals(m) for m in out["meals"]]
    return out


def create_nutrition_plan(fields: Dict[str, Any]) -> Dict[str, Any]:
    now = _utc_now()
    row = {"id": str(uuid4()), **_encode(fields, _PLAN_JSON), "created_at": now}
    _insert("nutrition_plans", row)
    logger.info("Nutrition plan %s (%s) created", row["id"], fields.get("name"))
    return _plan(row)


def get_nutrition_plan(plan_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM nutrition_plans WHERE id = ?", (plan_id,)).fetchone()
    return _plan(dict(row)) if row else None


def list_nutrition_plans(
    *,
    verified: Optional[bool] = None,
    membership_level: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM nutrition_plans WHERE 1 = 1"
    params: list[Any] = []
    if verified is not None:
        sql += " AND verified = ?"
        params.append(1 if verified else 0)
    if membership_level:
        sql += " AND membership_level = ?"
        params.append(membership_level)
    sql += " ORDER BY created_at DESC"
    if limit:
        sql += " LIMIT ?"
        params.append(int(limit))
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_plan(dict(r)) for r in rows]


def update_nutrition_plan(plan_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    updates = _encode({k: v for k, v in fields.items() if v is not None}, _PLAN_JSON)
    if updates:
        updates["updated_at"] = _utc_now()
    row = _update("nutrition_plans", plan_id, updates)
    if not row:
        raise HTTPException(status_code=404, detail="Nutrition plan not found")
    return _plan(row)


def delete_nutrition_plan(plan_id: str) -> bool:
    return _delete("nutrition_plans", plan_id)
