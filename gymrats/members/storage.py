# -*- coding: utf-8 -*-
"""Members — DB storage helpers."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn
from ..config import settings

logger = logging.getLogger(__name__)

_PROFILE_COLUMNS = {
    "full_name", "email", "dob", "gender", "phone", "weight", "height", "body_fat",
    "goal", "status", "membership_type",
}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def compute_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    if not weight_kg or not height_cm:
        return None
    meters = float(height_cm) / 100.0
    return round(float(weight_kg) / (meters * meters), 1)


def member_public(row: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in row.items() if k != "password_hash"}
    out["auto_renew"] = bool(out.get("auto_renew"))
    out["fitness_goals"] = {
        "calorie_goal": out.pop("calorie_goal", 2200),
        "protein_goal": out.pop("protein_goal", 90),
        "weight_goal": out.pop("weight_goal", None),
    }
    return out


def create_member(
    *,
    full_name: str,
    email: str,
    password_hash: str,
    dob: str,
    gender: str,
    phone: str,
    weight: float = 0.0,
    height: float = 0.0,
    status: str = "Active",
    membership_type: str = "Basic",
    months_remaining: int = 0,
    membership_start: Optional[str] = None,
    membership_end: Optional[str] = None,
    conn: Optional[sqlite3.Connection] = None,
) -> Dict[str, Any]:
    """Insert a member; pass ``conn`` to join an open transaction."""
    now = _utc_now()
    row = {
        "id": str(uuid4()),
        "full_name": full_name.strip(),
        "email": email.lower().strip(),
        "password_hash": password_hash,
        "dob": dob,
        "gender": gender,
        "phone": phone,
        "weight": float(weight),
        "height": float(height),
        "bmi": compute_bmi(weight, height),
        "status": status,
        "membership_type": membership_type,
        "months_remaining": int(months_remaining),
        "membership_start": membership_start or now,
        "membership_end": membership_end,
        "created_at": now,
    }
    sql = f"INSERT INTO members ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})"
    try:
        if conn is not None:
            conn.execute(sql, tuple(row.values()))
            created = conn.execute("SELECT * FROM members WHERE id = ?", (row["id"],)).fetchone()
        else:
            with db_conn(settings.app_db_path) as own:
                own.execute(sql, tuple(row.values()))
                created = own.execute("SELECT * FROM members WHERE id = ?", (row["id"],)).fetchone()
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail="Email already in use") from exc
    logger.info("Member %s created (%s)", row["id"], membership_type)
    return dict(created)


def get_member(member_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM members WHERE id = ?", (member_id,)).fetchone()
        return dict(row) if row else None


def get_member_or_404(member_id: str) -> Dict[str, Any]:
    member = get_member(member_id)
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


def list_members(*, trainer_id: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM members"
    params: list[Any] = []
    if trainer_id:
        sql += " WHERE trainer_id = ?"
        params.append(trainer_id)
    sql += " ORDER BY created_at DESC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [dict(r) for r in rows]


def update_member(member_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Apply non-null ``fields`` to the member; BMI follows weight/height."""
    updates = {k: v for k, v in fields.items() if k in _PROFILE_COLUMNS and v is not None}
    goals = fields.get("fitness_goals") or {}
    for key in ("calorie_goal", "protein_goal", "weight_goal"):
        if key in goals:
            updates[key] = goals[key]
    if "email" in updates:
        updates["email"] = str(updates["email"]).lower().strip()

    current = get_member_or_404(member_id)
    if "weight" in updates or "height" in updates:
        updates["bmi"] = compute_bmi(
            updates.get("weight", current.get("weight")),
            updates.get("height", current.get("height")),
        )
    if not updates:
        return current
    updates["updated_at"] = _utc_now()

    assignments = ", ".join(f"{k} = ?" for k in updates)
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(f"UPDATE members SET {assignments} WHERE id = ?", (*updates.values(), member_id))
            row = conn.execute("SELECT * FROM members WHERE id = ?", (member_id,)).fetchone()
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail="Email already in use") from exc
    return dict(row)


def delete_member(member_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM members WHERE id = ?", (member_id,))
        deleted = cur.rowcount > 0
    if deleted:
        logger.info("Member %s deleted", member_id)
    return deleted


def assign_trainer(member_id: str, trainer_id: Optional[str]) -> Dict[str, Any]:
    get_member_or_404(member_id)
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "UPDATE members SET trainer_id = ?, updated_at = ? WHERE id = ?",
            (trainer_id, _utc_now(), member_id),
        )
        row = conn.execute("SELECT * FROM members WHERE id = ?", (member_id,)).fetchone()
    return dict(row)


def list_schedule(member_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM trainer_sessions WHERE member_id = ? ORDER BY date ASC, time ASC",
            (member_id,),
        ).fetchall()
    return [dict(r) for r in rows]
