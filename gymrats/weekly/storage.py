# -*- coding: utf-8 -*-
"""Weekly plan storage (SQLite).

One document per (member, week) and per kind. Saving a day finds or creates the
document for the week containing that day, merges the day in, recomputes the
weekly aggregate and points the member's current-week reference at it unless
the member already references a later week.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dump_json, load_json
from ..config import settings
from .aggregate import empty_payload, merge_nutrition_day, merge_workout_day
from .week import week_bounds, weekday_name

logger = logging.getLogger(__name__)

_TABLES = {"workout": "weekly_workouts", "nutrition": "weekly_nutrition"}
_MEMBER_REF = {"workout": "current_workout_week_id", "nutrition": "current_nutrition_week_id"}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _table(kind: str) -> str:
    try:
        return _TABLES[kind]
    except KeyError:
        raise ValueError(f"unknown plan kind: {kind}") from None


def _row_to_plan(kind: str, row: Dict[str, Any]) -> Dict[str, Any]:
    payload = load_json(row.get("payload_json"), {})
    if not payload:
        payload = empty_payload(kind, datetime.fromisoformat(row["week_start"]))
    plan = {
        "id": row.get("id"),
        "member_id": row["member_id"],
        "week_start": row["week_start"],
        "week_end": row["week_end"],
        "updated_by": row.get("updated_by"),
        "created_at": row.get("created_at"),
        "updated_at": row.get("updated_at"),
    }
    if kind == "workout":
        plan["exercises"] = payload.get("exercises") or []
        plan["notes"] = payload.get("notes")
        plan["summary"] = payload.get("summary") or {}
    else:
        plan["days"] = payload.get("days") or {}
        plan["averages"] = payload.get("averages") or {}
    return plan


def _select_week(conn: sqlite3.Connection, table: str, member_id: str, week_start: str) -> Optional[Dict[str, Any]]:
    row = conn.execute(
        f"SELECT * FROM {table} WHERE member_id = ? AND week_start = ?",
        (member_id, week_start),
    ).fetchone()
    return dict(row) if row else None


def _is_newer_week(conn: sqlite3.Connection, table: str, current_id: Optional[str], week_start: str) -> bool:
    if not current_id:
        return True
    current = conn.execute(f"SELECT week_start FROM {table} WHERE id = ?", (current_id,)).fetchone()
    return current is None or week_start >= current["week_start"]


def _save_day(
    kind: str,
    *,
    member_id: str,
    day: date,
    actor_id: Optional[str],
    merge: Callable[[Dict[str, Any]], Dict[str, Any]],
) -> Dict[str, Any]:
    table = _table(kind)
    start, end = week_bounds(day)
    week_start, week_end = start.isoformat(), end.isoformat()
    now = _utc_now()

    with db_conn(settings.app_db_path) as conn:
        # Serialize writers so find-or-create and the payload merge are atomic.
        conn.execute("BEGIN IMMEDIATE")
        ref_column = _MEMBER_REF[kind]
        member = conn.execute(f"SELECT id, {ref_column} FROM members WHERE id = ?", (member_id,)).fetchone()
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")

        row = _select_week(conn, table, member_id, week_start)
        if row is None:
            conn.execute(
                f"""
                INSERT INTO {table} (id, member_id, week_start, week_end, payload_json, updated_by, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (str(uuid4()), member_id, week_start, week_end, dump_json(empty_payload(kind, start)), actor_id, now, now),
            )
            row = _select_week(conn, table, member_id, week_start)
            logger.info("Created %s week %s for member %s", kind, week_start, member_id)

        payload = load_json(row.get("payload_json"), {}) or empty_payload(kind, start)
        payload = merge(payload)
        payload_json = dump_json(payload)
        conn.execute(
            f"UPDATE {table} SET payload_json = ?, updated_by = ?, updated_at = ? WHERE id = ?",
            (payload_json, actor_id, now, row["id"]),
        )
        # Backfilling an older week leaves the reference alone.
        if _is_newer_week(conn, table, member[ref_column], week_start):
            conn.execute(
                f"UPDATE members SET {ref_column} = ?, updated_at = ? WHERE id = ?",
                (row["id"], now, member_id),
            )

    row.update({"payload_json": payload_json, "updated_by": actor_id, "updated_at": now})
    logger.info("Saved %s for member %s on %s (week %s)", kind, member_id, weekday_name(day), week_start)
    return _row_to_plan(kind, row)


def save_workout_day(
    *,
    member_id: str,
    exercises: List[Dict[str, Any]],
    day: Optional[date] = None,
    notes: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> Dict[str, Any]:
    day = day or date.today()
    name = weekday_name(day)
    return _save_day(
        "workout",
        member_id=member_id,
        day=day,
        actor_id=actor_id,
        merge=lambda payload: merge_workout_day(payload, name, exercises, notes),
    )


def save_nutrition_day(
    *,
    member_id: str,
    foods: List[Dict[str, Any]],
    day: Optional[date] = None,
    actor_id: Optional[str] = None,
) -> Dict[str, Any]:
    day = day or date.today()
    name = weekday_name(day)
    return _save_day(
        "nutrition",
        member_id=member_id,
        day=day,
        actor_id=actor_id,
        merge=lambda payload: merge_nutrition_day(payload, name, day.isoformat(), foods),
    )


def get_week(kind: str, *, member_id: str, day: Optional[date] = None) -> Dict[str, Any]:
    """The week document containing ``day``, or an unsaved zeroed placeholder."""
    table = _table(kind)
    start, end = week_bounds(day)
    with db_conn(settings.app_db_path) as conn:
        row = _select_week(conn, table, member_id, start.isoformat())
    if row is None:
        row = {
            "id": None,
            "member_id": member_id,
            "week_start": start.isoformat(),
            "week_end": end.isoformat(),
            "payload_json": None,
        }
    return _row_to_plan(kind, row)


def list_weeks(
    kind: str,
    *,
    member_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """Week documents whose week_start date lies in ``[start, end]``, oldest first."""
    sql = f"SELECT * FROM {_table(kind)} WHERE member_id = ?"
    params: list[Any] = [member_id]
    if start:
        sql += " AND substr(week_start, 1, 10) >= ?"
        params.append(start.isoformat())
    if end:
        sql += " AND substr(week_start, 1, 10) <= ?"
        params.append(end.isoformat())
    sql += " ORDER BY week_start ASC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_plan(kind, dict(r)) for r in rows]
