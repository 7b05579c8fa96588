# -*- coding: utf-8 -*-
"""Trainers — DB storage helpers (trainers, onboarding applications, sessions)."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dump_json, load_json
from ..config import settings
from ..members.storage import assign_trainer, get_member_or_404

logger = logging.getLogger(__name__)

_TRAINER_COLUMNS = {
    "name", "phone", "experience", "subscription_type", "subscription_months_remaining",
    "max_clients", "rating", "status",
}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _client_count(conn: sqlite3.Connection, trainer_id: str) -> int:
    row = conn.execute("SELECT COUNT(*) AS n FROM members WHERE trainer_id = ?", (trainer_id,)).fetchone()
    return int(row["n"])


def trainer_public(row: Dict[str, Any], client_count: int = 0) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "email": row["email"],
        "phone": row["phone"],
        "experience": row["experience"],
        "specializations": load_json(row.get("specializations_json"), []),
        "verifier_id": row.get("verifier_id"),
        "subscription": {
            "type": row.get("subscription_type") or "Free",
            "months_remaining": int(row.get("subscription_months_remaining") or 0),
            "max_clients": int(row.get("max_clients") or 0),
        },
        "rating": float(row.get("rating") or 0.0),
        "status": row["status"],
        "client_count": client_count,
        "created_at": row["created_at"],
    }


# ---- trainers ----

def create_trainer(
    *,
    name: str,
    email: str,
    password_hash: str,
    phone: str,
    experience: str,
    specializations: Optional[List[str]] = None,
    verifier_id: Optional[str] = None,
    subscription_type: str = "Free",
    max_clients: int = 5,
    conn: Optional[sqlite3.Connection] = None,
) -> Dict[str, Any]:
    """Insert a trainer; pass ``conn`` to join an open transaction."""
    row = {
        "id": str(uuid4()),
        "name": name.strip(),
        "email": email.lower().strip(),
        "password_hash": password_hash,
        "phone": phone,
        "experience": experience,
        "specializations_json": dump_json(list(specializations or [])),
        "verifier_id": verifier_id,
        "subscription_type": subscription_type,
        "max_clients": int(max_clients),
        "status": "Active",
        "created_at": _utc_now(),
    }
    sql = f"INSERT INTO trainers ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})"
    try:
        if conn is not None:
            conn.execute(sql, tuple(row.values()))
        else:
            with db_conn(settings.app_db_path) as own:
                own.execute(sql, tuple(row.values()))
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail="A trainer with this email already exists") from exc
    logger.info("Trainer %s created (verifier=%s)", row["id"], verifier_id)
    return trainer_public(row)


def get_trainer(trainer_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM trainers WHERE id = ?", (trainer_id,)).fetchone()
        if not row:
            return None
        return trainer_public(dict(row), _client_count(conn, trainer_id))


def get_trainer_or_404(trainer_id: str) -> Dict[str, Any]:
    trainer = get_trainer(trainer_id)
    if not trainer:
        raise HTTPException(status_code=404, detail="Trainer not found")
    return trainer


def trainer_email_exists(email: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT 1 FROM trainers WHERE email = ?", (email.lower().strip(),)).fetchone()
    return row is not None


def list_trainers(*, status: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM trainers"
    params: list[Any] = []
    if status:
        sql += " WHERE status = ?"
        params.append(status)
    sql += " ORDER BY created_at DESC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
        return [trainer_public(dict(r), _client_count(conn, r["id"])) for r in rows]


def update_trainer(trainer_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    updates = {k: v for k, v in fields.items() if k in _TRAINER_COLUMNS and v is not None}
    if fields.get("specializations") is not None:
        updates["specializations_json"] = dump_json(list(fields["specializations"]))
    if updates:
        updates["updated_at"] = _utc_now()
        assignments = ", ".join(f"{k} = ?" for k in updates)
        with db_conn(settings.app_db_path) as conn:
            conn.execute(f"UPDATE trainers SET {assignments} WHERE id = ?", (*updates.values(), trainer_id))
    return get_trainer_or_404(trainer_id)


def delete_trainer(trainer_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        conn.execute("UPDATE members SET trainer_id = NULL WHERE trainer_id = ?", (trainer_id,))
        deleted = conn.execute("DELETE FROM trainers WHERE id = ?", (trainer_id,)).rowcount > 0
    if deleted:
        logger.info("Trainer %s deleted", trainer_id)
    return deleted


def assign_client(trainer_id: str, member_id: str) -> Dict[str, Any]:
    """Attach ``member_id`` to the trainer, refusing when the trainer is full."""
    with db_conn(settings.app_db_path) as conn:
        # Count and assign under one write lock so the limit holds.
        conn.execute("BEGIN IMMEDIATE")
        trainer = conn.execute("SELECT max_clients FROM trainers WHERE id = ?", (trainer_id,)).fetchone()
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")
        member = conn.execute("SELECT trainer_id FROM members WHERE id = ?", (member_id,)).fetchone()
        if not member:
            raise HTTPException(status_code=404, detail="Member not found")
        if member["trainer_id"] != trainer_id:
            if _client_count(conn, trainer_id) >= int(trainer["max_clients"] or 0):
                raise HTTPException(status_code=409, detail="Trainer has reached the maximum number of clients")
            conn.execute(
                "UPDATE members SET trainer_id = ?, updated_at = ? WHERE id = ?",
                (trainer_id, _utc_now(), member_id),
            )
            logger.info("Member %s assigned to trainer %s", member_id, trainer_id)
        row = conn.execute("SELECT * FROM members WHERE id = ?", (member_id,)).fetchone()
    return dict(row)


def unassign_client(trainer_id: str, member_id: str) -> Dict[str, Any]:
    member = get_member_or_404(member_id)
    if member.get("trainer_id") != trainer_id:
        raise HTTPException(status_code=404, detail="Member is not a client of this trainer")
    return assign_trainer(member_id, None)


# ---- applications ----

def _application(row: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in row.items() if k not in ("password_hash", "specializations_json")}
    out["specializations"] = load_json(row.get("specializations_json"), [])
    return out


def create_application(
    *,
    first_name: str,
    last_name: str,
    email: str,
    password_hash: str,
    phone: str,
    experience: str,
    specializations: List[str],
    certification: str,
    certification_doc: str,
    bio: Optional[str] = None,
    location: Optional[str] = None,
    hourly_rate: Optional[float] = None,
) -> Dict[str, Any]:
    email = email.lower().strip()
    if trainer_email_exists(email):
        raise HTTPException(status_code=400, detail="A trainer with this email already exists")
    row = {
        "id": str(uuid4()),
        "first_name": first_name.strip(),
        "last_name": last_name.strip(),
        "email": email,
        "password_hash": password_hash,
        "phone": phone,
        "experience": experience,
        "specializations_json": dump_json(list(specializations)),
        "certification": certification,
        "certification_doc": certification_doc,
        "bio": bio,
        "location": location,
        "hourly_rate": hourly_rate,
        "status": "Pending",
        "submitted_date": _utc_now(),
    }
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                f"INSERT INTO trainer_applications ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})",
                tuple(row.values()),
            )
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail="An application with this email already exists") from exc
    logger.info("Trainer application %s submitted", row["id"])
    return _application(row)


def get_application_row(application_id: str, conn: Optional[sqlite3.Connection] = None) -> Optional[Dict[str, Any]]:
    """Raw application row, password hash included."""
    sql = "SELECT * FROM trainer_applications WHERE id = ?"
    if conn is not None:
        row = conn.execute(sql, (application_id,)).fetchone()
    else:
        with db_conn(settings.app_db_path) as own:
            row = own.execute(sql, (application_id,)).fetchone()
    return dict(row) if row else None


def get_application(application_id: str) -> Optional[Dict[str, Any]]:
    row = get_application_row(application_id)
    return _application(row) if row else None


def list_applications(
    *,
    statuses: Optional[List[str]] = None,
    verifier_id: Optional[str] = None,
    newest_first: bool = False,
) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM trainer_applications WHERE 1 = 1"
    params: list[Any] = []
    if statuses:
        sql += f" AND status IN ({', '.join('?' for _ in statuses)})"
        params.extend(statuses)
    if verifier_id:
        sql += " AND verifier_id = ?"
        params.append(verifier_id)
    sql += " ORDER BY submitted_date " + ("DESC" if newest_first else "ASC")
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_application(dict(r)) for r in rows]


def count_applications(*, statuses: List[str], verifier_id: Optional[str] = None) -> int:
    sql = f"SELECT COUNT(*) AS n FROM trainer_applications WHERE status IN ({', '.join('?' for _ in statuses)})"
    params: list[Any] = list(statuses)
    if verifier_id:
        sql += " AND verifier_id = ?"
        params.append(verifier_id)
    with db_conn(settings.app_db_path) as conn:
        return int(conn.execute(sql, params).fetchone()["n"])


# ---- sessions ----

def create_session(
    *,
    trainer_id: str,
    member_id: str,
    name: str,
    date: str,
    time: str,
    meet_link: Optional[str] = None,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    member = get_member_or_404(member_id)
    if member.get("trainer_id") != trainer_id:
        raise HTTPException(status_code=403, detail="Member is not one of your clients")
    row = {
        "id": str(uuid4()),
        "trainer_id": trainer_id,
        "member_id": member_id,
        "name": name.strip(),
        "date": date,
        "time": time,
        "meet_link": meet_link,
        "description": description,
        "created_at": _utc_now(),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            f"INSERT INTO trainer_sessions ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})",
            tuple(row.values()),
        )
    logger.info("Session %s scheduled by trainer %s for member %s", row["id"], trainer_id, member_id)
    return row


def list_sessions(trainer_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM trainer_sessions WHERE trainer_id = ? ORDER BY date ASC, time ASC",
            (trainer_id,),
        ).fetchall()
    return [dict(r) for r in rows]
