# -*- coding: utf-8 -*-
"""Verifiers — DB storage helpers and the application review workflow."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, load_json
from ..config import settings
from ..trainers.storage import create_trainer, get_application, get_application_row

logger = logging.getLogger(__name__)

_VERIFIER_COLUMNS = {"name", "phone", "expertise", "accuracy", "status", "image"}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def verifier_public(row: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in row.items() if k != "password_hash"}


def create_verifier(
    *,
    name: str,
    email: str,
    password_hash: str,
    expertise: str,
    phone: Optional[str] = None,
    image: Optional[str] = None,
    status: str = "Pending",
) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "name": name.strip(),
        "email": email.lower().strip(),
        "password_hash": password_hash,
        "phone": phone,
        "expertise": expertise,
        "status": status,
        "image": image,
        "join_date": _utc_now(),
    }
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                f"INSERT INTO verifiers ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})",
                tuple(row.values()),
            )
            created = conn.execute("SELECT * FROM verifiers WHERE id = ?", (row["id"],)).fetchone()
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=400, detail="Email already registered") from exc
    logger.info("Verifier %s registered (%s)", row["id"], status)
    return verifier_public(dict(created))


def get_verifier(verifier_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM verifiers WHERE id = ?", (verifier_id,)).fetchone()
    return verifier_public(dict(row)) if row else None


def get_verifier_or_404(verifier_id: str) -> Dict[str, Any]:
    verifier = get_verifier(verifier_id)
    if not verifier:
        raise HTTPException(status_code=404, detail="Verifier not found")
    return verifier


def list_verifiers() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT * FROM verifiers ORDER BY join_date DESC").fetchall()
    return [verifier_public(dict(r)) for r in rows]


def update_verifier(verifier_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    updates = {k: v for k, v in fields.items() if k in _VERIFIER_COLUMNS and v is not None}
    if updates:
        assignments = ", ".join(f"{k} = ?" for k in updates)
        with db_conn(settings.app_db_path) as conn:
            conn.execute(f"UPDATE verifiers SET {assignments} WHERE id = ?", (*updates.values(), verifier_id))
    return get_verifier_or_404(verifier_id)


def delete_verifier(verifier_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        return conn.execute("DELETE FROM verifiers WHERE id = ?", (verifier_id,)).rowcount > 0


# ---- review workflow ----

def claim_application(application_id: str, verifier_id: str) -> Dict[str, Any]:
    """Move a Pending application to In Progress under ``verifier_id``."""
    with db_conn(settings.app_db_path) as conn:
        claimed = conn.execute(
            "UPDATE trainer_applications SET status = 'In Progress', verifier_id = ? WHERE id = ? AND status = 'Pending'",
            (verifier_id, application_id),
        ).rowcount
    if not claimed:
        if get_application(application_id) is None:
            raise HTTPException(status_code=404, detail="Application not found")
        raise HTTPException(status_code=409, detail="Application is not pending")
    logger.info("Application %s claimed by verifier %s", application_id, verifier_id)
    return get_application(application_id)


def decide_application(
    application_id: str,
    verifier_id: str,
    *,
    status: str,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Approve or reject an In Progress application assigned to ``verifier_id``.

    Approval creates the trainer account from the application. Both outcomes
    count towards the verifier's reviewed content.
    """
    if status not in ("Approved", "Rejected"):
        raise HTTPException(status_code=400, detail="Invalid decision")

    with db_conn(settings.app_db_path) as conn:
        conn.execute("BEGIN IMMEDIATE")
        application = get_application_row(application_id, conn=conn)
        if application is None:
            raise HTTPException(status_code=404, detail="Application not found")
        if application["verifier_id"] != verifier_id:
            raise HTTPException(status_code=403, detail="Application is assigned to another verifier")
        if application["status"] != "In Progress":
            raise HTTPException(status_code=409, detail="Application is not in progress")

        if status == "Approved":
            create_trainer(
                name=f"{application['first_name']} {application['last_name']}",
                email=application["email"],
                password_hash=application["password_hash"],
                phone=application["phone"],
                experience=application["experience"],
                specializations=load_json(application.get("specializations_json"), []),
                verifier_id=verifier_id,
                conn=conn,
            )
        conn.execute(
            "UPDATE trainer_applications SET status = ?, verification_notes = ? WHERE id = ?",
            (status, notes, application_id),
        )
        conn.execute(
            "UPDATE verifiers SET content_reviewed = content_reviewed + 1 WHERE id = ?",
            (verifier_id,),
        )

    logger.info("Application %s %s by verifier %s", application_id, status.lower(), verifier_id)
    return get_application(application_id)
