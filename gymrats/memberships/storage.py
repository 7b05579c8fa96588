# -*- coding: utf-8 -*-
"""Memberships — billing records and the member's membership state."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from fastapi import HTTPException

from ..app_db import db_conn, dump_json, load_json
from ..config import settings
from .pricing import add_months, tier_of, total_price

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def parse_ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _row_to_membership(row: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(row)
    out["is_popular"] = bool(out.get("is_popular"))
    out["features"] = load_json(out.pop("features_json", None), [])
    return out


def _insert_membership(conn: sqlite3.Connection, row: Dict[str, Any]) -> None:
    if not conn.execute("SELECT 1 FROM members WHERE id = ?", (row["member_id"],)).fetchone():
        raise HTTPException(status_code=404, detail="Member not found")
    conn.execute(
        f"INSERT INTO memberships ({', '.join(row)}) VALUES ({', '.join('?' for _ in row)})",
        tuple(row.values()),
    )


def create_membership(
    *,
    member_id: str,
    plan: str,
    duration: int,
    payment_method: str = "credit_card",
    card_type: Optional[str] = None,
    card_number: Optional[str] = None,
    price: Optional[float] = None,
    start: Optional[datetime] = None,
    is_popular: bool = False,
    features: Optional[List[str]] = None,
    conn: Optional[sqlite3.Connection] = None,
) -> Dict[str, Any]:
    plan = tier_of(plan)
    start = start or _now()
    row = {
        "id": str(uuid4()),
        "member_id": member_id,
        "plan": plan,
        "duration": int(duration),
        "start_date": _iso(start),
        "end_date": _iso(add_months(start, duration)),
        "price": float(price if price is not None else total_price(plan, duration)),
        "payment_method": payment_method,
        "card_type": card_type,
        # Only the last four digits of a card are ever kept.
        "card_last_four": card_number[-4:] if card_number else None,
        "is_popular": 1 if is_popular else 0,
        "features_json": dump_json(list(features or [])),
        "created_at": _iso(_now()),
    }
    if conn is not None:
        _insert_membership(conn, row)
    else:
        with db_conn(settings.app_db_path) as own:
            _insert_membership(own, row)
    logger.info("Membership %s (%s, %d months) recorded for member %s", row["id"], plan, duration, member_id)
    return _row_to_membership(row)


def get_active_membership(member_id: str, plan: str, now: Optional[datetime] = None) -> Optional[Dict[str, Any]]:
    """Latest billing record for ``plan`` whose end date is still in the future."""
    now = now or _now()
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM memberships WHERE member_id = ? AND plan = ? ORDER BY end_date DESC",
            (member_id, tier_of(plan)),
        ).fetchall()
    for row in rows:
        end = parse_ts(row["end_date"])
        if end and end > now:
            return _row_to_membership(dict(row))
    return None


def get_membership(membership_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute("SELECT * FROM memberships WHERE id = ?", (membership_id,)).fetchone()
    return _row_to_membership(dict(row)) if row else None


def list_memberships(*, member_id: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM memberships"
    params: list[Any] = []
    if member_id:
        sql += " WHERE member_id = ?"
        params.append(member_id)
    sql += " ORDER BY created_at DESC"
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_membership(dict(r)) for r in rows]


def update_membership(membership_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    updates = {k: v for k, v in fields.items() if v is not None}
    if "features" in updates:
        updates["features_json"] = dump_json(updates.pop("features"))
    if "is_popular" in updates:
        updates["is_popular"] = 1 if updates["is_popular"] else 0
    with db_conn(settings.app_db_path) as conn:
        if updates:
            assignments = ", ".join(f"{k} = ?" for k in updates)
            conn.execute(
                f"UPDATE memberships SET {assignments} WHERE id = ?",
                (*updates.values(), membership_id),
            )
        row = conn.execute("SELECT * FROM memberships WHERE id = ?", (membership_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Membership not found")
    return _row_to_membership(dict(row))


def delete_membership(membership_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute("DELETE FROM memberships WHERE id = ?", (membership_id,))
        return cur.rowcount > 0


def is_membership_active(member: Dict[str, Any], now: Optional[datetime] = None) -> bool:
    now = now or _now()
    end = parse_ts(member.get("membership_end"))
    return (
        member.get("status") == "Active"
        and int(member.get("months_remaining") or 0) > 0
        and (end is None or end > now)
    )


def membership_status(member: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    return {
        "membership_type": member.get("membership_type") or "Basic",
        "months_remaining": int(member.get("months_remaining") or 0),
        "end_date": member.get("membership_end"),
        "status": member.get("status") or "Active",
        "auto_renew": bool(member.get("auto_renew")),
        "is_active": is_membership_active(member, now),
    }


def _get_member(conn, member_id: str) -> Dict[str, Any]:
    row = conn.execute("SELECT * FROM members WHERE id = ?", (member_id,)).fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Member not found")
    return dict(row)


def extend_membership(
    member_id: str,
    additional_months: int,
    *,
    payment_method: str = "credit_card",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    now = now or _now()
    with db_conn(settings.app_db_path) as conn:
        member = _get_member(conn, member_id)
        months = int(member.get("months_remaining") or 0) + int(additional_months)
        end = add_months(now, months)
        conn.execute(
            """
            UPDATE members
            SET months_remaining = ?, last_renewal_date = ?, membership_end = ?, status = 'Active', updated_at = ?
            WHERE id = ?
            """,
            (months, _iso(now), _iso(end), _iso(now), member_id),
        )
    plan = tier_of(member.get("membership_type") or "basic")
    create_membership(
        member_id=member_id,
        plan=plan,
        duration=additional_months,
        payment_method=payment_method,
        start=now,
    )
    # The billing row covers the extension; the member's end date covers everything left.
    logger.info("Member %s extended by %d months (now %d remaining)", member_id, additional_months, months)
    return {
        "message": f"Membership extended by {additional_months} months successfully",
        "months_remaining": months,
        "end_date": _iso(end),
    }


def toggle_auto_renew(member_id: str) -> bool:
    with db_conn(settings.app_db_path) as conn:
        member = _get_member(conn, member_id)
        enabled = not bool(member.get("auto_renew"))
        conn.execute(
            "UPDATE members SET auto_renew = ?, updated_at = ? WHERE id = ?",
            (1 if enabled else 0, _iso(_now()), member_id),
        )
    return enabled


def monthly_tick() -> Dict[str, int]:
    """Take one month off every member that has any left; expire those reaching zero."""
    now = _iso(_now())
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT id, months_remaining FROM members WHERE months_remaining > 0").fetchall()
        expired = 0
        for row in rows:
            remaining = int(row["months_remaining"]) - 1
            if remaining == 0:
                expired += 1
                conn.execute(
                    "UPDATE members SET months_remaining = 0, status = 'Expired', updated_at = ? WHERE id = ?",
                    (now, row["id"]),
                )
            else:
                conn.execute(
                    "UPDATE members SET months_remaining = ?, updated_at = ? WHERE id = ?",
                    (remaining, now, row["id"]),
                )
    logger.info("Monthly membership tick: %d processed, %d expired", len(rows), expired)
    return {"processed": len(rows), "expired": expired}
