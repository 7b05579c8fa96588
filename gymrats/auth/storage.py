# -*- coding: utf-8 -*-
"""Auth — account lookups across the role tables."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..app_db import db_conn
from ..config import settings

_ROLE_TABLES = {
    "member": "members",
    "admin": "members",
    "trainer": "trainers",
    "verifier": "verifiers",
}


def _role_table(role: str) -> str:
    try:
        return _ROLE_TABLES[role]
    except KeyError:
        raise ValueError(f"unknown role: {role}") from None


def get_account(role: str, account_id: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(f"SELECT * FROM {_role_table(role)} WHERE id = ?", (account_id,)).fetchone()
        return dict(row) if row else None


def get_account_by_email(role: str, email: str) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            f"SELECT * FROM {_role_table(role)} WHERE email = ?",
            (email.lower().strip(),),
        ).fetchone()
        return dict(row) if row else None
