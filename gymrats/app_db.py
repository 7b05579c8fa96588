# -*- coding: utf-8 -*-
"""App database — SQLite helpers.

Every collection of the gym lives in one SQLite file. List-valued and nested
fields are stored as JSON text columns and decoded by the owning storage module.
"""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS members (
                id TEXT PRIMARY KEY,
                full_name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                dob TEXT NOT NULL,
                gender TEXT NOT NULL,
                phone TEXT NOT NULL,
                weight REAL NOT NULL DEFAULT 0,
                height REAL NOT NULL DEFAULT 0,
                bmi REAL,
                body_fat REAL,
                goal TEXT,
                status TEXT NOT NULL DEFAULT 'Active',
                membership_type TEXT NOT NULL DEFAULT 'Basic',
                months_remaining INTEGER NOT NULL DEFAULT 0,
                membership_start TEXT,
                membership_end TEXT,
                auto_renew INTEGER NOT NULL DEFAULT 0,
                last_renewal_date TEXT,
                calorie_goal REAL NOT NULL DEFAULT 2200,
                protein_goal REAL NOT NULL DEFAULT 90,
                weight_goal REAL,
                trainer_id TEXT,
                current_workout_week_id TEXT,
                current_nutrition_week_id TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT,
                FOREIGN KEY(trainer_id) REFERENCES trainers(id) ON DELETE SET NULL
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS memberships (
                id TEXT PRIMARY KEY,
                member_id TEXT NOT NULL,
                plan TEXT NOT NULL,
                duration INTEGER NOT NULL,
                start_date TEXT NOT NULL,
                end_date TEXT NOT NULL,
                price REAL NOT NULL,
                payment_method TEXT NOT NULL,
                card_type TEXT,
                card_last_four TEXT,
                is_popular INTEGER NOT NULL DEFAULT 0,
                features_json TEXT NOT NULL DEFAULT '[]',
                created_at TEXT NOT NULL,
                FOREIGN KEY(member_id) REFERENCES members(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_memberships_member_plan_end ON memberships(member_id, plan, end_date DESC);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS trainers (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                phone TEXT NOT NULL,
                experience TEXT NOT NULL,
                specializations_json TEXT NOT NULL DEFAULT '[]',
                verifier_id TEXT,
                subscription_type TEXT NOT NULL DEFAULT 'Free',
                subscription_months_remaining INTEGER NOT NULL DEFAULT 0,
                max_clients INTEGER NOT NULL DEFAULT 5,
                rating REAL NOT NULL DEFAULT 0,
                status TEXT NOT NULL DEFAULT 'Active',
                created_at TEXT NOT NULL,
                updated_at TEXT
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS trainer_sessions (
                id TEXT PRIMARY KEY,
                trainer_id TEXT NOT NULL,
                member_id TEXT NOT NULL,
                name TEXT NOT NULL,
                date TEXT NOT NULL,
                time TEXT NOT NULL,
                meet_link TEXT,
                description TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY(trainer_id) REFERENCES trainers(id) ON DELETE CASCADE,
                FOREIGN KEY(member_id) REFERENCES members(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS trainer_applications (
                id TEXT PRIMARY KEY,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                phone TEXT NOT NULL,
                experience TEXT NOT NULL,
                specializations_json TEXT NOT NULL DEFAULT '[]',
                certification TEXT NOT NULL,
                certification_doc TEXT NOT NULL,
                bio TEXT,
                location TEXT,
                hourly_rate REAL,
                status TEXT NOT NULL DEFAULT 'Pending',
                verifier_id TEXT,
                submitted_date TEXT NOT NULL,
                verification_notes TEXT
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_trainer_applications_status_submitted ON trainer_applications(status, submitted_date);"
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS verifiers (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                phone TEXT,
                expertise TEXT NOT NULL,
                content_reviewed INTEGER NOT NULL DEFAULT 0,
                accuracy REAL NOT NULL DEFAULT 0,
                status TEXT NOT NULL DEFAULT 'Pending',
                image TEXT,
                join_date TEXT NOT NULL
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                category TEXT NOT NULL,
                difficulty TEXT NOT NULL,
                target_muscles_json TEXT NOT NULL DEFAULT '[]',
                instructions TEXT NOT NULL,
                verified INTEGER NOT NULL DEFAULT 0,
                image TEXT,
                usage_count INTEGER NOT NULL DEFAULT 0,
                type TEXT NOT NULL,
                default_sets INTEGER NOT NULL DEFAULT 3,
                default_reps_or_duration TEXT NOT NULL,
                equipment_json TEXT NOT NULL DEFAULT '[]',
                workout_plan_level TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS nutrition_plans (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                type TEXT NOT NULL,
                target_goal TEXT NOT NULL,
                description TEXT NOT NULL,
                duration INTEGER NOT NULL,
                member_id TEXT,
                membership_level TEXT NOT NULL,
                daily_targets_json TEXT NOT NULL,
                meals_json TEXT NOT NULL DEFAULT '[]',
                verified INTEGER NOT NULL DEFAULT 0,
                image TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT
            );
            """
        )
        for table in ("weekly_workouts", "weekly_nutrition"):
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {table} (
                    id TEXT PRIMARY KEY,
                    member_id TEXT NOT NULL,
                    week_start TEXT NOT NULL,
                    week_end TEXT NOT NULL,
                    payload_json TEXT NOT NULL,
                    updated_by TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    FOREIGN KEY(member_id) REFERENCES members(id) ON DELETE CASCADE
                );
                """
            )
            cur.execute(
                f"CREATE UNIQUE INDEX IF NOT EXISTS idx_{table}_member_week ON {table}(member_id, week_start);"
            )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def load_json(raw: Any, default: Any) -> Any:
    if not raw:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return default


def dump_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)
