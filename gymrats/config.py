from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the GymRats backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("GYMRATS_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("GYMRATS_DB_PATH") or (self.data_root / "gymrats.db")
        ).expanduser()
        # In production you MUST set GYMRATS_JWT_SECRET. The fallback only exists for local demos.
        self.jwt_secret: str = os.environ.get("GYMRATS_JWT_SECRET") or "gymrats-dev-secret"
        self.token_ttl_hours: int = int(os.environ.get("GYMRATS_TOKEN_TTL_HOURS") or "1")
        self.cookie_secure: bool = (os.environ.get("GYMRATS_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.log_level: str = (os.environ.get("GYMRATS_LOG_LEVEL") or "INFO").upper()
        self.host: str = os.environ.get("GYMRATS_HOST") or "127.0.0.1"
        port_raw = os.environ.get("GYMRATS_PORT") or "8000"
        try:
            self.port: int = int(port_raw)
        except ValueError:
            self.port = 8000

        admins = os.environ.get("GYMRATS_ADMIN_EMAILS", "")
        self.admin_emails: List[str] = [
            email.strip().lower() for email in admins.split(",") if email.strip()
        ]

        cors = os.environ.get("GYMRATS_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
