# -*- coding: utf-8 -*-
"""Membership tiers, prices and calendar-month arithmetic."""

from __future__ import annotations

import calendar
from datetime import datetime
from typing import Dict

MONTHLY_PRICES: Dict[str, int] = {"basic": 29, "gold": 59, "platinum": 99}
DEFAULT_MONTHLY_PRICE = 29

# membership plan -> catalog levels
TIER_LABELS = {"basic": "Basic", "gold": "Gold", "platinum": "Platinum"}
TIER_WORKOUT_LEVELS = {"basic": "Basic", "gold": "Intermediate", "platinum": "Advanced"}


def monthly_price(plan: str) -> int:
    return MONTHLY_PRICES.get((plan or "").lower(), DEFAULT_MONTHLY_PRICE)


def total_price(plan: str, months: int) -> int:
    return monthly_price(plan) * int(months)


def add_months(dt: datetime, months: int) -> datetime:
    """``dt`` shifted by whole calendar months, clamped to the target month's last day."""
    index = dt.month - 1 + int(months)
    year = dt.year + index // 12
    month = index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def tier_of(membership_type: str) -> str:
    """Normalize "Gold" / "gold" to the plan key; unknown values fall back to basic."""
    key = (membership_type or "").lower().strip()
    return key if key in MONTHLY_PRICES else "basic"


def dashboard_url(plan: str) -> str:
    return f"/userdashboard_{tier_of(plan)[0]}"
