# -*- coding: utf-8 -*-
"""Weekly plans — API endpoints.

Members read and write their own weeks; trainers read and write the weeks of
their assigned clients.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import require_role
from ..members.storage import get_member_or_404
from .models import (
    NutritionDaySaveRequest,
    WeeklyNutritionList,
    WeeklyNutritionPlan,
    WeeklyWorkoutList,
    WeeklyWorkoutPlan,
    WorkoutDaySaveRequest,
)
from .storage import get_week, list_weeks, save_nutrition_day, save_workout_day

router = APIRouter(prefix="/api/weekly", tags=["Weekly plans"])

_plan_editor = require_role("member", "trainer", "admin")


def authorize_member_access(principal: Dict[str, Any], member_id: str) -> Dict[str, Any]:
    """The member row, if ``principal`` may act on that member's plans."""
    member = get_member_or_404(member_id)
    role = principal["role"]
    if role == "admin":
        return member
    if role == "member" and principal["id"] == member_id:
        return member
    if role == "trainer" and member.get("trainer_id") == principal["id"]:
        return member
    raise HTTPException(status_code=403, detail="Not allowed to access this member's plans")


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")


@router.put("/{member_id}/workout", response_model=WeeklyWorkoutPlan, summary="Save one day of the weekly workout")
def save_workout(member_id: str, request: WorkoutDaySaveRequest, principal: dict = Depends(_plan_editor)):
    authorize_member_access(principal, member_id)
    plan = save_workout_day(
        member_id=member_id,
        exercises=[e.model_dump() for e in request.exercises],
        day=request.date,
        notes=request.notes,
        actor_id=principal["id"],
    )
    return WeeklyWorkoutPlan(**plan)


@router.get("/{member_id}/workout/current", response_model=WeeklyWorkoutPlan, summary="Workout week containing a date")
def current_workout(
    member_id: str,
    day: Optional[date] = Query(default=None, alias="date", description="Defaults to today"),
    principal: dict = Depends(_plan_editor),
):
    authorize_member_access(principal, member_id)
    return WeeklyWorkoutPlan(**get_week("workout", member_id=member_id, day=day))


@router.get("/{member_id}/workout", response_model=WeeklyWorkoutList, summary="Workout weeks in a date range")
def workout_history(
    member_id: str,
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    principal: dict = Depends(_plan_editor),
):
    authorize_member_access(principal, member_id)
    _check_range(start, end)
    items = [WeeklyWorkoutPlan(**p) for p in list_weeks("workout", member_id=member_id, start=start, end=end)]
    return WeeklyWorkoutList(count=len(items), items=items)


@router.put("/{member_id}/nutrition", response_model=WeeklyNutritionPlan, summary="Save one day of weekly nutrition")
def save_nutrition(member_id: str, request: NutritionDaySaveRequest, principal: dict = Depends(_plan_editor)):
    authorize_member_access(principal, member_id)
    plan = save_nutrition_day(
        member_id=member_id,
        foods=[f.model_dump() for f in request.foods],
        day=request.date,
        actor_id=principal["id"],
    )
    return WeeklyNutritionPlan(**plan)


@router.get("/{member_id}/nutrition/current", response_model=WeeklyNutritionPlan, summary="Nutrition week containing a date")
def current_nutrition(
    member_id: str,
    day: Optional[date] = Query(default=None, alias="date", description="Defaults to today"),
    principal: dict = Depends(_plan_editor),
):
    authorize_member_access(principal, member_id)
    return WeeklyNutritionPlan(**get_week("nutrition", member_id=member_id, day=day))


@router.get("/{member_id}/nutrition", response_model=WeeklyNutritionList, summary="Nutrition weeks in a date range")
def nutrition_history(
    member_id: str,
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    principal: dict = Depends(_plan_editor),
):
    authorize_member_access(principal, member_id)
    _check_range(start, end)
    items = [WeeklyNutritionPlan(**p) for p in list_weeks("nutrition", member_id=member_id, start=start, end=end)]
    return WeeklyNutritionList(count=len(items), items=items)
