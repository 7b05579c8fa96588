# -*- coding: utf-8 -*-
"""Members — API endpoints for the signed-in member."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import require_role
from ..catalog.models import Exercise, ExerciseListResponse, NutritionPlan, NutritionPlanListResponse
from ..catalog.storage import list_exercises, list_nutrition_plans, muscle_groups
from ..memberships.pricing import TIER_LABELS, TIER_WORKOUT_LEVELS, tier_of
from .models import ClassSchedule, MemberPublic, ProfileUpdateRequest, ScheduleResponse
from .storage import get_member_or_404, list_schedule, member_public, update_member

router = APIRouter(prefix="/api/members", tags=["Members"])


@router.get("/me", response_model=MemberPublic, summary="My profile")
def me(member: dict = Depends(require_role("member"))):
    return MemberPublic(**member_public(get_member_or_404(member["id"])))


@router.patch("/me", response_model=MemberPublic, summary="Update my profile")
def update_me(request: ProfileUpdateRequest, member: dict = Depends(require_role("member"))):
    row = update_member(member["id"], request.model_dump(exclude_unset=True))
    return MemberPublic(**member_public(row))


@router.get("/me/exercises", response_model=ExerciseListResponse, summary="Exercises for my tier")
def my_exercises(member: dict = Depends(require_role("member"))):
    tier = tier_of(get_member_or_404(member["id"])["membership_type"])
    rows = list_exercises(verified=True, workout_plan_level=TIER_WORKOUT_LEVELS[tier])
    return ExerciseListResponse(
        count=len(rows),
        items=[Exercise(**r) for r in rows],
        muscle_groups=muscle_groups(rows),
    )


@router.get("/me/nutrition-plans", response_model=NutritionPlanListResponse, summary="Nutrition plans for my tier")
def my_nutrition_plans(member: dict = Depends(require_role("member"))):
    tier = tier_of(get_member_or_404(member["id"])["membership_type"])
    rows = list_nutrition_plans(verified=True, membership_level=TIER_LABELS[tier])
    return NutritionPlanListResponse(count=len(rows), items=[NutritionPlan(**r) for r in rows])


@router.get("/me/schedule", response_model=ScheduleResponse, summary="My class schedule")
def my_schedule(member: dict = Depends(require_role("member"))):
    items = [ClassSchedule(**r) for r in list_schedule(member["id"])]
    return ScheduleResponse(count=len(items), items=items)
