# -*- coding: utf-8 -*-
"""Catalog — public endpoints (verified content only)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from .models import Exercise, ExerciseListResponse, NutritionPlan, NutritionPlanListResponse
from .storage import get_exercise, get_nutrition_plan, list_exercises, list_nutrition_plans, muscle_groups

router = APIRouter(prefix="/api/catalog", tags=["Catalog"])


@router.get("/exercises", response_model=ExerciseListResponse, summary="Verified exercises")
def exercises(level: Optional[str] = Query(default=None, description="Basic | Intermediate | Advanced")):
    rows = list_exercises(verified=True, workout_plan_level=level)
    return ExerciseListResponse(
        count=len(rows),
        items=[Exercise(**r) for r in rows],
        muscle_groups=muscle_groups(rows),
    )


@router.get("/exercises/{exercise_id}", response_model=Exercise, summary="One verified exercise")
def exercise_detail(exercise_id: str):
    row = get_exercise(exercise_id)
    if not row or not row["verified"]:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return Exercise(**row)


@router.get("/nutrition-plans", response_model=NutritionPlanListResponse, summary="Verified nutrition plans")
def nutrition_plans(level: Optional[str] = Query(default=None, description="Basic | Gold | Platinum")):
    rows = list_nutrition_plans(verified=True, membership_level=level)
    return NutritionPlanListResponse(count=len(rows), items=[NutritionPlan(**r) for r in rows])


@router.get("/nutrition-plans/{plan_id}", response_model=NutritionPlan, summary="One verified nutrition plan")
def nutrition_plan_detail(plan_id: str):
    row = get_nutrition_plan(plan_id)
    if not row or not row["verified"]:
        raise HTTPException(status_code=404, detail="Nutrition plan not found")
    return NutritionPlan(**row)
