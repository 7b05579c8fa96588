# -*- coding: utf-8 -*-
"""Catalog (exercises + nutrition plan templates) — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ExerciseCategory = Literal["Strength", "Cardio", "Flexibility", "Balance"]
Difficulty = Literal["Beginner", "Intermediate", "Advanced"]
ExerciseType = Literal["Reps", "Time"]
PlanLevel = Literal["Basic", "Intermediate", "Advanced"]
NutritionPlanType = Literal["Bulking", "Cutting", "Maintenance", "Specialty"]
TargetGoal = Literal["Weight Gain", "Weight Loss", "Maintenance", "Health Improvement"]
MembershipLevel = Literal["Basic", "Gold", "Platinum"]


class ExerciseCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    category: ExerciseCategory
    difficulty: Difficulty
    target_muscles: List[str] = Field(..., min_length=1)
    instructions: str = Field(..., min_length=1)
    verified: bool = False
    image: Optional[str] = None
    type: ExerciseType
    default_sets: int = Field(3, ge=1, le=20)
    default_reps_or_duration: str = Field(..., min_length=1, description='e.g. "12 reps" or "30 seconds"')
    equipment: List[str] = Field(default_factory=list)
    workout_plan_level: PlanLevel


class ExerciseUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    category: Optional[ExerciseCategory] = None
    difficulty: Optional[Difficulty] = None
    target_muscles: Optional[List[str]] = None
    instructions: Optional[str] = None
    verified: Optional[bool] = None
    image: Optional[str] = None
    type: Optional[ExerciseType] = None
    default_sets: Optional[int] = Field(None, ge=1, le=20)
    default_reps_or_duration: Optional[str] = None
    equipment: Optional[List[str]] = None
    workout_plan_level: Optional[PlanLevel] = None


class Exercise(ExerciseCreateRequest):
    id: str
    usage_count: int = 0
    created_at: str
    updated_at: Optional[str] = None


class ExerciseListResponse(BaseModel):
    count: int
    items: List[Exercise]
    muscle_groups: List[str] = Field(default_factory=list)


class DailyTargets(BaseModel):
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fats: float = Field(..., ge=0)


class MealFood(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: str = Field(..., min_length=1, description='e.g. "100g"')
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fats: float = Field(..., ge=0)


class MealIn(BaseModel):
    meal_name: str = Field(..., min_length=1, description='e.g. "Breakfast"')
    time: str = Field(..., min_length=1, description='e.g. "8:00 AM"')
    foods: List[MealFood] = Field(default_factory=list)


class Meal(MealIn):
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fats: float = 0.0


class NutritionPlanCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    type: NutritionPlanType
    target_goal: TargetGoal
    description: str = Field(..., min_length=1)
    duration: int = Field(..., ge=1, description="Weeks")
    member_id: Optional[str] = None
    membership_level: MembershipLevel
    daily_targets: DailyTargets
    meals: List[MealIn] = Field(default_factory=list)
    verified: bool = False
    image: Optional[str] = None


class NutritionPlanUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    type: Optional[NutritionPlanType] = None
    target_goal: Optional[TargetGoal] = None
    description: Optional[str] = None
    duration: Optional[int] = Field(None, ge=1)
    member_id: Optional[str] = None
    membership_level: Optional[MembershipLevel] = None
    daily_targets: Optional[DailyTargets] = None
    meals: Optional[List[MealIn]] = None
    verified: Optional[bool] = None
    image: Optional[str] = None


class NutritionPlan(BaseModel):
    id: str
    name: str
    type: str
    target_goal: str
    description: str
    duration: int
    member_id: Optional[str] = None
    membership_level: str
    daily_targets: DailyTargets
    meals: List[Meal] = Field(default_factory=list)
    verified: bool = False
    image: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None


class NutritionPlanListResponse(BaseModel):
    count: int
    items: List[NutritionPlan]
