# -*- coding: utf-8 -*-
"""Weekly plans — Pydantic models."""

from __future__ import annotations

from datetime import date as Date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class WorkoutExercise(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    exercise_id: Optional[str] = Field(None, description="Catalog exercise, if picked from it")
    sets: int = Field(3, ge=0, le=100)
    reps: Optional[str] = Field(None, max_length=64, description='e.g. "12" or "8-10"')
    weight_kg: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = Field(None, max_length=64, description='e.g. "30 seconds"')
    completed: bool = False
    notes: Optional[str] = Field(None, max_length=500)


class WorkoutEntry(WorkoutExercise):
    day: Weekday


class WorkoutDaySaveRequest(BaseModel):
    date: Optional[Date] = Field(None, description="Day to save; defaults to today")
    exercises: List[WorkoutExercise] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=2000)


class WorkoutDaySummary(BaseModel):
    exercise_count: int = 0
    total_sets: int = 0


class WorkoutWeekSummary(BaseModel):
    active_days: int = 0
    total_exercises: int = 0
    total_sets: int = 0
    avg_exercises_per_active_day: float = 0.0
    days: Dict[str, WorkoutDaySummary] = Field(default_factory=dict)


class WeeklyWorkoutPlan(BaseModel):
    id: Optional[str] = Field(None, description="None until the week is first saved")
    member_id: str
    week_start: str
    week_end: str
    exercises: List[WorkoutEntry] = Field(default_factory=list)
    notes: Optional[str] = None
    summary: WorkoutWeekSummary = Field(default_factory=WorkoutWeekSummary)
    updated_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Macros(BaseModel):
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)


class FoodItem(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)


class NutritionDaySaveRequest(BaseModel):
    date: Optional[Date] = Field(None, description="Day to save; defaults to today")
    foods: List[FoodItem] = Field(default_factory=list)


class NutritionDayEntry(BaseModel):
    date: str
    calories: float = 0.0
    protein: float = 0.0
    macros: Macros = Field(default_factory=Macros)
    foods: List[FoodItem] = Field(default_factory=list)


class NutritionAverages(BaseModel):
    days_logged: int = 0
    calories: float = 0.0
    protein: float = 0.0
    macros: Macros = Field(default_factory=Macros)


class WeeklyNutritionPlan(BaseModel):
    id: Optional[str] = Field(None, description="None until the week is first saved")
    member_id: str
    week_start: str
    week_end: str
    days: Dict[str, NutritionDayEntry]
    averages: NutritionAverages = Field(default_factory=NutritionAverages)
    updated_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class WeeklyWorkoutList(BaseModel):
    count: int
    items: List[WeeklyWorkoutPlan]


class WeeklyNutritionList(BaseModel):
    count: int
    items: List[WeeklyNutritionPlan]
