# -*- coding: utf-8 -*-
"""Members — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"
PHONE_PATTERN = r"^\+?[\d\s-]{10,}$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

Gender = Literal["Male", "Female", "Other"]
AccountStatus = Literal["Active", "Inactive", "Suspended", "Expired"]
MembershipType = Literal["Basic", "Gold", "Platinum"]


class FitnessGoals(BaseModel):
    calorie_goal: float = Field(2200, ge=0)
    protein_goal: float = Field(90, ge=0)
    weight_goal: Optional[float] = Field(None, ge=0)


class MemberPublic(BaseModel):
    id: str
    full_name: str
    email: str
    dob: str
    gender: str
    phone: str
    weight: float
    height: float
    bmi: Optional[float] = None
    body_fat: Optional[float] = None
    goal: Optional[str] = None
    status: str
    membership_type: str
    months_remaining: int
    membership_start: Optional[str] = None
    membership_end: Optional[str] = None
    auto_renew: bool = False
    last_renewal_date: Optional[str] = None
    fitness_goals: FitnessGoals
    trainer_id: Optional[str] = None
    current_workout_week_id: Optional[str] = None
    current_nutrition_week_id: Optional[str] = None
    created_at: str


class MemberListResponse(BaseModel):
    count: int
    items: List[MemberPublic]


class ProfileUpdateRequest(BaseModel):
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    weight: Optional[float] = Field(None, ge=0, le=500, description="kg")
    height: Optional[float] = Field(None, ge=0, le=300, description="cm")
    body_fat: Optional[float] = Field(None, ge=0, le=100)
    goal: Optional[str] = Field(None, max_length=256)
    fitness_goals: Optional[FitnessGoals] = None


class MemberCreateRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    dob: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    gender: Gender
    phone: str = Field(..., pattern=PHONE_PATTERN)
    weight: float = Field(0, ge=0, le=500)
    height: float = Field(0, ge=0, le=300)
    status: AccountStatus = "Active"
    membership_type: MembershipType = "Basic"


class MemberAdminUpdateRequest(ProfileUpdateRequest):
    full_name: Optional[str] = Field(None, min_length=1, max_length=128)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=254)
    dob: Optional[str] = Field(None, pattern=DATE_PATTERN)
    gender: Optional[Gender] = None
    status: Optional[AccountStatus] = None
    membership_type: Optional[MembershipType] = None


class ClassSchedule(BaseModel):
    id: str
    trainer_id: str
    member_id: str
    name: str
    date: str
    time: str
    meet_link: Optional[str] = None
    description: Optional[str] = None
    created_at: str


class ScheduleResponse(BaseModel):
    count: int
    items: List[ClassSchedule]
