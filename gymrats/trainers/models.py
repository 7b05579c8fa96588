# -*- coding: utf-8 -*-
"""Trainers — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..members.models import DATE_PATTERN, EMAIL_PATTERN, PHONE_PATTERN, MemberPublic
from ..weekly.models import WeeklyNutritionPlan, WeeklyWorkoutPlan

Experience = Literal["1-2", "3-5", "5-10", "10+"]
Specialization = Literal[
    "Weight Loss",
    "Muscle Gain",
    "Flexibility",
    "Cardiovascular",
    "Strength Training",
    "Post-Rehab",
    "Sports Performance",
    "Nutrition",
]
Certification = Literal["NASM", "ACE", "ACSM", "NSCA", "ISSA", "Other"]
SubscriptionType = Literal["Free", "Basic", "Pro", "Enterprise"]
TrainerStatus = Literal["Active", "Inactive", "Suspended", "Expired"]
ApplicationStatus = Literal["Pending", "In Progress", "Approved", "Rejected"]


class TrainerSubscription(BaseModel):
    type: str = "Free"
    months_remaining: int = 0
    max_clients: int = 5


class TrainerPublic(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    experience: str
    specializations: List[str] = Field(default_factory=list)
    verifier_id: Optional[str] = None
    subscription: TrainerSubscription
    rating: float = 0.0
    status: str
    client_count: int = 0
    created_at: str


class TrainerListResponse(BaseModel):
    count: int
    items: List[TrainerPublic]


class TrainerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    experience: Experience
    specializations: List[Specialization] = Field(default_factory=list)
    subscription_type: SubscriptionType = "Free"
    max_clients: int = Field(5, ge=0, le=1000)


class TrainerUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    experience: Optional[Experience] = None
    specializations: Optional[List[Specialization]] = None
    subscription_type: Optional[SubscriptionType] = None
    subscription_months_remaining: Optional[int] = Field(None, ge=0)
    max_clients: Optional[int] = Field(None, ge=0, le=1000)
    rating: Optional[float] = Field(None, ge=0, le=5)
    status: Optional[TrainerStatus] = None


class TrainerApplicationRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    phone: str = Field(..., pattern=PHONE_PATTERN)
    experience: Experience
    specializations: List[Specialization] = Field(default_factory=list)
    certification: Certification
    certification_doc: str = Field(..., min_length=1, description="Reference to the certification document")
    bio: Optional[str] = Field(None, max_length=2000)
    location: Optional[str] = Field(None, max_length=128)
    hourly_rate: Optional[float] = Field(None, ge=0)


class TrainerApplication(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    experience: str
    specializations: List[str] = Field(default_factory=list)
    certification: str
    certification_doc: str
    bio: Optional[str] = None
    location: Optional[str] = None
    hourly_rate: Optional[float] = None
    status: ApplicationStatus
    verifier_id: Optional[str] = None
    submitted_date: str
    verification_notes: Optional[str] = None


class TrainerApplicationListResponse(BaseModel):
    count: int
    items: List[TrainerApplication]


class ClientListResponse(BaseModel):
    count: int
    items: List[MemberPublic]


class SessionCreateRequest(BaseModel):
    member_id: str
    name: str = Field(..., min_length=1, max_length=128)
    date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    time: str = Field(..., min_length=1, max_length=32, description='e.g. "18:00"')
    meet_link: Optional[str] = Field(None, max_length=512)
    description: Optional[str] = Field(None, max_length=2000)


class ClientAssignRequest(BaseModel):
    member_id: str


class ClientPlansResponse(BaseModel):
    member: MemberPublic
    workout: WeeklyWorkoutPlan
    nutrition: WeeklyNutritionPlan
