# -*- coding: utf-8 -*-
"""Verifiers — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..members.models import EMAIL_PATTERN, PHONE_PATTERN

VerifierStatus = Literal["Active", "Inactive", "Pending"]
Decision = Literal["Approved", "Rejected"]
Expertise = Literal["Strength Training", "Cardiovascular Fitness", "Nutrition", "Yoga", "Rehabilitation", "Other"]


class VerifierRegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    expertise: Expertise
    image: Optional[str] = None


class VerifierCreateRequest(VerifierRegisterRequest):
    status: VerifierStatus = "Active"


class VerifierUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    expertise: Optional[Expertise] = None
    accuracy: Optional[float] = Field(None, ge=0, le=100)
    status: Optional[VerifierStatus] = None
    image: Optional[str] = None


class VerifierPublic(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    expertise: str
    content_reviewed: int = 0
    accuracy: float = 0.0
    status: str
    image: Optional[str] = None
    join_date: str


class VerifierListResponse(BaseModel):
    count: int
    items: List[VerifierPublic]


class VerifierDashboard(BaseModel):
    pending: int
    in_progress: int
    completed: int


class DecisionRequest(BaseModel):
    status: Decision
    notes: Optional[str] = Field(None, max_length=2000)
