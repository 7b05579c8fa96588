# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..members.models import DATE_PATTERN, EMAIL_PATTERN, PHONE_PATTERN, Gender
from ..memberships.models import Plan

Role = Literal["member", "trainer", "verifier", "admin"]


class SignupRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=128)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=8, max_length=128)
    dob: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    gender: Gender
    phone: str = Field(..., pattern=PHONE_PATTERN)
    weight: float = Field(0, ge=0, le=500, description="kg")
    height: float = Field(0, ge=0, le=300, description="cm")
    membership_plan: Plan
    membership_duration: int = Field(..., ge=1, le=60, description="Months")
    card_type: str = Field(..., min_length=1, max_length=32)
    card_number: str = Field(..., pattern=r"^\d{12,19}$")


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class MemberLoginRequest(LoginRequest):
    membership_plan: Plan


class PrincipalPublic(BaseModel):
    id: str
    email: str
    name: str
    role: Role


class AuthResponse(BaseModel):
    user: PrincipalPublic
    token: str
    redirect_url: Optional[str] = None
