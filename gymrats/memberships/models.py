# -*- coding: utf-8 -*-
"""Memberships — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Plan = Literal["basic", "gold", "platinum"]


class MembershipRecord(BaseModel):
    id: str
    member_id: str
    plan: str
    duration: int
    start_date: str
    end_date: str
    price: float
    payment_method: str
    card_type: Optional[str] = None
    card_last_four: Optional[str] = None
    is_popular: bool = False
    features: List[str] = Field(default_factory=list)
    created_at: str


class MembershipCreateRequest(BaseModel):
    member_id: str
    plan: Plan
    duration: int = Field(..., ge=1, le=60, description="Months")
    payment_method: str = Field("credit_card", min_length=1, max_length=32)
    card_type: Optional[str] = Field(None, max_length=32)
    card_number: Optional[str] = Field(None, pattern=r"^\d{4,19}$")
    price: Optional[float] = Field(None, ge=0, description="Defaults to the tier price times duration")
    is_popular: bool = False
    features: List[str] = Field(default_factory=list)


class MembershipUpdateRequest(BaseModel):
    plan: Optional[Plan] = None
    duration: Optional[int] = Field(None, ge=1, le=60)
    end_date: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    payment_method: Optional[str] = Field(None, min_length=1, max_length=32)
    is_popular: Optional[bool] = None
    features: Optional[List[str]] = None


class MembershipListResponse(BaseModel):
    count: int
    items: List[MembershipRecord]


class MembershipStatus(BaseModel):
    membership_type: str
    months_remaining: int
    end_date: Optional[str] = None
    status: str
    auto_renew: bool = False
    is_active: bool


class ExtendRequest(BaseModel):
    additional_months: int = Field(..., ge=1, le=36)
    payment_method: str = Field("credit_card", min_length=1, max_length=32)


class ExtendResponse(BaseModel):
    message: str
    months_remaining: int
    end_date: str


class AutoRenewResponse(BaseModel):
    message: str
    auto_renew: bool


class MonthlyTickResponse(BaseModel):
    processed: int
    expired: int
