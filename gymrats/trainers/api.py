# -*- coding: utf-8 -*-
"""Trainers — API endpoints (onboarding + the signed-in trainer's workspace)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import hash_password, require_role
from ..members.models import ClassSchedule, MemberPublic, ScheduleResponse
from ..members.storage import get_member_or_404, list_members, member_public
from ..weekly.models import WeeklyNutritionPlan, WeeklyWorkoutPlan
from ..weekly.storage import get_week
from .models import (
    ClientListResponse,
    ClientPlansResponse,
    SessionCreateRequest,
    TrainerApplication,
    TrainerApplicationRequest,
    TrainerPublic,
)
from .storage import create_application, create_session, get_trainer_or_404, list_sessions

router = APIRouter(prefix="/api/trainers", tags=["Trainers"])


@router.post("/apply", response_model=TrainerApplication, status_code=201, summary="Submit a trainer application")
def apply(request: TrainerApplicationRequest):
    application = create_application(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password_hash=hash_password(request.password),
        phone=request.phone,
        experience=request.experience,
        specializations=list(request.specializations),
        certification=request.certification,
        certification_doc=request.certification_doc,
        bio=request.bio,
        location=request.location,
        hourly_rate=request.hourly_rate,
    )
    return TrainerApplication(**application)


@router.get("/me", response_model=TrainerPublic, summary="My trainer profile")
def me(trainer: dict = Depends(require_role("trainer"))):
    return TrainerPublic(**get_trainer_or_404(trainer["id"]))


@router.get("/me/clients", response_model=ClientListResponse, summary="My clients")
def my_clients(trainer: dict = Depends(require_role("trainer"))):
    items = [MemberPublic(**member_public(m)) for m in list_members(trainer_id=trainer["id"])]
    return ClientListResponse(count=len(items), items=items)


@router.get("/me/sessions", response_model=ScheduleResponse, summary="My appointments")
def my_sessions(trainer: dict = Depends(require_role("trainer"))):
    items = [ClassSchedule(**s) for s in list_sessions(trainer["id"])]
    return ScheduleResponse(count=len(items), items=items)


@router.post("/me/sessions", response_model=ClassSchedule, status_code=201, summary="Schedule an appointment")
def schedule_session(request: SessionCreateRequest, trainer: dict = Depends(require_role("trainer"))):
    session = create_session(trainer_id=trainer["id"], **request.model_dump())
    return ClassSchedule(**session)


@router.get("/me/clients/{member_id}/plans", response_model=ClientPlansResponse, summary="A client's current week")
def client_plans(member_id: str, trainer: dict = Depends(require_role("trainer"))):
    member = get_member_or_404(member_id)
    if member.get("trainer_id") != trainer["id"]:
        raise HTTPException(status_code=403, detail="Member is not one of your clients")
    return ClientPlansResponse(
        member=MemberPublic(**member_public(member)),
        workout=WeeklyWorkoutPlan(**get_week("workout", member_id=member_id)),
        nutrition=WeeklyNutritionPlan(**get_week("nutrition", member_id=member_id)),
    )
