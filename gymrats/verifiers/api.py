# -*- coding: utf-8 -*-
"""Verifiers — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import hash_password, require_role
from ..trainers.models import (
    TrainerApplication,
    TrainerApplicationListResponse,
    TrainerListResponse,
    TrainerPublic,
)
from ..trainers.storage import count_applications, list_applications, list_trainers
from .models import DecisionRequest, VerifierDashboard, VerifierPublic, VerifierRegisterRequest
from .storage import claim_application, create_verifier, decide_application

router = APIRouter(prefix="/api/verifiers", tags=["Verifiers"])

_COMPLETED = ["Approved", "Rejected"]


@router.post("/apply", response_model=VerifierPublic, status_code=201, summary="Register as a verifier")
def apply(request: VerifierRegisterRequest):
    verifier = create_verifier(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        phone=request.phone,
        expertise=request.expertise,
        image=request.image,
        status="Pending",
    )
    return VerifierPublic(**verifier)


@router.get("/dashboard", response_model=VerifierDashboard, summary="Review counts")
def dashboard(verifier: dict = Depends(require_role("verifier"))):
    return VerifierDashboard(
        pending=count_applications(statuses=["Pending"]),
        in_progress=count_applications(statuses=["In Progress"], verifier_id=verifier["id"]),
        completed=count_applications(statuses=_COMPLETED, verifier_id=verifier["id"]),
    )


@router.get("/applications/pending", response_model=TrainerApplicationListResponse, summary="Pending applications")
def pending(verifier: dict = Depends(require_role("verifier"))):
    items = [TrainerApplication(**a) for a in list_applications(statuses=["Pending"])]
    return TrainerApplicationListResponse(count=len(items), items=items)


@router.get("/applications/in-progress", response_model=TrainerApplicationListResponse, summary="My claimed applications")
def in_progress(verifier: dict = Depends(require_role("verifier"))):
    items = [
        TrainerApplication(**a)
        for a in list_applications(statuses=["In Progress"], verifier_id=verifier["id"])
    ]
    return TrainerApplicationListResponse(count=len(items), items=items)


@router.get("/applications/completed", response_model=TrainerApplicationListResponse, summary="My decided applications")
def completed(verifier: dict = Depends(require_role("verifier"))):
    items = [
        TrainerApplication(**a)
        for a in list_applications(statuses=_COMPLETED, verifier_id=verifier["id"], newest_first=True)
    ]
    return TrainerApplicationListResponse(count=len(items), items=items)


@router.post("/applications/{application_id}/claim", response_model=TrainerApplication, summary="Claim a pending application")
def claim(application_id: str, verifier: dict = Depends(require_role("verifier"))):
    return TrainerApplication(**claim_application(application_id, verifier["id"]))


@router.post("/applications/{application_id}/decision", response_model=TrainerApplication, summary="Approve or reject")
def decide(application_id: str, request: DecisionRequest, verifier: dict = Depends(require_role("verifier"))):
    application = decide_application(application_id, verifier["id"], status=request.status, notes=request.notes)
    return TrainerApplication(**application)


@router.get("/trainers", response_model=TrainerListResponse, summary="Active trainers")
def trainers(verifier: dict = Depends(require_role("verifier"))):
    items = [TrainerPublic(**t) for t in list_trainers(status="Active")]
    return TrainerListResponse(count=len(items), items=items)
