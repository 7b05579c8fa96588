# -*- coding: utf-8 -*-
"""Admin back-office — CRUD over every collection."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import hash_password, require_role
from ..catalog.models import (
    Exercise,
    ExerciseCreateRequest,
    ExerciseListResponse,
    ExerciseUpdateRequest,
    NutritionPlan,
    NutritionPlanCreateRequest,
    NutritionPlanListResponse,
    NutritionPlanUpdateRequest,
)
from ..catalog import storage as catalog
from ..members.models import MemberAdminUpdateRequest, MemberCreateRequest, MemberListResponse, MemberPublic
from ..members import storage as members
from ..memberships.models import (
    MembershipCreateRequest,
    MembershipListResponse,
    MembershipRecord,
    MembershipUpdateRequest,
    MonthlyTickResponse,
)
from ..memberships import storage as memberships
from ..trainers.models import (
    ClientAssignRequest,
    ClientListResponse,
    TrainerCreateRequest,
    TrainerListResponse,
    TrainerPublic,
    TrainerUpdateRequest,
)
from ..trainers import storage as trainers
from ..verifiers.models import VerifierCreateRequest, VerifierListResponse, VerifierPublic, VerifierUpdateRequest
from ..verifiers import storage as verifiers

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_role("admin"))],
)


def _deleted(ok: bool, what: str) -> dict:
    if not ok:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return {"status": "ok"}


# ---- members ----

@router.get("/members", response_model=MemberListResponse, summary="List members")
def list_members():
    items = [MemberPublic(**members.member_public(m)) for m in members.list_members()]
    return MemberListResponse(count=len(items), items=items)


@router.post("/members", response_model=MemberPublic, status_code=201, summary="Create a member")
def create_member(request: MemberCreateRequest):
    row = members.create_member(
        full_name=request.full_name,
        email=request.email,
        password_hash=hash_password(request.password),
        dob=request.dob,
        gender=request.gender,
        phone=request.phone,
        weight=request.weight,
        height=request.height,
        status=request.status,
        membership_type=request.membership_type,
    )
    return MemberPublic(**members.member_public(row))


@router.get("/members/{member_id}", response_model=MemberPublic, summary="Get a member")
def get_member(member_id: str):
    return MemberPublic(**members.member_public(members.get_member_or_404(member_id)))


@router.patch("/members/{member_id}", response_model=MemberPublic, summary="Update a member")
def update_member(member_id: str, request: MemberAdminUpdateRequest):
    row = members.update_member(member_id, request.model_dump(exclude_unset=True))
    return MemberPublic(**members.member_public(row))


@router.delete("/members/{member_id}", summary="Delete a member")
def delete_member(member_id: str):
    return _deleted(members.delete_member(member_id), "Member")


# ---- trainers ----

@router.get("/trainers", response_model=TrainerListResponse, summary="List trainers")
def list_trainers():
    items = [TrainerPublic(**t) for t in trainers.list_trainers()]
    return TrainerListResponse(count=len(items), items=items)


@router.post("/trainers", response_model=TrainerPublic, status_code=201, summary="Create a trainer")
def create_trainer(request: TrainerCreateRequest):
    trainer = trainers.create_trainer(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        phone=request.phone,
        experience=request.experience,
        specializations=list(request.specializations),
        subscription_type=request.subscription_type,
        max_clients=request.max_clients,
    )
    return TrainerPublic(**trainer)


@router.get("/trainers/{trainer_id}", response_model=TrainerPublic, summary="Get a trainer")
def get_trainer(trainer_id: str):
    return TrainerPublic(**trainers.get_trainer_or_404(trainer_id))


@router.patch("/trainers/{trainer_id}", response_model=TrainerPublic, summary="Update a trainer")
def update_trainer(trainer_id: str, request: TrainerUpdateRequest):
    trainers.get_trainer_or_404(trainer_id)
    return TrainerPublic(**trainers.update_trainer(trainer_id, request.model_dump(exclude_unset=True)))


@router.delete("/trainers/{trainer_id}", summary="Delete a trainer")
def delete_trainer(trainer_id: str):
    return _deleted(trainers.delete_trainer(trainer_id), "Trainer")


@router.get("/trainers/{trainer_id}/clients", response_model=ClientListResponse, summary="A trainer's clients")
def trainer_clients(trainer_id: str):
    trainers.get_trainer_or_404(trainer_id)
    items = [MemberPublic(**members.member_public(m)) for m in members.list_members(trainer_id=trainer_id)]
    return ClientListResponse(count=len(items), items=items)


@router.post("/trainers/{trainer_id}/clients", response_model=MemberPublic, summary="Assign a client")
def assign_client(trainer_id: str, request: ClientAssignRequest):
    row = trainers.assign_client(trainer_id, request.member_id)
    return MemberPublic(**members.member_public(row))


@router.delete("/trainers/{trainer_id}/clients/{member_id}", response_model=MemberPublic, summary="Unassign a client")
def unassign_client(trainer_id: str, member_id: str):
    row = trainers.unassign_client(trainer_id, member_id)
    return MemberPublic(**members.member_public(row))


# ---- memberships ----

@router.get("/memberships", response_model=MembershipListResponse, summary="List billing records")
def list_memberships():
    items = [MembershipRecord(**m) for m in memberships.list_memberships()]
    return MembershipListResponse(count=len(items), items=items)


@router.post("/memberships", response_model=MembershipRecord, status_code=201, summary="Record a membership")
def create_membership(request: MembershipCreateRequest):
    return MembershipRecord(**memberships.create_membership(**request.model_dump()))


@router.post("/memberships/monthly-tick", response_model=MonthlyTickResponse, summary="Run the monthly expiry tick")
def monthly_tick():
    return MonthlyTickResponse(**memberships.monthly_tick())


@router.get("/memberships/{membership_id}", response_model=MembershipRecord, summary="Get a billing record")
def get_membership(membership_id: str):
    row = memberships.get_membership(membership_id)
    if not row:
        raise HTTPException(status_code=404, detail="Membership not found")
    return MembershipRecord(**row)


@router.patch("/memberships/{membership_id}", response_model=MembershipRecord, summary="Update a billing record")
def update_membership(membership_id: str, request: MembershipUpdateRequest):
    return MembershipRecord(**memberships.update_membership(membership_id, request.model_dump(exclude_unset=True)))


@router.delete("/memberships/{membership_id}", summary="Delete a billing record")
def delete_membership(membership_id: str):
    return _deleted(memberships.delete_membership(membership_id), "Membership")


# ---- exercises ----

@router.get("/exercises", response_model=ExerciseListResponse, summary="List exercises")
def list_exercises():
    rows = catalog.list_exercises()
    return ExerciseListResponse(
        count=len(rows),
        items=[Exercise(**r) for r in rows],
        muscle_groups=catalog.muscle_groups(rows),
    )


@router.post("/exercises", response_model=Exercise, status_code=201, summary="Create an exercise")
def create_exercise(request: ExerciseCreateRequest):
    return Exercise(**catalog.create_exercise(request.model_dump()))


@router.get("/exercises/{exercise_id}", response_model=Exercise, summary="Get an exercise")
def get_exercise(exercise_id: str):
    row = catalog.get_exercise(exercise_id)
    if not row:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return Exercise(**row)


@router.patch("/exercises/{exercise_id}", response_model=Exercise, summary="Update an exercise")
def update_exercise(exercise_id: str, request: ExerciseUpdateRequest):
    return Exercise(**catalog.update_exercise(exercise_id, request.model_dump(exclude_unset=True)))


@router.delete("/exercises/{exercise_id}", summary="Delete an exercise")
def delete_exercise(exercise_id: str):
    return _deleted(catalog.delete_exercise(exercise_id), "Exercise")


# ---- nutrition plans ----

@router.get("/nutrition-plans", response_model=NutritionPlanListResponse, summary="List nutrition plans")
def list_nutrition_plans():
    rows = catalog.list_nutrition_plans()
    return NutritionPlanListResponse(count=len(rows), items=[NutritionPlan(**r) for r in rows])


@router.post("/nutrition-plans", response_model=NutritionPlan, status_code=201, summary="Create a nutrition plan")
def create_nutrition_plan(request: NutritionPlanCreateRequest):
    return NutritionPlan(**catalog.create_nutrition_plan(request.model_dump()))


@router.get("/nutrition-plans/{plan_id}", response_model=NutritionPlan, summary="Get a nutrition plan")
def get_nutrition_plan(plan_id: str):
    row = catalog.get_nutrition_plan(plan_id)
    if not row:
        raise HTTPException(status_code=404, detail="Nutrition plan not found")
    return NutritionPlan(**row)


@router.patch("/nutrition-plans/{plan_id}", response_model=NutritionPlan, summary="Update a nutrition plan")
def update_nutrition_plan(plan_id: str, request: NutritionPlanUpdateRequest):
    return NutritionPlan(**catalog.update_nutrition_plan(plan_id, request.model_dump(exclude_unset=True)))


@router.delete("/nutrition-plans/{plan_id}", summary="Delete a nutrition plan")
def delete_nutrition_plan(plan_id: str):
    return _deleted(catalog.delete_nutrition_plan(plan_id), "Nutrition plan")


# ---- verifiers ----

@router.get("/verifiers", response_model=VerifierListResponse, summary="List verifiers")
def list_verifiers():
    items = [VerifierPublic(**v) for v in verifiers.list_verifiers()]
    return VerifierListResponse(count=len(items), items=items)


@router.post("/verifiers", response_model=VerifierPublic, status_code=201, summary="Create a verifier")
def create_verifier(request: VerifierCreateRequest):
    verifier = verifiers.create_verifier(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        phone=request.phone,
        expertise=request.expertise,
        image=request.image,
        status=request.status,
    )
    return VerifierPublic(**verifier)


@router.get("/verifiers/{verifier_id}", response_model=VerifierPublic, summary="Get a verifier")
def get_verifier(verifier_id: str):
    return VerifierPublic(**verifiers.get_verifier_or_404(verifier_id))


@router.patch("/verifiers/{verifier_id}", response_model=VerifierPublic, summary="Update a verifier")
def update_verifier(verifier_id: str, request: VerifierUpdateRequest):
    verifiers.get_verifier_or_404(verifier_id)
    return VerifierPublic(**verifiers.update_verifier(verifier_id, request.model_dump(exclude_unset=True)))


@router.delete("/verifiers/{verifier_id}", summary="Delete a verifier")
def delete_verifier(verifier_id: str):
    return _deleted(verifiers.delete_verifier(verifier_id), "Verifier")
