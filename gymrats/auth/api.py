# -*- coding: utf-8 -*-
"""Auth — API endpoints (one login per role)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from ..app_db import db_conn
from ..config import settings
from ..members.storage import create_member
from ..memberships.pricing import TIER_LABELS, add_months, dashboard_url
from ..memberships.storage import create_membership, get_active_membership
from .models import AuthResponse, LoginRequest, MemberLoginRequest, PrincipalPublic, SignupRequest
from .security import (
    TOKEN_COOKIE_NAME,
    create_access_token,
    get_current_principal,
    hash_password,
    is_admin_email,
    verify_password,
)
from .storage import get_account_by_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _principal_public(row: Dict[str, Any], role: str) -> PrincipalPublic:
    return PrincipalPublic(
        id=row["id"],
        email=row["email"],
        name=row.get("full_name") or row.get("name") or "",
        role=role,
    )


def _set_auth_cookie(resp: Response, token: str) -> None:
    max_age = int(settings.token_ttl_hours) * 60 * 60
    resp.set_cookie(
        TOKEN_COOKIE_NAME,
        token,
        httponly=True,
        secure=bool(settings.cookie_secure),
        samesite="lax",
        max_age=max_age,
        path="/",
    )


def _issue(response: Response, row: Dict[str, Any], role: str, redirect_url: Optional[str] = None) -> AuthResponse:
    token = create_access_token(account_id=row["id"], email=row["email"], role=role)
    _set_auth_cookie(response, token)
    return AuthResponse(user=_principal_public(row, role), token=token, redirect_url=redirect_url)


def _check_password(role: str, email: str, password: str) -> Dict[str, Any]:
    account = get_account_by_email(role, email)
    if not account or not verify_password(password, account["password_hash"]):
        logger.warning("Failed %s login for %s", role, email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return account


@router.post("/signup", response_model=AuthResponse, status_code=201, summary="Sign up with a membership")
def signup(request: SignupRequest, response: Response):
    if get_account_by_email("member", request.email):
        raise HTTPException(status_code=400, detail="Email already in use")

    now = datetime.now(timezone.utc)
    start = now.isoformat().replace("+00:00", "Z")
    end = add_months(now, request.membership_duration).isoformat().replace("+00:00", "Z")
    # Member and billing record commit together.
    with db_conn(settings.app_db_path) as conn:
        member = create_member(
            full_name=request.full_name,
            email=request.email,
            password_hash=hash_password(request.password),
            dob=request.dob,
            gender=request.gender,
            phone=request.phone,
            weight=request.weight,
            height=request.height,
            membership_type=TIER_LABELS[request.membership_plan],
            months_remaining=request.membership_duration,
            membership_start=start,
            membership_end=end,
            conn=conn,
        )
        create_membership(
            member_id=member["id"],
            plan=request.membership_plan,
            duration=request.membership_duration,
            payment_method="credit_card",
            card_type=request.card_type,
            card_number=request.card_number,
            start=now,
            conn=conn,
        )
    return _issue(response, member, "member", dashboard_url(request.membership_plan))


@router.post("/login", response_model=AuthResponse, summary="Member login")
def login(request: MemberLoginRequest, response: Response):
    member = _check_password("member", request.email, request.password)
    if not get_active_membership(member["id"], request.membership_plan):
        logger.warning("Member %s has no active %s membership", member["id"], request.membership_plan)
        raise HTTPException(status_code=403, detail="No active membership found for the selected plan")
    return _issue(response, member, "member", dashboard_url(request.membership_plan))


@router.post("/trainer/login", response_model=AuthResponse, summary="Trainer login")
def trainer_login(request: LoginRequest, response: Response):
    trainer = _check_password("trainer", request.email, request.password)
    if trainer["status"] != "Active":
        raise HTTPException(status_code=403, detail="Trainer account is not active")
    return _issue(response, trainer, "trainer", "/trainer")


@router.post("/verifier/login", response_model=AuthResponse, summary="Verifier login")
def verifier_login(request: LoginRequest, response: Response):
    verifier = _check_password("verifier", request.email, request.password)
    if verifier["status"] != "Active":
        raise HTTPException(status_code=403, detail="Verifier account is not active")
    return _issue(response, verifier, "verifier", "/verifier")


@router.post("/admin/login", response_model=AuthResponse, summary="Admin login")
def admin_login(request: LoginRequest, response: Response):
    if not is_admin_email(request.email):
        logger.warning("Admin login refused for %s", request.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    admin = _check_password("admin", request.email, request.password)
    return _issue(response, admin, "admin", "/admin")


@router.post("/logout", summary="Logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME, path="/")
    return {"status": "ok"}


@router.get("/me", response_model=PrincipalPublic, summary="Get the signed-in account")
def me(principal: dict = Depends(get_current_principal)):
    return _principal_public(principal, principal["role"])
