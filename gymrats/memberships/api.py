# -*- coding: utf-8 -*-
"""Memberships — API endpoints for the signed-in member."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.security import require_role
from ..members.storage import get_member_or_404
from .models import AutoRenewResponse, ExtendRequest, ExtendResponse, MembershipListResponse, MembershipRecord, MembershipStatus
from .storage import extend_membership, list_memberships, membership_status, toggle_auto_renew

router = APIRouter(prefix="/api/membership", tags=["Membership"])


@router.get("/status", response_model=MembershipStatus, summary="Membership status")
def get_status(member: dict = Depends(require_role("member"))):
    return MembershipStatus(**membership_status(get_member_or_404(member["id"])))


@router.post("/extend", response_model=ExtendResponse, summary="Extend membership")
def extend(request: ExtendRequest, member: dict = Depends(require_role("member"))):
    result = extend_membership(
        member["id"],
        request.additional_months,
        payment_method=request.payment_method,
    )
    return ExtendResponse(**result)


@router.post("/auto-renew", response_model=AutoRenewResponse, summary="Toggle auto-renew")
def auto_renew(member: dict = Depends(require_role("member"))):
    enabled = toggle_auto_renew(member["id"])
    return AutoRenewResponse(
        message=f"Auto-renew {'enabled' if enabled else 'disabled'}",
        auto_renew=enabled,
    )


@router.get("/history", response_model=MembershipListResponse, summary="Billing history")
def history(member: dict = Depends(require_role("member"))):
    items = [MembershipRecord(**row) for row in list_memberships(member_id=member["id"])]
    return MembershipListResponse(count=len(items), items=items)
