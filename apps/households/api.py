"""
Household API endpoints (browser dashboard only).

- /api/web/household/*   manage the caller's household and its invites
- /api/web/invite/*      look up and redeem an invite by its token
"""
from dataclasses import asdict
from uuid import UUID

from django.http import HttpRequest
from ninja import Router

from apps.core.schemas import DeletedOut, MessageOut
from apps.identity.auth import SessionUserAuth
from .dtos import (
    HouseholdCreateIn,
    HouseholdEnvelope,
    InviteCreateIn,
    InviteDetailsEnvelope,
    InviteEnvelope,
    PendingInvitesEnvelope,
)
from .invite_service import InviteService
from . import services

household_router = Router(tags=["Household"], auth=SessionUserAuth())
invite_router = Router(tags=["Household Invites"], auth=SessionUserAuth())


def _household_payload(request: HttpRequest) -> dict:
    household = services.get_user_household(request.auth)
    return {"household": asdict(household) if household else None}


# =============================================================================
# Household
# =============================================================================

@household_router.get("", response=HouseholdEnvelope, by_alias=True)
def get_household(request: HttpRequest):
    return _household_payload(request)


@household_router.post("", response={201: HouseholdEnvelope}, by_alias=True)
def create_household(request: HttpRequest, payload: HouseholdCreateIn):
    household = services.create_household(request.auth, payload.name)
    return 201, {"household": asdict(household)}


@household_router.post("/leave", response=MessageOut)
def leave_household(request: HttpRequest):
    services.leave_household(request.auth)
    return {"message": "You left the household"}


@household_router.delete("/members/{member_id}", response=DeletedOut, by_alias=True)
def remove_member(request: HttpRequest, member_id: UUID):
    services.remove_member(request.auth, member_id)
    return {"deleted": True}


# =============================================================================
# Invites (owner side)
# =============================================================================

@household_router.post("/invites", response={201: InviteEnvelope}, by_alias=True)
def create_invite(request: HttpRequest, payload: InviteCreateIn):
    invite = InviteService.create_invite(request.auth, payload.email)
    return 201, {"invite": asdict(invite)}


@household_router.post("/invite-link", response={201: InviteEnvelope}, by_alias=True)
def create_invite_link(request: HttpRequest):
    invite = InviteService.create_invite_link(request.auth)
    return 201, {"invite": asdict(invite)}


@household_router.delete("/invites/{invite_id}", response=DeletedOut, by_alias=True)
def cancel_invite(request: HttpRequest, invite_id: UUID):
    InviteService.cancel_invite(request.auth, invite_id)
    return {"deleted": True}


@household_router.get("/pending-invites", response=PendingInvitesEnvelope, by_alias=True)
def pending_invites(request: HttpRequest):
    """Invites addressed to the caller's email that have not expired."""
    return {"invites": [asdict(invite) for invite in InviteService.pending_invites(request.auth)]}


# =============================================================================
# Invites (invitee side)
# =============================================================================

@invite_router.get("/{token}", response=InviteDetailsEnvelope, by_alias=True)
def get_invite(request: HttpRequest, token: str):
    return {"invite": asdict(InviteService.get_invite_details(token, request.auth))}


@invite_router.post("/{token}/accept", response=HouseholdEnvelope, by_alias=True)
def accept_invite(request: HttpRequest, token: str):
    InviteService.accept_invite(token, request.auth)
    return _household_payload(request)
