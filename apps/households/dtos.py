"""DTOs and request/response schemas for the Households app."""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import field_validator

from apps.core.schemas import CamelSchema
from apps.identity.dtos import normalize_email


@dataclass(frozen=True)
class HouseholdMemberDTO:
    id: UUID
    user_id: UUID
    name: Optional[str]
    email: str
    role: str
    joined_at: datetime


@dataclass(frozen=True)
class HouseholdInviteDTO:
    id: UUID
    email: Optional[str]
    token: str
    expires_at: datetime
    created_at: datetime


@dataclass(frozen=True)
class HouseholdDTO:
    id: UUID
    name: str
    user_role: str
    members: List[HouseholdMemberDTO]
    invites: List[HouseholdInviteDTO]
    created_at: datetime


@dataclass(frozen=True)
class InviteDetailsDTO:
    """What an invitee sees before joining."""
    token: str
    household_id: UUID
    household_name: str
    invited_by_name: str
    expires_at: datetime


class HouseholdCreateIn(CamelSchema):
    name: Optional[str] = None


class InviteCreateIn(CamelSchema):
    email: str

    @field_validator('email')
    @classmethod
    def email_format(cls, value: str) -> str:
        return normalize_email(value)


# Response schemas

class HouseholdMemberOut(CamelSchema):
    id: UUID
    user_id: UUID
    name: Optional[str]
    email: str
    role: str
    joined_at: datetime


class HouseholdInviteOut(CamelSchema):
    id: UUID
    email: Optional[str]
    token: str
    expires_at: datetime
    created_at: datetime


class HouseholdOut(CamelSchema):
    id: UUID
    name: str
    user_role: str
    members: List[HouseholdMemberOut]
    invites: List[HouseholdInviteOut]
    created_at: datetime


class HouseholdEnvelope(CamelSchema):
    household: Optional[HouseholdOut]


class InviteEnvelope(CamelSchema):
    invite: HouseholdInviteOut


class InviteDetailsOut(CamelSchema):
    token: str
    household_id: UUID
    household_name: str
    invited_by_name: str
    expires_at: datetime


class InviteDetailsEnvelope(CamelSchema):
    invite: InviteDetailsOut


class PendingInvitesEnvelope(CamelSchema):
    invites: List[InviteDetailsOut]
