"""
Services for the Households app.

A user belongs to at most one household. The creator is its OWNER; everyone
else joins as a MEMBER through an invite (see invite_service).
"""
import logging
from typing import Optional
from uuid import UUID

from django.db import transaction

from apps.core.errors import Conflict, Forbidden, NotFound, ValidationFailed
from apps.identity.models import User
from apps.identity.permissions import Features, require_feature
from .dtos import HouseholdDTO, HouseholdInviteDTO, HouseholdMemberDTO
from .models import Household, HouseholdInvite, HouseholdMember, HouseholdRole

logger = logging.getLogger(__name__)

DEFAULT_HOUSEHOLD_NAME = "My Household"
ALREADY_IN_HOUSEHOLD = "You're already in a household"


def get_membership(user: User) -> Optional[HouseholdMember]:
    return HouseholdMember.objects.select_related('household').filter(user=user).first()


def get_household_id(user: User) -> Optional[UUID]:
    return HouseholdMember.objects.filter(user=user).values_list('household_id', flat=True).first()


def require_owner(user: User, message: str) -> HouseholdMember:
    """Return the caller's OWNER membership or raise Forbidden."""
    membership = HouseholdMember.objects.select_related('household').filter(
        user=user, role=HouseholdRole.OWNER
    ).first()
    if membership is None:
        raise Forbidden(message)
    return membership


def to_invite_dto(invite: HouseholdInvite) -> HouseholdInviteDTO:
    return HouseholdInviteDTO(
        id=invite.id,
        email=invite.email,
        token=invite.token,
        expires_at=invite.expires_at,
        created_at=invite.created_at,
    )


def _to_household_dto(membership: HouseholdMember) -> HouseholdDTO:
    household = membership.household
    members = household.members.select_related('user').order_by('joined_at')
    return HouseholdDTO(
        id=household.id,
        name=household.name,
        user_role=str(membership.role),
        members=[
            HouseholdMemberDTO(
                id=member.id,
                user_id=member.user_id,
                name=member.user.name or None,
                email=member.user.email,
                role=str(member.role),
                joined_at=member.joined_at,
            )
            for member in members
        ],
        invites=[to_invite_dto(invite) for invite in household.invites.all()],
        created_at=household.created_at,
    )


def get_user_household(user: User) -> Optional[HouseholdDTO]:
    """The caller's household with members and outstanding invites, or None."""
    membership = get_membership(user)
    if membership is None:
        return None
    return _to_household_dto(membership)


@transaction.atomic
def create_household(user: User, name: Optional[str] = None) -> HouseholdDTO:
    require_feature(user, Features.HOUSEHOLD_SHARING)

    if HouseholdMember.objects.filter(user=user).exists():
        raise Conflict(ALREADY_IN_HOUSEHOLD)

    household = Household.objects.create(name=(name or '').strip() or DEFAULT_HOUSEHOLD_NAME)
    membership = HouseholdMember.objects.create(
        household=household,
        user=user,
        role=HouseholdRole.OWNER,
    )

    logger.info(f"User {user.id} created household {household.id}")
    return _to_household_dto(membership)


def remove_member(user: User, member_id: UUID) -> None:
    owner = require_owner(user, "You must be a household owner to remove members")

    target = HouseholdMember.objects.filter(id=member_id, household_id=owner.household_id).first()
    if target is None:
        raise NotFound("Member not found")
    if target.user_id == user.id:
        raise ValidationFailed("You cannot remove yourself")

    target.delete()
    logger.info(f"User {user.id} removed member {member_id} from household {owner.household_id}")


@transaction.atomic
def leave_household(user: User) -> None:
    """
    Leave the caller's household.

    A sole owner deletes the household; an owner with other members hands
    ownership to the longest-standing of them first.
    """
    membership = get_membership(user)
    if membership is None:
        raise NotFound("You're not in a household")

    household = membership.household
    if membership.role == HouseholdRole.OWNER:
        successor = household.members.exclude(id=membership.id).order_by('joined_at').first()
        if successor is None:
            household.delete()
            logger.info(f"Household {household.id} deleted by its last member {user.id}")
            return
        successor.role = HouseholdRole.OWNER
        successor.save(update_fields=['role'])
        logger.info(f"Household {household.id} ownership passed to user {successor.user_id}")

    membership.delete()
    logger.info(f"User {user.id} left household {household.id}")
