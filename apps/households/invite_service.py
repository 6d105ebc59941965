import logging
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.core.errors import Conflict, Expired, Forbidden, NotFound
from apps.identity.models import User
from apps.identity.permissions import Features, require_feature
from .dtos import HouseholdInviteDTO, InviteDetailsDTO
from .models import HouseholdInvite, HouseholdMember, HouseholdRole
from .services import ALREADY_IN_HOUSEHOLD, require_owner, to_invite_dto

logger = logging.getLogger(__name__)

INVITE_VALIDITY = timedelta(days=7)


def _inviter_name(invite: HouseholdInvite) -> str:
    inviter = invite.invited_by
    if inviter is None:
        owner = invite.household.members.select_related('user').filter(
            role=HouseholdRole.OWNER
        ).first()
        inviter = owner.user if owner else None
    if inviter is None:
        return "Someone"
    return inviter.name or inviter.email


def _to_details(invite: HouseholdInvite) -> InviteDetailsDTO:
    return InviteDetailsDTO(
        token=invite.token,
        household_id=invite.household_id,
        household_name=invite.household.name,
        invited_by_name=_inviter_name(invite),
        expires_at=invite.expires_at,
    )


class InviteService:
    @staticmethod
    def create_invite(user: User, email: str, now: Optional[datetime] = None) -> HouseholdInviteDTO:
        """
        Invites an email address to the owner's household.
        """
        require_feature(user, Features.HOUSEHOLD_SHARING)
        owner = require_owner(user, "You must be a household owner to invite members")
        email = email.strip().lower()

        if HouseholdMember.objects.filter(household_id=owner.household_id, user__email=email).exists():
            raise Conflict("This person is already in your household")

        if HouseholdInvite.objects.filter(household_id=owner.household_id, email=email).exists():
            raise Conflict("An invite has already been sent to this email")

        invite = HouseholdInvite.objects.create(
            household_id=owner.household_id,
            email=email,
            invited_by=user,
            expires_at=(now or timezone.now()) + INVITE_VALIDITY,
        )

        # TODO: hand the invite to an email sender once outbound mail is configured
        logger.info(f"Created household invite {invite.id} for {email}")
        return to_invite_dto(invite)

    @staticmethod
    def create_invite_link(user: User, now: Optional[datetime] = None) -> HouseholdInviteDTO:
        """
        Creates a shareable link invite (no email attached).
        """
        require_feature(user, Features.HOUSEHOLD_SHARING)
        owner = require_owner(user, "You must be a household owner to create invite links")

        invite = HouseholdInvite.objects.create(
            household_id=owner.household_id,
            invited_by=user,
            expires_at=(now or timezone.now()) + INVITE_VALIDITY,
        )
        logger.info(f"Created household invite link {invite.id}")
        return to_invite_dto(invite)

    @staticmethod
    def get_redeemable_invite(token: str, user: User, now: Optional[datetime] = None) -> HouseholdInvite:
        """
        Validates an invite for the given user, in order:
        1. The token exists
        2. It has not expired (an invite is expired at its expiry instant)
        3. An email invite is redeemed by the address it was sent to
        4. The user is not already in a household
        """
        invite = HouseholdInvite.objects.select_related('household', 'invited_by').filter(
            token=token
        ).first()
        if invite is None:
            raise NotFound("Invalid invite link")

        if (now or timezone.now()) >= invite.expires_at:
            raise Expired("This invite has expired")

        # Link invites carry no email and are open to whoever holds the token
        if invite.email and invite.email != user.email.lower():
            raise Forbidden("This invite was sent to a different email address")

        if HouseholdMember.objects.filter(user=user).exists():
            raise Conflict(ALREADY_IN_HOUSEHOLD)

        return invite

    @staticmethod
    def get_invite_details(token: str, user: User, now: Optional[datetime] = None) -> InviteDetailsDTO:
        invite = InviteService.get_redeemable_invite(token, user, now)
        return _to_details(invite)

    @staticmethod
    def accept_invite(token: str, user: User, now: Optional[datetime] = None) -> UUID:
        """
        Joins the invite's household as a MEMBER and consumes the invite.

        Returns the household id.
        """
        invite = InviteService.get_redeemable_invite(token, user, now)

        try:
            with transaction.atomic():
                HouseholdMember.objects.create(
                    household_id=invite.household_id,
                    user=user,
                    role=HouseholdRole.MEMBER,
                )
                invite.delete()
        except IntegrityError:
            # Another redemption for this user won the race
            raise Conflict(ALREADY_IN_HOUSEHOLD)

        logger.info(f"User {user.id} joined household {invite.household_id}")
        return invite.household_id

    @staticmethod
    def cancel_invite(user: User, invite_id: UUID) -> None:
        owner = require_owner(user, "You must be a household owner to cancel invites")
        deleted, _ = HouseholdInvite.objects.filter(
            id=invite_id, household_id=owner.household_id
        ).delete()
        if not deleted:
            raise NotFound("Invite not found")

    @staticmethod
    def pending_invites(user: User, now: Optional[datetime] = None) -> List[InviteDetailsDTO]:
        """
        Unexpired invites addressed to the user's email.
        """
        invites = HouseholdInvite.objects.select_related('household', 'invited_by').filter(
            email=user.email.lower(),
            expires_at__gt=now or timezone.now(),
        )
        return [_to_details(invite) for invite in invites]
