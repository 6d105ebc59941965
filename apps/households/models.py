import secrets
import uuid
from django.conf import settings
from django.db import models


def generate_invite_token() -> str:
    return secrets.token_urlsafe(32)


class HouseholdRole(models.TextChoices):
    OWNER = 'OWNER', 'Owner'
    MEMBER = 'MEMBER', 'Member'


class Household(models.Model):
    """
    A group of users who share and jointly complete tasks.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class HouseholdMember(models.Model):
    """
    Membership of a user in a household.

    ``user`` is one-to-one: a user belongs to at most one household, and the
    database enforces it even when two invites are redeemed concurrently.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    household = models.ForeignKey(
        Household,
        on_delete=models.CASCADE,
        related_name='members'
    )
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='household_membership'
    )
    role = models.CharField(
        max_length=10,
        choices=HouseholdRole.choices,
        default=HouseholdRole.MEMBER
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user} in {self.household} ({self.role})"


class HouseholdInvite(models.Model):
    """
    Time-bounded invitation to join a household.

    Email invites carry the invitee's address; shareable link invites leave
    it empty. Valid only while now < expires_at.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    household = models.ForeignKey(
        Household,
        on_delete=models.CASCADE,
        related_name='invites'
    )
    email = models.EmailField(null=True, blank=True, db_index=True)
    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='sent_household_invites'
    )

    # Security
    token = models.CharField(max_length=255, unique=True, default=generate_invite_token)
    expires_at = models.DateTimeField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"Invite to {self.household} ({self.email or 'link'})"
