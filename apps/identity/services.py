"""
Services for the Identity app.

Registration, credential checks and account settings. This is the public
API other apps use to read or change account data.
"""
import logging
from typing import Optional

from django.db import IntegrityError, transaction

from apps.core.errors import Conflict, NotFound, Unauthorized, ValidationFailed
from .dtos import (
    AccountDTO,
    ChangePasswordIn,
    RegisterIn,
    ReminderSettingsDTO,
    ReminderSettingsIn,
    UserDTO,
)
from .models import Plan, User
from .permissions import Features, require_feature

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def to_user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        email=user.email,
        name=user.name or None,
        plan=str(user.plan),
    )


def register_user(payload: RegisterIn) -> User:
    """
    Create a FREE account. Emails are unique (case-insensitive).

    The uniqueness check is repeated by the database constraint; a race
    between two registrations surfaces as the same Conflict.
    """
    if User.objects.filter(email=payload.email).exists():
        raise Conflict("An account with this email already exists", status_code=400)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=payload.email,
                password=payload.password,
                name=payload.name,
            )
    except IntegrityError:
        raise Conflict("An account with this email already exists", status_code=400)

    logger.info(f"Registered user {user.id}")
    return user


def authenticate_credentials(email: str, password: str) -> User:
    """
    Verify an email/password pair.

    Accounts without a usable password (external OAuth) cannot log in here.
    """
    user = User.objects.filter(email=email.strip().lower(), is_active=True).first()
    if user is None or not user.has_usable_password():
        raise Unauthorized(INVALID_CREDENTIALS)
    if not user.check_password(password):
        raise Unauthorized(INVALID_CREDENTIALS)
    return user


def get_account(user: User) -> AccountDTO:
    return AccountDTO(
        id=user.id,
        email=user.email,
        name=user.name or None,
        plan=str(user.plan),
        created_at=user.created_at,
    )


def update_account(user: User, name: str) -> AccountDTO:
    user.name = name
    user.save(update_fields=['name', 'updated_at'])
    return get_account(user)


def change_password(user: User, payload: ChangePasswordIn) -> None:
    if not user.has_usable_password():
        raise ValidationFailed("Cannot change password for OAuth accounts")
    if not user.check_password(payload.current_password):
        raise ValidationFailed("Current password is incorrect")

    user.set_password(payload.new_password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info(f"Password changed for user {user.id}")


def get_reminder_settings(user: User) -> ReminderSettingsDTO:
    return ReminderSettingsDTO(
        email_reminders=user.email_reminders,
        sms_reminders=user.sms_reminders,
        phone_number=user.phone_number,
        reminder_days=list(user.reminder_days or []),
        is_pro=user.plan == Plan.PRO,
    )


def update_reminder_settings(user: User, payload: ReminderSettingsIn) -> ReminderSettingsDTO:
    """
    Save reminder preferences (Pro only).

    SMS reminders need a phone number; enabling any channel needs at least
    one reminder day. Days are stored de-duplicated, furthest first.
    """
    require_feature(user, Features.REMINDERS)

    phone_number: Optional[str] = (payload.phone_number or '').strip() or None
    if payload.sms_reminders and not phone_number:
        raise ValidationFailed("Phone number is required for SMS reminders")

    days = sorted(set(payload.reminder_days), reverse=True)
    if (payload.email_reminders or payload.sms_reminders) and not days:
        raise ValidationFailed("At least one reminder day is required")

    user.email_reminders = payload.email_reminders
    user.sms_reminders = payload.sms_reminders
    user.phone_number = phone_number
    user.reminder_days = days
    user.save(update_fields=[
        'email_reminders', 'sms_reminders', 'phone_number', 'reminder_days', 'updated_at',
    ])
    return get_reminder_settings(user)


def change_plan(user_id, plan: str) -> UserDTO:
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise NotFound("User not found")

    user.plan = plan
    user.save(update_fields=['plan', 'updated_at'])
    logger.info(f"User {user.id} moved to plan {plan}")
    return to_user_dto(user)
