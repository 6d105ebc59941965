"""DTOs and request schemas for the Identity app."""
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID
from typing import List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from pydantic import field_validator

from apps.core.schemas import CamelSchema
from .models import Plan


@dataclass(frozen=True)
class UserDTO:
    id: UUID
    email: str
    name: Optional[str]
    plan: str


@dataclass(frozen=True)
class AccountDTO:
    id: UUID
    email: str
    name: Optional[str]
    plan: str
    created_at: datetime


@dataclass(frozen=True)
class ReminderSettingsDTO:
    email_reminders: bool
    sms_reminders: bool
    phone_number: Optional[str]
    reminder_days: List[int]
    is_pro: bool


@dataclass(frozen=True)
class TokenPairDTO:
    access_token: str
    refresh_token: str


def normalize_email(value: str) -> str:
    value = (value or '').strip().lower()
    try:
        validate_email(value)
    except DjangoValidationError:
        raise ValueError("Invalid email address")
    return value


class RegisterIn(CamelSchema):
    name: str
    email: str
    password: str

    @field_validator('name')
    @classmethod
    def name_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator('email')
    @classmethod
    def email_format(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        return value


class LoginIn(CamelSchema):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def email_format(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('password')
    @classmethod
    def password_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class RefreshIn(CamelSchema):
    refresh_token: Optional[str] = None


class UpdateAccountIn(CamelSchema):
    name: str

    @field_validator('name')
    @classmethod
    def name_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value


class ChangePasswordIn(CamelSchema):
    current_password: str
    new_password: str

    @field_validator('current_password')
    @classmethod
    def current_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Current password is required")
        return value

    @field_validator('new_password')
    @classmethod
    def new_length(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("New password must be at least 6 characters")
        return value


class ReminderSettingsIn(CamelSchema):
    email_reminders: bool
    sms_reminders: bool
    phone_number: Optional[str] = None
    reminder_days: List[int]

    @field_validator('reminder_days')
    @classmethod
    def days_in_range(cls, value: List[int]) -> List[int]:
        for day in value:
            if day < 0 or day > 30:
                raise ValueError("Reminder days must be between 0 and 30")
        return value


class PlanIn(CamelSchema):
    plan: Plan


# Response schemas

class UserOut(CamelSchema):
    id: UUID
    email: str
    name: Optional[str]
    plan: str


class UserEnvelope(CamelSchema):
    user: UserOut


class AuthOut(CamelSchema):
    user: UserOut
    access_token: str
    refresh_token: str


class AccountOut(CamelSchema):
    id: UUID
    email: str
    name: Optional[str]
    plan: str
    created_at: datetime


class AccountEnvelope(CamelSchema):
    account: AccountOut


class ReminderSettingsOut(CamelSchema):
    email_reminders: bool
    sms_reminders: bool
    phone_number: Optional[str]
    reminder_days: List[int]
    is_pro: bool


class ReminderEnvelope(CamelSchema):
    reminders: ReminderSettingsOut
