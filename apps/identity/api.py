"""
Identity API endpoints.

Two authentication surfaces share the same services:
- /api/web/auth/*    session login for the browser dashboard
- /api/mobile/auth/* bearer + refresh tokens for the mobile app

Account settings are exposed to both through a DualRouter.
"""
from dataclasses import asdict

from django.conf import settings
from django.contrib.auth import login, logout, update_session_auth_hash
from django.http import HttpRequest
from ninja import Router

from apps.core.errors import NotFound, Unauthorized, ValidationFailed
from apps.core.routing import DualRouter
from apps.core.schemas import MessageOut
from .auth import BearerTokenAuth, SessionUserAuth
from .dtos import (
    AccountEnvelope,
    AuthOut,
    ChangePasswordIn,
    LoginIn,
    PlanIn,
    RefreshIn,
    RegisterIn,
    ReminderEnvelope,
    ReminderSettingsIn,
    UpdateAccountIn,
    UserEnvelope,
)
from .jwt_auth import REFRESH, create_token_pair, get_user_id_from_token
from .models import User
from . import services

SESSION_BACKEND = 'django.contrib.auth.backends.ModelBackend'

mobile_auth_router = Router(tags=["Mobile Auth"])
web_auth_router = Router(tags=["Auth"])
settings_routers = DualRouter(tags=["Settings"])


# =============================================================================
# Helper Functions
# =============================================================================

def _user_payload(user: User) -> dict:
    return asdict(services.to_user_dto(user))


def _auth_payload(user: User) -> dict:
    tokens = create_token_pair(user.id, user.email)
    return {"user": _user_payload(user), **asdict(tokens)}


# =============================================================================
# Mobile Auth Endpoints
# =============================================================================

@mobile_auth_router.post("/login", response=AuthOut, auth=None, by_alias=True)
def mobile_login(request: HttpRequest, payload: LoginIn):
    """Exchange email/password for an access + refresh token pair."""
    user = services.authenticate_credentials(payload.email, payload.password)
    return _auth_payload(user)


@mobile_auth_router.post("/register", response={201: AuthOut}, auth=None, by_alias=True)
def mobile_register(request: HttpRequest, payload: RegisterIn):
    user = services.register_user(payload)
    return 201, _auth_payload(user)


@mobile_auth_router.post("/refresh", response=AuthOut, auth=None, by_alias=True)
def mobile_refresh(request: HttpRequest, payload: RefreshIn):
    """
    Issue a fresh token pair from a refresh token.

    Only tokens whose ``type`` claim is ``refresh`` are accepted.
    """
    if not payload.refresh_token:
        raise ValidationFailed("Refresh token is required")

    user_id = get_user_id_from_token(payload.refresh_token, expected_type=REFRESH)
    if not user_id:
        raise Unauthorized("Invalid refresh token")

    user = User.objects.filter(id=user_id, is_active=True).first()
    if user is None:
        raise Unauthorized("User not found")

    return _auth_payload(user)


@mobile_auth_router.get("/me", response=UserEnvelope, auth=BearerTokenAuth(), by_alias=True)
def mobile_me(request: HttpRequest):
    return {"user": _user_payload(request.auth)}


# =============================================================================
# Web (Session) Auth Endpoints
# =============================================================================

@web_auth_router.post("/register", response={201: UserEnvelope}, auth=None, by_alias=True)
def web_register(request: HttpRequest, payload: RegisterIn):
    """Create an account and start a session for it."""
    user = services.register_user(payload)
    login(request, user, backend=SESSION_BACKEND)
    return 201, {"user": _user_payload(user)}


@web_auth_router.post("/login", response=UserEnvelope, auth=None, by_alias=True)
def web_login(request: HttpRequest, payload: LoginIn):
    user = services.authenticate_credentials(payload.email, payload.password)
    login(request, user, backend=SESSION_BACKEND)
    return {"user": _user_payload(user)}


@web_auth_router.post("/logout", response=MessageOut, auth=None)
def web_logout(request: HttpRequest):
    logout(request)
    return {"message": "Logged out"}


@web_auth_router.get("/me", response=UserEnvelope, auth=SessionUserAuth(), by_alias=True)
def web_me(request: HttpRequest):
    return {"user": _user_payload(request.auth)}


# =============================================================================
# Account Settings (both surfaces)
# =============================================================================

@settings_routers.get("/account", response=AccountEnvelope)
def get_account(request: HttpRequest):
    return {"account": asdict(services.get_account(request.auth))}


@settings_routers.put("/account", response=AccountEnvelope)
def update_account(request: HttpRequest, payload: UpdateAccountIn):
    return {"account": asdict(services.update_account(request.auth, payload.name))}


@settings_routers.put("/password", response=MessageOut)
def change_password(request: HttpRequest, payload: ChangePasswordIn):
    user = request.auth
    services.change_password(user, payload)
    # Keep the browser session alive after the hash changes
    if request.user.is_authenticated:
        update_session_auth_hash(request, user)
    return {"message": "Password updated successfully"}


@settings_routers.get("/reminders", response=ReminderEnvelope)
def get_reminders(request: HttpRequest):
    return {"reminders": asdict(services.get_reminder_settings(request.auth))}


@settings_routers.put("/reminders", response=ReminderEnvelope)
def update_reminders(request: HttpRequest, payload: ReminderSettingsIn):
    return {"reminders": asdict(services.update_reminder_settings(request.auth, payload))}


@settings_routers.post("/plan", response=UserEnvelope)
def change_plan(request: HttpRequest, payload: PlanIn):
    """Development-only plan switch; billing owns plan changes in production."""
    if not settings.DEBUG:
        raise NotFound("Not found")
    return {"user": asdict(services.change_plan(request.auth.id, payload.plan))}
