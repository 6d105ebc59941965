"""
Request authentication for the two LifeOps clients.

Both providers implement the same capability, ``resolve(request)``, which
returns the active User or None. They are wired into django-ninja as ``auth=``
classes, so a view only ever sees ``request.auth`` (the resolved User) and
never needs to know which client called it.

- SessionUserAuth: Django session cookie (browser dashboard)
- BearerTokenAuth: ``Authorization: Bearer <access token>`` (mobile app)

The user row is always re-fetched, so plan changes apply immediately.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from django.http import HttpRequest
from ninja.security import HttpBearer, SessionAuth

from .jwt_auth import get_user_id_from_token
from .models import User

logger = logging.getLogger(__name__)


class UserResolver(ABC):
    """Capability shared by every authentication provider."""

    @abstractmethod
    def resolve(self, request: HttpRequest) -> Optional[User]:
        ...


def _active_user(user_id) -> Optional[User]:
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        return None


class SessionUserAuth(UserResolver, SessionAuth):
    """Session cookie provider for the browser surface."""

    def resolve(self, request: HttpRequest) -> Optional[User]:
        session_user = getattr(request, 'user', None)
        if session_user is None or not session_user.is_authenticated:
            return None
        return _active_user(session_user.pk)

    def authenticate(self, request: HttpRequest, key: Optional[str]) -> Optional[User]:
        return self.resolve(request)


class BearerTokenAuth(UserResolver, HttpBearer):
    """Stateless access-token provider for the mobile surface."""

    def resolve(self, request: HttpRequest) -> Optional[User]:
        header = request.headers.get('Authorization', '')
        scheme, _, token = header.partition(' ')
        if scheme.lower() != 'bearer' or not token:
            return None
        return self.authenticate(request, token.strip())

    def authenticate(self, request: HttpRequest, token: str) -> Optional[User]:
        user_id = get_user_id_from_token(token)
        if not user_id:
            logger.debug("Rejected bearer token")
            return None
        return _active_user(user_id)
