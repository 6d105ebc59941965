"""
JWT utilities for the mobile API.

The mobile client cannot hold a browser session cookie, so it authenticates
with a bearer access token and renews it with a refresh token.

Claims are deliberately minimal: user id and email only. The plan and any
other account state are re-read from the database on every request.
"""
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from django.conf import settings

from .dtos import TokenPairDTO


JWT_ALGORITHM = 'HS256'
ACCESS = 'access'
REFRESH = 'refresh'


def _secret() -> str:
    return settings.JWT_SECRET


def _encode(user_id: UUID, email: str, token_type: str, lifetime: timedelta) -> str:
    issued_at = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'email': email,
        'type': token_type,
        'iat': issued_at,
        'exp': issued_at + lifetime,
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def create_access_token(user_id: UUID, email: str) -> str:
    """Access token used as the bearer credential. Expires in JWT_ACCESS_TOKEN_DAYS."""
    return _encode(user_id, email, ACCESS, timedelta(days=settings.JWT_ACCESS_TOKEN_DAYS))


def create_refresh_token(user_id: UUID, email: str) -> str:
    """Refresh token, only accepted by the refresh endpoint. Expires in JWT_REFRESH_TOKEN_DAYS."""
    return _encode(user_id, email, REFRESH, timedelta(days=settings.JWT_REFRESH_TOKEN_DAYS))


def create_token_pair(user_id: UUID, email: str) -> TokenPairDTO:
    return TokenPairDTO(
        access_token=create_access_token(user_id, email),
        refresh_token=create_refresh_token(user_id, email),
    )


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str, expected_type: str = ACCESS) -> Optional[UUID]:
    """
    Extract the user id from a valid token of the expected type.

    A refresh token is never accepted where an access token is expected
    and vice versa.
    """
    payload = decode_token(token)
    if not payload or payload.get('type') != expected_type or 'sub' not in payload:
        return None
    try:
        return UUID(payload['sub'])
    except ValueError:
        return None
