"""
Exception handlers for the LifeOps NinjaAPI.

Every error leaves the API as ``{"error": message}`` with an explicit status.
Unexpected exceptions are logged server-side and answered with an opaque
message so internal details never reach the client.
"""
import logging

from django.http import Http404
from ninja import NinjaAPI
from ninja.errors import AuthenticationError, HttpError, ValidationError

from .errors import LifeOpsError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {'body', 'payload', 'query', 'path', 'cookie', 'header'}


def first_validation_message(errors: list) -> str:
    """
    Reduce a list of pydantic/ninja validation issues to the first
    human-readable message.
    """
    if not errors:
        return "Invalid input"

    error = errors[0]
    message = str(error.get('msg') or "Invalid input")

    # Messages raised from our own validators are already user facing
    if message.startswith('Value error, '):
        return message[len('Value error, '):]

    location = [str(part) for part in error.get('loc', ()) if part not in _LOCATION_PREFIXES]
    if location:
        return f"{location[-1]}: {message}"
    return message


def error_response(api: NinjaAPI, request, message: str, status: int = 400):
    return api.create_response(request, {"error": message}, status=status)


def register_exception_handlers(api: NinjaAPI) -> None:
    """Attach the LifeOps error mapping to the given API instance."""

    @api.exception_handler(LifeOpsError)
    def handle_lifeops_error(request, exc: LifeOpsError):
        return error_response(api, request, exc.message, exc.status_code)

    @api.exception_handler(ValidationError)
    def handle_validation_error(request, exc: ValidationError):
        return error_response(api, request, first_validation_message(exc.errors), 400)

    @api.exception_handler(AuthenticationError)
    def handle_authentication_error(request, exc: AuthenticationError):
        return error_response(api, request, "Unauthorized", 401)

    @api.exception_handler(HttpError)
    def handle_http_error(request, exc: HttpError):
        return error_response(api, request, str(exc), exc.status_code)

    @api.exception_handler(Http404)
    def handle_not_found(request, exc: Http404):
        return error_response(api, request, "Not found", 404)

    @api.exception_handler(Exception)
    def handle_unexpected_error(request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return error_response(api, request, "Internal server error", 500)
