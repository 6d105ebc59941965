from functools import wraps
from typing import Callable
from django.http import HttpRequest
from .permissions import require_feature


def requires_feature(feature: str):
    """
    Decorator to gate a Django Ninja endpoint behind a plan feature.

    The endpoint must be authenticated; the resolved user is read from
    ``request.auth``.

    Usage:
        @router.get("/some-path")
        @requires_feature(Features.ANALYTICS)
        def my_view(request):
            ...
    """
    def decorator(view_func: Callable):
        @wraps(view_func)
        def wrapper(request: HttpRequest, *args, **kwargs):
            require_feature(request.auth, feature)
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator
