"""
Dual-surface routing.

LifeOps serves the same operations to two clients:
- web:    the browser dashboard, authenticated by the Django session cookie
- mobile: the mobile app, authenticated by a bearer access token

A DualRouter registers every view function on both routers so the business
logic is written once and stays provider-agnostic: views read the resolved
user from ``request.auth`` whichever provider produced it.
"""
from typing import Callable, List

from ninja import Router

from apps.identity.auth import BearerTokenAuth, SessionUserAuth


class DualRouter:
    def __init__(self, tags: List[str]):
        self.web = Router(tags=tags, auth=SessionUserAuth())
        self.mobile = Router(tags=[f"Mobile {tag}" for tag in tags], auth=BearerTokenAuth())

    def api_operation(self, methods: List[str], path: str, **kwargs) -> Callable:
        kwargs.setdefault('by_alias', True)

        def decorator(view_func: Callable) -> Callable:
            for surface, router in (('web', self.web), ('mobile', self.mobile)):
                router.api_operation(
                    methods,
                    path,
                    operation_id=f"{surface}_{view_func.__name__}",
                    **kwargs,
                )(view_func)
            return view_func
        return decorator

    def get(self, path: str, **kwargs) -> Callable:
        return self.api_operation(['GET'], path, **kwargs)

    def post(self, path: str, **kwargs) -> Callable:
        return self.api_operation(['POST'], path, **kwargs)

    def put(self, path: str, **kwargs) -> Callable:
        return self.api_operation(['PUT'], path, **kwargs)

    def delete(self, path: str, **kwargs) -> Callable:
        return self.api_operation(['DELETE'], path, **kwargs)
