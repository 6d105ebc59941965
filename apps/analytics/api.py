from dataclasses import asdict

from django.http import HttpRequest

from apps.core.routing import DualRouter
from apps.identity.decorators import requires_feature
from apps.identity.permissions import Features
from .dtos import AnalyticsEnvelope
from . import services

routers = DualRouter(tags=["Analytics"])


@routers.get("", response=AnalyticsEnvelope)
@requires_feature(Features.ANALYTICS)
def get_analytics(request: HttpRequest):
    """Pro-only dashboard metrics."""
    return {"analytics": asdict(services.get_analytics(request.auth))}
