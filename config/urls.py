"""
URL configuration for LifeOps.

/api/web/*     browser dashboard (session cookie)
/api/mobile/*  mobile app (bearer access token)
"""
from django.contrib import admin
from django.urls import path
from ninja import NinjaAPI

from apps.core.handlers import register_exception_handlers

api = NinjaAPI(
    title="LifeOps API",
    version="1.0.0",
    description="Household task management API",
    docs_url="/docs",
)
register_exception_handlers(api)

from apps.identity.api import mobile_auth_router, web_auth_router, settings_routers
from apps.tasks.api import routers as task_routers, template_routers
from apps.analytics.api import routers as analytics_routers
from apps.households.api import household_router, invite_router

# Mobile surface
api.add_router("/mobile/auth", mobile_auth_router)
api.add_router("/mobile/tasks", task_routers.mobile)
api.add_router("/mobile/templates", template_routers.mobile)
api.add_router("/mobile/analytics", analytics_routers.mobile)
api.add_router("/mobile/settings", settings_routers.mobile)

# Browser surface
api.add_router("/web/auth", web_auth_router)
api.add_router("/web/tasks", task_routers.web)
api.add_router("/web/templates", template_routers.web)
api.add_router("/web/analytics", analytics_routers.web)
api.add_router("/web/settings", settings_routers.web)
api.add_router("/web/household", household_router)
api.add_router("/web/invite", invite_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]
