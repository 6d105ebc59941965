from typing import Dict, List
from apps.core.errors import Forbidden
from .models import Plan, User

FREE_TASK_LIMIT = 5


# Define all plan-gated features here for reference
class Features:
    ANALYTICS = "analytics.view"
    HOUSEHOLD_SHARING = "households.share"
    REMINDERS = "settings.reminders"
    TEMPLATES = "tasks.templates"
    UNLIMITED_TASKS = "tasks.unlimited"


# Static Plan -> Feature Mapping
PLAN_FEATURES: Dict[str, List[str]] = {
    Plan.FREE: [],
    Plan.PRO: [
        Features.ANALYTICS,
        Features.HOUSEHOLD_SHARING,
        Features.REMINDERS,
        Features.TEMPLATES,
        Features.UNLIMITED_TASKS,
    ],
}

FEATURE_DENIED_MESSAGES: Dict[str, str] = {
    Features.ANALYTICS: "Analytics is a Pro feature",
    Features.HOUSEHOLD_SHARING: "Household sharing is a Pro feature",
    Features.REMINDERS: "Reminders are a Pro feature",
    Features.TEMPLATES: "Templates are a Pro feature. Upgrade to access.",
    Features.UNLIMITED_TASKS: (
        f"Free plan is limited to {FREE_TASK_LIMIT} tasks. Upgrade to Pro for unlimited tasks."
    ),
}


def get_user_features(user: User) -> List[str]:
    """
    Returns the features unlocked by the user's current plan.
    """
    if not user or not user.is_active:
        return []
    return PLAN_FEATURES.get(user.plan, [])


def has_feature(user: User, feature: str) -> bool:
    return feature in get_user_features(user)


def require_feature(user: User, feature: str) -> None:
    """Raise Forbidden with the feature's upgrade message if the plan lacks it."""
    if not has_feature(user, feature):
        raise Forbidden(FEATURE_DENIED_MESSAGES.get(feature, "Upgrade to Pro to use this feature"))
