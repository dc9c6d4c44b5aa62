from __future__ import annotations

from accounts.identity import RequestIdentityProvider
from accounts.models import User

from .filtering import navigable_destinations
from .session import controller_for_request


def app_navigation(request):
    user = getattr(request, "user", None)
    if not isinstance(user, User) or not user.is_authenticated:
        return {"app_navigation": []}

    controller = controller_for_request(request)
    return {
        "app_navigation": controller.render(),
        "navigation_layout": controller.layout.value,
        "navigation_trail": controller.trail(),
        "navigation_quick_actions": navigable_destinations(controller.catalog, controller.role),
        "current_user_display_name": RequestIdentityProvider(request).display_name,
    }
