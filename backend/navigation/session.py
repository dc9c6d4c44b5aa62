from __future__ import annotations

from accounts.identity import RequestIdentityProvider

from .catalog import MENU_CATALOG
from .conf import navigation_settings
from .controller import NavigationController
from .state import ExpansionState, LayoutMode

EXPANDED_SESSION_KEY = "navigation_expanded"
LAYOUT_SESSION_KEY = "navigation_layout"


def load_expansion(session, *, default=()) -> ExpansionState:
    stored = session.get(EXPANDED_SESSION_KEY)
    if stored is None:
        return ExpansionState.of(default)
    return ExpansionState.of(str(destination_id) for destination_id in stored)


def save_expansion(session, state: ExpansionState) -> None:
    session[EXPANDED_SESSION_KEY] = sorted(state.expanded_ids)


def load_layout(session) -> LayoutMode:
    try:
        return LayoutMode(session.get(LAYOUT_SESSION_KEY, LayoutMode.EXPANDED.value))
    except ValueError:
        return LayoutMode.EXPANDED


def save_layout(session, mode: LayoutMode) -> None:
    session[LAYOUT_SESSION_KEY] = mode.value


def controller_for_request(request, *, catalog=MENU_CATALOG) -> NavigationController:
    config = navigation_settings()
    identity = RequestIdentityProvider(request)
    return NavigationController(
        catalog,
        role=identity.role,
        location=request.path,
        expansion=load_expansion(request.session, default=config["DEFAULT_EXPANDED"]),
        layout=load_layout(request.session),
        root_path=config["ROOT_PATH"],
        login_path=config["LOGIN_PATH"],
        prune_empty_groups=config["PRUNE_EMPTY_GROUPS"],
    )
