"""
Per-request composition of the navigation engine.

The controller owns no storage. It is built from the catalog plus the
acting role, the current location and the interaction state, and every
operation either returns a description of the menu or a new state value
for the caller to keep.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from accounts.identity import LogoutError, LogoutResult
from accounts.roles import normalize_role

from .catalog import Destination, find_destination, iter_destinations
from .filtering import filter_destinations
from .matching import DEFAULT_ROOT_PATH, active_trail, has_active_descendant, is_active
from .state import ExpansionState, LayoutMode

logger = logging.getLogger(__name__)


class LogoutProvider(Protocol):
    def logout(self) -> LogoutResult: ...


@dataclass(frozen=True)
class RenderedDestination:
    id: str
    label: str
    icon: str
    path: str | None
    badge: str | None
    level: int
    is_group: bool
    active: bool
    child_active: bool
    expanded: bool
    show_label: bool
    show_children: bool
    children: tuple[RenderedDestination, ...] = ()

    @property
    def highlighted(self) -> bool:
        return self.active or self.child_active


class ClickKind(str, Enum):
    TOGGLE = "toggle"
    NAVIGATE = "navigate"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ClickOutcome:
    kind: ClickKind
    path: str | None = None
    expansion: ExpansionState | None = None


@dataclass(frozen=True)
class LogoutOutcome:
    result: LogoutResult
    redirect_to: str

    @property
    def ok(self) -> bool:
        return self.result.ok


class NavigationController:
    def __init__(
        self,
        catalog: Iterable[Destination],
        *,
        role: str | None,
        location: str | None,
        expansion: ExpansionState | None = None,
        layout: LayoutMode = LayoutMode.EXPANDED,
        root_path: str = DEFAULT_ROOT_PATH,
        login_path: str = "/login",
        prune_empty_groups: bool = False,
    ):
        self.catalog = tuple(catalog)
        self.role = normalize_role(role)
        self.location = location or ""
        self.expansion = expansion if expansion is not None else ExpansionState()
        self.layout = layout
        self.root_path = root_path
        self.login_path = login_path
        self.prune_empty_groups = prune_empty_groups
        self._group_ids = frozenset(node.id for node in iter_destinations(self.catalog) if node.is_group)

    @property
    def visible(self) -> tuple[Destination, ...]:
        return filter_destinations(self.catalog, self.role, prune_empty_groups=self.prune_empty_groups)

    def render(self) -> list[RenderedDestination]:
        return [self._render_node(node, level=0) for node in self.visible]

    def _render_node(self, node: Destination, *, level: int) -> RenderedDestination:
        is_group = self._is_group(node)
        expanded = is_group and self.expansion.is_expanded(node.id)
        show_children = is_group and expanded and self.layout.shows_labels
        children = ()
        if show_children:
            children = tuple(self._render_node(child, level=level + 1) for child in node.children)
        return RenderedDestination(
            id=node.id,
            label=node.label,
            icon=node.icon,
            path=node.path,
            badge=node.badge,
            level=level,
            is_group=is_group,
            active=is_active(node.path, self.location, root_path=self.root_path),
            child_active=is_group and has_active_descendant(node, self.location, root_path=self.root_path),
            expanded=expanded,
            show_label=self.layout.shows_labels,
            show_children=show_children,
            children=children,
        )

    def _is_group(self, node: Destination) -> bool:
        # Groups emptied by the role filter still behave as groups.
        return node.id in self._group_ids

    def trail(self) -> tuple[Destination, ...]:
        return active_trail(self.visible, self.location, root_path=self.root_path)

    def on_toggle_group(self, destination_id: str) -> ExpansionState:
        node = find_destination(self.visible, destination_id)
        if node is None or not self._is_group(node):
            logger.debug("Ignoring toggle for %r: not a visible group", destination_id)
            return self.expansion
        self.expansion = self.expansion.toggle(destination_id)
        return self.expansion

    def on_toggle_layout(self) -> LayoutMode:
        self.layout = self.layout.toggle()
        return self.layout

    def on_navigate(self, destination_id: str) -> ClickOutcome:
        node = find_destination(self.visible, destination_id)
        if node is None:
            return ClickOutcome(kind=ClickKind.IGNORED)
        if self._is_group(node):
            return ClickOutcome(kind=ClickKind.TOGGLE, expansion=self.on_toggle_group(destination_id))
        if node.path:
            return ClickOutcome(kind=ClickKind.NAVIGATE, path=node.path)
        return ClickOutcome(kind=ClickKind.IGNORED)

    def on_logout(self, identity: LogoutProvider) -> LogoutOutcome:
        """Close the session and always send the user to the login page.

        The identity provider's result is carried back so the caller can
        tell the user whether the server-side logout actually succeeded.
        """
        try:
            result = identity.logout()
        except Exception as exc:
            logger.exception("Identity provider raised during logout")
            result = LogoutResult.failure(LogoutError(str(exc)))
        if not result.ok:
            logger.warning("Logout failed, redirecting to %s anyway", self.login_path)
        return LogoutOutcome(result=result, redirect_to=self.login_path)
