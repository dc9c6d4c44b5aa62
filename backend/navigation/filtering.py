from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .catalog import Destination


def is_visible_to(destination: Destination, role: str | None) -> bool:
    if destination.allowed_roles is None:
        return True
    return role is not None and role in destination.allowed_roles


def filter_destinations(
    tree: Iterable[Destination],
    role: str | None,
    *,
    prune_empty_groups: bool = False,
) -> tuple[Destination, ...]:
    """Return the part of ``tree`` the given role may see.

    Sibling order and nesting are preserved. A group whose children are all
    hidden stays in the result with no children unless ``prune_empty_groups``
    is set.
    """
    visible: list[Destination] = []
    for node in tree:
        if not is_visible_to(node, role):
            continue
        if not node.children:
            visible.append(node)
            continue

        children = filter_destinations(node.children, role, prune_empty_groups=prune_empty_groups)
        if not children and prune_empty_groups:
            continue
        visible.append(node if children == node.children else replace(node, children=children))
    return tuple(visible)


def navigable_destinations(tree: Iterable[Destination], role: str | None) -> tuple[Destination, ...]:
    """Flat, ordered list of visible leaves that carry a path."""
    leaves: list[Destination] = []
    for node in tree:
        if not is_visible_to(node, role):
            continue
        if node.is_group:
            leaves.extend(navigable_destinations(node.children, role))
        elif node.path:
            leaves.append(node)
    return tuple(leaves)
