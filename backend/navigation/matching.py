from __future__ import annotations

from typing import Iterable

from .catalog import Destination

DEFAULT_ROOT_PATH = "/dashboard"


def _normalize(value: str) -> str:
    if len(value) > 1:
        return value.rstrip("/") or "/"
    return value


def is_active(path: str | None, location: str | None, *, root_path: str | None = DEFAULT_ROOT_PATH) -> bool:
    """Whether a destination at ``path`` counts as active for ``location``.

    Exact matches are active. Any other path is also active for locations
    below it, matched on whole segments, so ``/leave`` covers
    ``/leave/history`` but not ``/leaves``. The root path only ever matches
    exactly.
    """
    if not path or not location:
        return False

    path = _normalize(path)
    location = _normalize(location)
    if location == path:
        return True
    if path == "/" or (root_path and path == _normalize(root_path)):
        return False
    return location.startswith(path + "/")


def has_active_descendant(
    destination: Destination,
    location: str | None,
    *,
    root_path: str | None = DEFAULT_ROOT_PATH,
) -> bool:
    return any(is_active(node.path, location, root_path=root_path) for node in destination.descendants())


def active_trail(
    tree: Iterable[Destination],
    location: str | None,
    *,
    root_path: str | None = DEFAULT_ROOT_PATH,
) -> tuple[Destination, ...]:
    """Chain from a top-level destination down to the most specific active one.

    The most specific destination is the active one with the longest path;
    ties go to the deeper one, then to catalog order. Empty when nothing is
    active.
    """
    best: tuple[Destination, ...] = ()
    best_key = (-1, -1)

    def visit(nodes: Iterable[Destination], chain: tuple[Destination, ...]) -> None:
        nonlocal best, best_key
        for node in nodes:
            current = (*chain, node)
            if is_active(node.path, location, root_path=root_path):
                key = (len(_normalize(node.path)), len(current))
                if key > best_key:
                    best, best_key = current, key
            visit(node.children, current)

    visit(tree, ())
    return best
