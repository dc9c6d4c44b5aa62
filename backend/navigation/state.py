from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


@dataclass(frozen=True)
class ExpansionState:
    """Ids of the groups currently expanded. Groups expand independently."""

    expanded_ids: frozenset[str] = frozenset()

    @classmethod
    def of(cls, ids: Iterable[str] = ()) -> ExpansionState:
        return cls(frozenset(ids))

    def toggle(self, destination_id: str) -> ExpansionState:
        return ExpansionState(self.expanded_ids ^ {destination_id})

    def is_expanded(self, destination_id: str) -> bool:
        return destination_id in self.expanded_ids


class LayoutMode(str, Enum):
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"

    def toggle(self) -> LayoutMode:
        if self is LayoutMode.EXPANDED:
            return LayoutMode.COLLAPSED
        return LayoutMode.EXPANDED

    @property
    def shows_labels(self) -> bool:
        return self is LayoutMode.EXPANDED
