"""Draft records emitted by the generators before identity is assigned."""

from dataclasses import dataclass
from typing import Optional

from ..models import Component, ItemType, RiskType


@dataclass(frozen=True)
class ItemDraft:
    """A story or task without id, priority or phase."""

    title: str
    type: ItemType
    component: Optional[Component] = None


@dataclass(frozen=True)
class RiskDraft:
    """A risk without an id."""

    type: RiskType
    text: str
