"""Ecosystem graph data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence


class NodeKind(str, Enum):
    """Rank of a node in the ecosystem graph."""

    HUB = "hub"
    CATEGORY = "category"
    LEAF = "leaf"


@dataclass(frozen=True)
class EcosystemNode:
    """A positioned node of the hub -> category -> leaf graph."""

    id: str
    kind: NodeKind
    label: str
    category: str  # display name of the owning category
    status: str
    priority: str
    x: float
    y: float
    parent_id: str | None = None
    record_type: str | None = None  # asset type, leaves only
    metrics: dict[str, Any] | None = None
    description: str | None = None


@dataclass
class CategoryDefinition:
    """A category and the leaf records shown around it.

    ``angle`` is in radians; None spreads categories evenly around the hub.
    """

    name: str
    leaves: Sequence[Any] = field(default_factory=list)
    angle: float | None = None
    color: str | None = None
