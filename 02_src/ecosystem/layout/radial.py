"""Deterministic radial layout of the hub -> category -> leaf graph."""

import math
from enum import Enum
from typing import AbstractSet, Any, Sequence

from ..models import CategoryDefinition, EcosystemNode, NodeKind

HUB_ID = "hub"

DEFAULT_WIDTH = 1000.0
DEFAULT_HEIGHT = 800.0
DEFAULT_CATEGORY_RADIUS = 200.0  # hub -> category
DEFAULT_LEAF_RADIUS = 100.0  # category -> leaf
DEFAULT_LEAF_SPAN = math.pi / 2  # fan of leaves around their category


class LayoutError(ValueError):
    """Invalid layout input."""


def category_id(index: int) -> str:
    """Stable id of the category at ``index``; names may repeat."""
    return f"category-{index}"


def _text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return "" if value is None else str(value)


def _validate(
    categories: Sequence[CategoryDefinition],
    width: float,
    height: float,
    category_radius: float,
    leaf_radius: float,
    leaf_span: float,
) -> None:
    if not categories:
        raise LayoutError("at least one category is required")
    geometry = {
        "width": width,
        "height": height,
        "category_radius": category_radius,
        "leaf_radius": leaf_radius,
        "leaf_span": leaf_span,
    }
    for name, value in geometry.items():
        if not math.isfinite(value):
            raise LayoutError(f"{name} must be finite, got {value}")
    if width <= 0 or height <= 0:
        raise LayoutError(f"canvas must be positive, got {width}x{height}")
    if category_radius < 0:
        raise LayoutError(f"category_radius must be >= 0, got {category_radius}")
    if leaf_radius < 0:
        raise LayoutError(f"leaf_radius must be >= 0, got {leaf_radius}")
    if leaf_span < 0:
        raise LayoutError(f"leaf_span must be >= 0, got {leaf_span}")
    for index, category in enumerate(categories):
        if category.angle is not None and not math.isfinite(category.angle):
            raise LayoutError(f"category {index} has a non-finite angle")
        for leaf in category.leaves:
            if getattr(leaf, "id", None) is None:
                raise LayoutError(f"category {index} has a leaf without an id")


def _leaf_node(
    leaf: Any, category: CategoryDefinition, parent_id: str, x: float, y: float
) -> EcosystemNode:
    record_type = _text(getattr(leaf, "category", None))
    status = _text(getattr(leaf, "status", None))
    kind_text = record_type.replace("_", " ") if record_type else "Asset"
    metrics = getattr(leaf, "metrics", None)

    return EcosystemNode(
        id=_text(leaf.id),
        kind=NodeKind.LEAF,
        label=_text(getattr(leaf, "label", None)),
        category=category.name,
        status=status,
        priority=_text(getattr(leaf, "priority", None)),
        x=x,
        y=y,
        parent_id=parent_id,
        record_type=record_type or None,
        metrics=dict(metrics) if metrics else None,
        description=f"{kind_text} with {status} status",
    )


def compute_layout(
    hub_label: str,
    categories: Sequence[CategoryDefinition],
    collapsed: AbstractSet[str] = frozenset(),
    *,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    category_radius: float = DEFAULT_CATEGORY_RADIUS,
    leaf_radius: float = DEFAULT_LEAF_RADIUS,
    leaf_span: float = DEFAULT_LEAF_SPAN,
) -> list[EcosystemNode]:
    """
    Position the hub, its categories and their leaves.

    The hub sits at the canvas centre. Category ``i`` sits ``category_radius``
    away at its own angle (or ``2*pi*i/n`` when it has none). Leaves of a
    category are fanned over ``leaf_span`` centred on the category's angle,
    ``leaf_radius`` away from the category. Categories whose id is in
    ``collapsed`` keep their node but emit no leaves.

    Args:
        hub_label: Label of the central node (the clinic name).
        categories: Ordered categories; the index is the category identity.
        collapsed: Category ids (see ``category_id``) to fold.

    Returns:
        Nodes in order: hub, then each category followed by its leaves.

    Raises:
        LayoutError: If the categories or geometry are invalid.
    """
    _validate(categories, width, height, category_radius, leaf_radius, leaf_span)

    center_x = width / 2
    center_y = height / 2
    count = len(categories)

    nodes = [
        EcosystemNode(
            id=HUB_ID,
            kind=NodeKind.HUB,
            label=hub_label,
            category="Central Hub",
            status="active",
            priority="high",
            x=center_x,
            y=center_y,
            description="Primary digital hub for all ecosystem activities",
        )
    ]

    for index, category in enumerate(categories):
        angle = (
            category.angle
            if category.angle is not None
            else 2 * math.pi * index / count
        )
        cat_x = center_x + math.cos(angle) * category_radius
        cat_y = center_y + math.sin(angle) * category_radius
        cat_id = category_id(index)
        leaves = list(category.leaves)

        nodes.append(
            EcosystemNode(
                id=cat_id,
                kind=NodeKind.CATEGORY,
                label=category.name,
                category=category.name,
                status="active",
                priority="medium",
                x=cat_x,
                y=cat_y,
                parent_id=HUB_ID,
                description=f"Category containing {len(leaves)} assets",
            )
        )

        if cat_id in collapsed or not leaves:
            continue

        step = leaf_span / (len(leaves) - 1) if len(leaves) > 1 else 0.0
        start = angle - leaf_span / 2

        for leaf_index, leaf in enumerate(leaves):
            leaf_angle = start + leaf_index * step
            nodes.append(
                _leaf_node(
                    leaf,
                    category,
                    cat_id,
                    cat_x + math.cos(leaf_angle) * leaf_radius,
                    cat_y + math.sin(leaf_angle) * leaf_radius,
                )
            )

    return nodes


def layout_edges(nodes: Sequence[EcosystemNode]) -> list[tuple[str, str]]:
    """Parent -> child edges implied by a computed layout."""
    return [(node.parent_id, node.id) for node in nodes if node.parent_id]
