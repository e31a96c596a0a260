"""Dashboard category grouping and collapse state."""

import math
from typing import AbstractSet, Sequence

from ..models import AssetRecord, AssetType, CategoryDefinition

# (name, asset types, colour); the k-th entry sits at angle k * pi / 3
_DASHBOARD_CATEGORIES: list[tuple[str, tuple[AssetType, ...], str]] = [
    ("Foundational Platforms", (AssetType.GMB, AssetType.WEBSITE), "#10B981"),
    ("Social Media", (AssetType.SOCIAL_MEDIA,), "#8B5CF6"),
    (
        "Directories & Reviews",
        (AssetType.DIRECTORY, AssetType.REVIEW_PLATFORM),
        "#F59E0B",
    ),
    ("Advertising", (AssetType.ADVERTISING,), "#EF4444"),
    ("Content & Engagement", (), "#06B6D4"),
    ("Analytics & Tools", (), "#6366F1"),
]


def default_categories(assets: Sequence[AssetRecord]) -> list[CategoryDefinition]:
    """Group assets into the six dashboard categories, keeping asset order."""
    return [
        CategoryDefinition(
            name=name,
            leaves=[asset for asset in assets if asset.type in types],
            angle=index * math.pi / 3,
            color=color,
        )
        for index, (name, types, color) in enumerate(_DASHBOARD_CATEGORIES)
    ]


def toggle_category(collapsed: AbstractSet[str], category_id: str) -> frozenset[str]:
    """Return the collapse set with ``category_id`` flipped."""
    if category_id in collapsed:
        return frozenset(collapsed - {category_id})
    return frozenset(collapsed | {category_id})
