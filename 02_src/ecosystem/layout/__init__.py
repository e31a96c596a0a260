"""Ecosystem layout module."""

from .categories import default_categories, toggle_category
from .radial import (
    LayoutError,
    category_id,
    compute_layout,
    layout_edges,
)

__all__ = [
    "LayoutError",
    "category_id",
    "compute_layout",
    "default_categories",
    "layout_edges",
    "toggle_category",
]
