"""
Viewport fitting for the graph view camera.

Node geometry never changes after layout; only the camera is re-fitted
when the travelled path changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .base import LayoutResult

FIT_PADDING = 0.15
MIN_ZOOM = 0.3
MAX_ZOOM = 1.5


@dataclass(frozen=True)
class Viewport:
    """Screen transform: screen = world * zoom + (x, y)."""
    x: float
    y: float
    zoom: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "zoom": self.zoom}


def fit_viewport(
    layout: LayoutResult,
    width: float,
    height: float,
    node_ids: Optional[Iterable[str]] = None,
    padding: float = FIT_PADDING,
    min_zoom: float = MIN_ZOOM,
    max_zoom: float = MAX_ZOOM,
) -> Viewport:
    """
    Frame the given nodes (all nodes when None or when none are known)
    inside a width x height screen.
    """
    wanted = set(node_ids) if node_ids is not None else None
    boxes = [n for n in layout.nodes if wanted is None or n.node_id in wanted]
    if not boxes:
        boxes = list(layout.nodes)

    min_x = min(b.x for b in boxes)
    min_y = min(b.y for b in boxes)
    bounds_w = max(b.x + b.width for b in boxes) - min_x
    bounds_h = max(b.y + b.height for b in boxes) - min_y

    zoom_x = width / (bounds_w * (1 + padding))
    zoom_y = height / (bounds_h * (1 + padding))
    zoom = max(min_zoom, min(max_zoom, zoom_x, zoom_y))

    center_x = min_x + bounds_w / 2
    center_y = min_y + bounds_h / 2
    return Viewport(
        x=round(width / 2 - center_x * zoom, 2),
        y=round(height / 2 - center_y * zoom, 2),
        zoom=round(zoom, 4),
    )
