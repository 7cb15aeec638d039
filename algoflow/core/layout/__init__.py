"""
Layout Engine

Static layered geometry for algorithm graphs, plus the two per-update
helpers that sit on top of it (path highlighting and viewport fitting).

Usage:
    from algoflow.core.layout import compute_layout, annotate_path

    layout = compute_layout(graph)                   # once per loaded graph
    highlight = annotate_path(graph, current, path)  # on every state change
"""
from .base import (
    LayoutConfig,
    Point,
    NodeGeometry,
    LabelHalo,
    LabelPlacement,
    EdgeRoute,
    LayoutResult,
)
from .engine import compute_layout, find_cycle_edges, assign_ranks, order_layers, count_crossings
from .highlight import (
    EdgeStyle,
    NodeHighlight,
    EdgeHighlight,
    HighlightState,
    PATH_EDGE_STYLE,
    DEFAULT_EDGE_STYLE,
    annotate_path,
)
from .viewport import Viewport, fit_viewport

__all__ = [
    "LayoutConfig",
    "Point",
    "NodeGeometry",
    "LabelHalo",
    "LabelPlacement",
    "EdgeRoute",
    "LayoutResult",
    "compute_layout",
    "find_cycle_edges",
    "assign_ranks",
    "order_layers",
    "count_crossings",
    "EdgeStyle",
    "NodeHighlight",
    "EdgeHighlight",
    "HighlightState",
    "PATH_EDGE_STYLE",
    "DEFAULT_EDGE_STYLE",
    "annotate_path",
    "Viewport",
    "fit_viewport",
]
