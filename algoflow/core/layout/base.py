"""
Layout Engine — Geometry Types

Value types produced by the layout engine. A LayoutResult depends only on
the static graph and the spacing constants in LayoutConfig; traversal
state never feeds into it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from algoflow.config import settings

DIRECTIONS = ("TB", "LR")


@dataclass(frozen=True)
class LayoutConfig:
    """Spacing constants for the layered layout."""
    node_width: float = 180.0
    node_height: float = 70.0
    rank_sep: float = 60.0         # gap between consecutive ranks
    node_sep: float = 40.0         # gap between neighbours inside a rank
    order_iterations: int = 4      # barycenter sweeps (alternating down / up)
    direction: str = "TB"          # "TB" top-to-bottom, "LR" left-to-right

    # Label box estimate (no font metrics available server-side)
    label_font_size: float = 10.0
    label_char_width: float = 6.0
    label_padding: float = 4.0

    def __post_init__(self):
        if self.direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {DIRECTIONS}, got {self.direction!r}")
        if self.order_iterations < 0:
            raise ValueError("order_iterations must be >= 0")

    @classmethod
    def from_settings(cls) -> "LayoutConfig":
        return cls(
            node_width=settings.node_width,
            node_height=settings.node_height,
            rank_sep=settings.rank_sep,
            node_sep=settings.node_sep,
            order_iterations=settings.order_iterations,
            direction=settings.layout_direction,
        )


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class NodeGeometry:
    """Top-left position and size of one node box."""
    node_id: str
    x: float
    y: float
    width: float
    height: float
    rank: int
    order: int                     # index inside its rank, left to right

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rank": self.rank,
            "order": self.order,
        }


@dataclass(frozen=True)
class LabelHalo:
    """Background drawn behind an edge label so it stays legible over crossings."""
    fill: str = "#ffffff"
    opacity: float = 0.85
    padding: float = 4.0

    def to_dict(self) -> dict:
        return {"fill": self.fill, "opacity": self.opacity, "padding": self.padding}


@dataclass(frozen=True)
class LabelPlacement:
    """Edge label centred on (x, y)."""
    text: str
    x: float
    y: float
    width: float
    height: float
    halo: LabelHalo = LabelHalo()

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "halo": self.halo.to_dict(),
        }


@dataclass(frozen=True)
class EdgeRoute:
    """Routed connector for one edge."""
    edge_id: str
    source: str
    target: str
    points: Tuple[Point, ...]
    label: Optional[LabelPlacement]
    is_cycle_edge: bool = False

    def to_dict(self) -> dict:
        return {
            "edge_id": self.edge_id,
            "source": self.source,
            "target": self.target,
            "points": [p.to_dict() for p in self.points],
            "label": self.label.to_dict() if self.label else None,
            "is_cycle_edge": self.is_cycle_edge,
        }


@dataclass(frozen=True)
class LayoutResult:
    """Complete static geometry for one algorithm graph."""
    algorithm_id: str
    direction: str
    width: float
    height: float
    nodes: Tuple[NodeGeometry, ...]    # declaration order
    edges: Tuple[EdgeRoute, ...]       # declaration order

    def node(self, node_id: str) -> Optional[NodeGeometry]:
        return next((n for n in self.nodes if n.node_id == node_id), None)

    def edge(self, edge_id: str) -> Optional[EdgeRoute]:
        return next((e for e in self.edges if e.edge_id == edge_id), None)

    @property
    def ranks(self) -> Dict[str, int]:
        return {n.node_id: n.rank for n in self.nodes}

    @property
    def rank_count(self) -> int:
        return max((n.rank for n in self.nodes), default=-1) + 1

    def to_dict(self) -> dict:
        return {
            "algorithm_id": self.algorithm_id,
            "direction": self.direction,
            "width": self.width,
            "height": self.height,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
