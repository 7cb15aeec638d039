"""
Path Highlighting

Per-update rendering annotation for the full-graph view: which node is
active, which nodes and edges lie on the recorded path, and the stroke
styling that follows from it. Kept apart from the layout engine so that
traversal never influences geometry.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TYPE_CHECKING

from algoflow.core.graph import AlgorithmGraph

if TYPE_CHECKING:
    from algoflow.core.traversal import PathEntry


@dataclass(frozen=True)
class EdgeStyle:
    stroke: str
    stroke_width: float
    animated: bool
    label_font_weight: int
    label_fill: str

    def to_dict(self) -> dict:
        return {
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "animated": self.animated,
            "label_font_weight": self.label_font_weight,
            "label_fill": self.label_fill,
        }


PATH_EDGE_STYLE    = EdgeStyle("#6c5ce7", 2.5, True,  700, "#6c5ce7")
DEFAULT_EDGE_STYLE = EdgeStyle("#94a3b8", 1.5, False, 500, "#64748b")


@dataclass(frozen=True)
class NodeHighlight:
    node_id: str
    active: bool
    visited: bool
    has_education: bool

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "active": self.active,
            "visited": self.visited,
            "has_education": self.has_education,
        }


@dataclass(frozen=True)
class EdgeHighlight:
    edge_id: str
    on_path: bool
    style: EdgeStyle

    def to_dict(self) -> dict:
        return {"edge_id": self.edge_id, "on_path": self.on_path, "style": self.style.to_dict()}


@dataclass(frozen=True)
class HighlightState:
    active_node_id: Optional[str]
    nodes: Tuple[NodeHighlight, ...]
    edges: Tuple[EdgeHighlight, ...]

    def node(self, node_id: str) -> Optional[NodeHighlight]:
        return next((n for n in self.nodes if n.node_id == node_id), None)

    def edge(self, edge_id: str) -> Optional[EdgeHighlight]:
        return next((e for e in self.edges if e.edge_id == edge_id), None)

    def to_dict(self) -> dict:
        return {
            "active_node_id": self.active_node_id,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


def annotate_path(
    graph: AlgorithmGraph,
    current_node_id: Optional[str],
    path: Sequence["PathEntry"],
) -> HighlightState:
    """
    Flag the active node, the visited nodes (originating nodes of each path
    entry) and the edges taken.
    """
    visited_nodes = {entry.node_id for entry in path}
    visited_edges = {entry.edge_id for entry in path}

    nodes = tuple(
        NodeHighlight(
            node_id=node.id,
            active=node.id == current_node_id,
            visited=node.id in visited_nodes,
            has_education=node.educational_content.has_content,
        )
        for node in graph.nodes
    )
    edges = tuple(
        EdgeHighlight(
            edge_id=edge.id,
            on_path=edge.id in visited_edges,
            style=PATH_EDGE_STYLE if edge.id in visited_edges else DEFAULT_EDGE_STYLE,
        )
        for edge in graph.edges
    )
    return HighlightState(active_node_id=current_node_id, nodes=nodes, edges=edges)
