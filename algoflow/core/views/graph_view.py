"""
Graph View

Full-graph rendering state: static layout geometry, per-snapshot path
highlighting, and a camera that is re-fitted only when the travelled path
changes. Node clicks are forwarded, never applied here.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

from algoflow.core.graph import AlgorithmGraph
from algoflow.core.layout import (
    LayoutResult, HighlightState, Viewport, annotate_path, fit_viewport,
)
from algoflow.core.traversal import TraversalSnapshot


class GraphView:
    """
    Read-only projection of a TraversalSnapshot onto the laid-out graph.

    The viewport is recomputed lazily: any number of path changes between
    two reads cost a single fit.
    """

    def __init__(
        self,
        graph: AlgorithmGraph,
        layout: LayoutResult,
        on_select: Callable[[str], bool],
        viewport_size: Tuple[float, float] = (800.0, 600.0),
    ):
        self._graph = graph
        self._layout = layout
        self._on_select = on_select
        self._viewport_size = viewport_size
        self._snapshot: Optional[TraversalSnapshot] = None
        self._highlight: Optional[HighlightState] = None
        self._viewport: Optional[Viewport] = None
        self._viewport_stale = True
        self.fit_count = 0

    # ── Subscription ──────────────────────────────────────────────────────
    def render(self, snapshot: TraversalSnapshot) -> None:
        previous = self._snapshot
        self._snapshot = snapshot
        self._highlight = annotate_path(self._graph, snapshot.current_node_id, snapshot.path)
        if previous is None or previous.path != snapshot.path:
            self._viewport_stale = True

    def rebind(self, graph: AlgorithmGraph, layout: LayoutResult) -> None:
        """Point at a reloaded graph; the next render re-annotates."""
        self._graph = graph
        self._layout = layout
        self._snapshot = None
        self._viewport_stale = True

    # ── Read side ─────────────────────────────────────────────────────────
    @property
    def layout(self) -> LayoutResult:
        return self._layout

    @property
    def highlight(self) -> HighlightState:
        return self._highlight

    @property
    def active_node_id(self) -> Optional[str]:
        return self._highlight.active_node_id if self._highlight else None

    @property
    def viewport(self) -> Viewport:
        if self._viewport is None or self._viewport_stale:
            width, height = self._viewport_size
            self._viewport = fit_viewport(self._layout, width, height, node_ids=self._focus_ids())
            self._viewport_stale = False
            self.fit_count += 1
        return self._viewport

    def resize(self, width: float, height: float) -> None:
        self._viewport_size = (width, height)
        self._viewport_stale = True

    def _focus_ids(self):
        if self._snapshot is None:
            return None
        ids = [entry.node_id for entry in self._snapshot.path]
        ids.append(self._snapshot.current_node_id)
        return ids

    # ── Interaction ───────────────────────────────────────────────────────
    def select_node(self, node_id: str) -> bool:
        """Node click: rewinds to the node when it lies on the path."""
        return self._on_select(node_id)

    def to_dict(self) -> dict:
        return {
            "layout": self._layout.to_dict(),
            "highlight": self._highlight.to_dict() if self._highlight else None,
            "viewport": self.viewport.to_dict(),
        }
