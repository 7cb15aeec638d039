"""
Dual View Controller

Keeps the full-graph view and the step-by-step wizard in lockstep. Both are
subscribers of one TraversalStore; neither writes state. User interaction in
either view comes back here, becomes exactly one store dispatch, and both
views have rendered the resulting snapshot before the call returns.
"""
from __future__ import annotations

from typing import Optional, Tuple

from algoflow.core.graph import AlgorithmGraph, GraphDefinition, load_graph
from algoflow.core.layout import LayoutConfig, LayoutResult, compute_layout
from algoflow.core.summary import DecisionSummary, build_summary
from algoflow.core.traversal import Operation, TraversalSnapshot, TraversalStateMachine
from algoflow.utils import algorithm_logger

from .store import TraversalStore
from .graph_view import GraphView
from .wizard_view import WizardView


class DualViewController:
    """
    One interactive session over one algorithm.

    Raises:
        ValidationError: from the constructor when the definition is
            malformed; no view is created.
    """

    def __init__(
        self,
        definition: GraphDefinition,
        layout_config: Optional[LayoutConfig] = None,
        viewport_size: Tuple[float, float] = (800.0, 600.0),
    ):
        self._layout_config = layout_config
        self._graph, self._layout = self._prepare(definition)
        self._log = algorithm_logger(__name__, definition.id)

        self._store = TraversalStore(TraversalStateMachine(self._graph))
        self.graph_view = GraphView(
            self._graph, self._layout, on_select=self.select_node, viewport_size=viewport_size
        )
        self.wizard_view = WizardView(self._graph, on_choose=self.advance, on_breadcrumb=self.jump_to)
        self._store.subscribe(self.graph_view.render)
        self._store.subscribe(self.wizard_view.render)

        self._log.info(f"Session view ready, v{definition.version}")

    def _prepare(self, definition: GraphDefinition) -> Tuple[AlgorithmGraph, LayoutResult]:
        graph = load_graph(definition)
        layout = compute_layout(graph, self._layout_config)
        return graph, layout

    # ── Read side ─────────────────────────────────────────────────────────
    @property
    def definition(self) -> GraphDefinition:
        return self._graph.definition

    @property
    def graph(self) -> AlgorithmGraph:
        return self._graph

    @property
    def layout(self) -> LayoutResult:
        return self._layout

    @property
    def snapshot(self) -> TraversalSnapshot:
        return self._store.snapshot

    @property
    def current_node_id(self) -> str:
        return self._store.snapshot.current_node_id

    def is_consistent(self) -> bool:
        """Both views show the node the store holds."""
        current = self._store.snapshot.current_node_id
        return self.graph_view.active_node_id == current and self.wizard_view.current_node_id == current

    def summary(self) -> DecisionSummary:
        """
        Raises:
            SummaryError: the traversal has not reached an outcome node.
        """
        snapshot = self._store.snapshot
        return build_summary(self.definition, snapshot.path, snapshot.current_node_id)

    def state_dict(self) -> dict:
        return {
            "algorithm_id": self._graph.id,
            "snapshot": self.snapshot.to_dict(),
            "wizard": self.wizard_view.to_dict(),
            "highlight": self.graph_view.highlight.to_dict(),
            "viewport": self.graph_view.viewport.to_dict(),
        }

    # ── Operations ────────────────────────────────────────────────────────
    def advance(self, edge_id: str) -> bool:
        return self._store.dispatch(Operation.ADVANCE, edge_id)

    def back(self) -> bool:
        return self._store.dispatch(Operation.BACK)

    def jump_to(self, node_id: str) -> bool:
        if not self._graph.has_node(node_id):
            self._log.warning(f"jump to unknown node '{node_id}' ignored")
            return False
        return self._store.dispatch(Operation.JUMP, node_id)

    def select_node(self, node_id: str) -> bool:
        """Graph-view click. Only nodes already on the path respond."""
        return self.jump_to(node_id)

    def reset(self) -> bool:
        return self._store.dispatch(Operation.RESET)

    def retry(self) -> bool:
        return self.reset()

    def reload(self, definition: GraphDefinition) -> None:
        """
        Hot-swap the algorithm. Traversal restarts at the new start node.

        Raises:
            ValidationError: the replacement is malformed; the current
                definition and traversal stay active.
        """
        graph, layout = self._prepare(definition)

        self._graph, self._layout = graph, layout
        self._log = algorithm_logger(__name__, definition.id)
        self.graph_view.rebind(graph, layout)
        self.wizard_view.rebind(graph)
        self._store.replace(TraversalStateMachine(graph))
        self._log.info(f"Reloaded v{definition.version}; traversal reset")
