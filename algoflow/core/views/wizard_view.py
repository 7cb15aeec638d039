"""
Wizard View

Step-by-step rendering state: the current question, its choices,
breadcrumbs back through the path, progress, and the decision summary once
an outcome is reached. The only state it owns is whether the educational
panel is expanded.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from algoflow.core.graph import AlgorithmGraph, AlgorithmNode
from algoflow.core.summary import DecisionSummary, build_summary
from algoflow.core.traversal import Operation, TraversalSnapshot


@dataclass(frozen=True)
class Choice:
    """An outgoing edge offered as a button."""
    edge_id: str
    label: str
    target_id: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {"edge_id": self.edge_id, "label": self.label, "target_id": self.target_id, "note": self.note}


@dataclass(frozen=True)
class Breadcrumb:
    """A recorded step; clicking it rewinds to node_id."""
    node_id: str
    label: str
    choice: str

    def to_dict(self) -> dict:
        return {"node_id": self.node_id, "label": self.label, "choice": self.choice}


class WizardView:
    """Read-only projection of a TraversalSnapshot as a single-question wizard."""

    def __init__(
        self,
        graph: AlgorithmGraph,
        on_choose: Callable[[str], bool],
        on_breadcrumb: Callable[[str], bool],
    ):
        self._graph = graph
        self._on_choose = on_choose
        self._on_breadcrumb = on_breadcrumb
        self._snapshot: Optional[TraversalSnapshot] = None
        self._education_open = False

    def render(self, snapshot: TraversalSnapshot) -> None:
        if snapshot.last_operation in (Operation.ADVANCE, Operation.BACK):
            self._education_open = False
        self._snapshot = snapshot

    def rebind(self, graph: AlgorithmGraph) -> None:
        self._graph = graph
        self._snapshot = None
        self._education_open = False

    # ── Read side ─────────────────────────────────────────────────────────
    @property
    def current_node_id(self) -> Optional[str]:
        return self._snapshot.current_node_id if self._snapshot else None

    @property
    def current_node(self) -> Optional[AlgorithmNode]:
        if self._snapshot is None:
            return None
        return self._graph.get_node(self._snapshot.current_node_id)

    @property
    def choices(self) -> Tuple[Choice, ...]:
        if self._snapshot is None:
            return ()
        return tuple(
            Choice(edge_id=e.id, label=e.label, target_id=e.target, note=e.educational_note)
            for e in self._graph.get_outgoing_edges(self._snapshot.current_node_id)
        )

    @property
    def breadcrumbs(self) -> Tuple[Breadcrumb, ...]:
        if self._snapshot is None:
            return ()
        crumbs = []
        for entry in self._snapshot.path:
            node = self._graph.get_node(entry.node_id)
            crumbs.append(Breadcrumb(
                node_id=entry.node_id,
                label=node.label if node else entry.node_id,
                choice=entry.edge_label,
            ))
        return tuple(crumbs)

    @property
    def step_number(self) -> int:
        return self._snapshot.step_count + 1 if self._snapshot else 0

    @property
    def progress(self) -> float:
        """Fraction of the graph's nodes covered so far, capped at 1.0."""
        total = len(self._graph.nodes)
        if not total or self._snapshot is None:
            return 0.0
        return min(1.0, self.step_number / total)

    @property
    def is_terminal(self) -> bool:
        return bool(self._snapshot and self._snapshot.is_terminal)

    @property
    def education_open(self) -> bool:
        return self._education_open

    def toggle_education(self) -> bool:
        self._education_open = not self._education_open
        return self._education_open

    def summary(self) -> Optional[DecisionSummary]:
        if not self.is_terminal:
            return None
        return build_summary(self._graph.definition, self._snapshot.path, self._snapshot.current_node_id)

    # ── Interaction ───────────────────────────────────────────────────────
    def choose(self, edge_id: str) -> bool:
        return self._on_choose(edge_id)

    def select_breadcrumb(self, node_id: str) -> bool:
        return self._on_breadcrumb(node_id)

    def to_dict(self) -> dict:
        node = self.current_node
        summary = self.summary()
        return {
            "current_node": node.to_dict() if node else None,
            "choices": [c.to_dict() for c in self.choices],
            "breadcrumbs": [b.to_dict() for b in self.breadcrumbs],
            "step_number": self.step_number,
            "progress": round(self.progress, 4),
            "education_open": self._education_open,
            "is_terminal": self.is_terminal,
            "summary": summary.to_dict() if summary else None,
        }
