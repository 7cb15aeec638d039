"""
Traversal State Machine

Tracks the current node and the ordered path of choices for one session.

State = (current_node_id, path). The path is append-only during forward
travel; Back pops one entry, JumpTo truncates by index, Reset clears it.
Transitions are only ever the explicit, declared edges a user picks.

Errors leave state untouched:
  - InvalidTransition: advance() with an edge that does not leave the
    current node (or is unknown)
  - NoOpTransition: back() on an empty path, jump_to() a node that is not
    among the recorded originating nodes
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from algoflow.core.graph import AlgorithmGraph, AlgorithmNode, AlgorithmEdge, NodeType
from algoflow.utils import algorithm_logger, InvalidTransition, NoOpTransition


class Operation(str, Enum):
    """Last state-changing operation, carried on snapshots for view-local state."""
    LOAD    = "load"
    ADVANCE = "advance"
    BACK    = "back"
    JUMP    = "jump"
    RESET   = "reset"


@dataclass(frozen=True)
class PathEntry:
    """One traversal step: the node left, the edge taken and its label."""
    node_id: str
    edge_id: str
    edge_label: str

    def to_dict(self) -> dict:
        return {"node_id": self.node_id, "edge_id": self.edge_id, "edge_label": self.edge_label}


@dataclass(frozen=True)
class TraversalSnapshot:
    """Immutable copy of traversal state, shared by every view."""
    algorithm_id: str
    current_node_id: str
    path: Tuple[PathEntry, ...]
    is_terminal: bool
    revision: int
    last_operation: Operation

    @property
    def visited_node_ids(self) -> FrozenSet[str]:
        return frozenset(entry.node_id for entry in self.path)

    @property
    def visited_edge_ids(self) -> FrozenSet[str]:
        return frozenset(entry.edge_id for entry in self.path)

    @property
    def step_count(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict:
        return {
            "algorithm_id": self.algorithm_id,
            "current_node_id": self.current_node_id,
            "path": [entry.to_dict() for entry in self.path],
            "is_terminal": self.is_terminal,
            "revision": self.revision,
            "last_operation": self.last_operation.value,
        }


class TraversalStateMachine:
    """
    History-bearing cursor over a loaded AlgorithmGraph.

    Not thread-safe; one machine serves one interactive session.
    """

    def __init__(self, graph: AlgorithmGraph):
        self._graph = graph
        self._log = algorithm_logger(__name__, graph.id)
        self._current_node_id = graph.start_node_id
        self._path: List[PathEntry] = []
        self._revision = 0
        self._last_operation = Operation.LOAD

    # ── State ─────────────────────────────────────────────────────────────
    @property
    def graph(self) -> AlgorithmGraph:
        return self._graph

    @property
    def current_node_id(self) -> str:
        return self._current_node_id

    @property
    def current_node(self) -> AlgorithmNode:
        return self._graph.get_node(self._current_node_id)

    @property
    def path(self) -> Tuple[PathEntry, ...]:
        return tuple(self._path)

    @property
    def is_terminal(self) -> bool:
        return self.current_node.type == NodeType.OUTCOME

    def available_edges(self) -> Tuple[AlgorithmEdge, ...]:
        """Edges the user may choose from the current node."""
        return self._graph.get_outgoing_edges(self._current_node_id)

    def snapshot(self) -> TraversalSnapshot:
        return TraversalSnapshot(
            algorithm_id=self._graph.id,
            current_node_id=self._current_node_id,
            path=tuple(self._path),
            is_terminal=self.is_terminal,
            revision=self._revision,
            last_operation=self._last_operation,
        )

    # ── Operations ────────────────────────────────────────────────────────
    def advance(self, edge_id: str) -> AlgorithmNode:
        """
        Follow an outgoing edge of the current node.

        Returns:
            The node entered.

        Raises:
            InvalidTransition: edge unknown or not leaving the current node.
        """
        edge = self._graph.get_edge(edge_id)
        if edge is None or edge.source != self._current_node_id:
            raise InvalidTransition(
                f"Edge '{edge_id}' does not leave current node '{self._current_node_id}'",
                edge_id=edge_id,
                current_node_id=self._current_node_id,
            )

        self._path.append(PathEntry(node_id=self._current_node_id, edge_id=edge.id, edge_label=edge.label))
        self._current_node_id = edge.target
        self._commit(Operation.ADVANCE)
        self._log.debug(f"advance via '{edge.id}' -> '{edge.target}'")
        return self.current_node

    def back(self) -> AlgorithmNode:
        """
        Undo the last step. The discarded choice is not remembered.

        Raises:
            NoOpTransition: path is empty.
        """
        if not self._path:
            raise NoOpTransition("Nothing to go back to: path is empty", operation=Operation.BACK.value)

        last = self._path.pop()
        self._current_node_id = last.node_id
        self._commit(Operation.BACK)
        self._log.debug(f"back -> '{last.node_id}'")
        return self.current_node

    def jump_to(self, node_id: str) -> AlgorithmNode:
        """
        Rewind to a node recorded on the path, dropping that entry and
        everything after it.

        Raises:
            NoOpTransition: node_id is not an originating node on the path.
        """
        index = self._find_in_path(node_id)
        if index is None:
            raise NoOpTransition(
                f"Node '{node_id}' is not on the recorded path",
                operation=Operation.JUMP.value,
                details={"node_id": node_id},
            )

        del self._path[index:]
        self._current_node_id = node_id
        self._commit(Operation.JUMP)
        self._log.debug(f"jump -> '{node_id}' (path length {len(self._path)})")
        return self.current_node

    def reset(self) -> AlgorithmNode:
        """Clear the path and return to the start node."""
        self._path.clear()
        self._current_node_id = self._graph.start_node_id
        self._commit(Operation.RESET)
        self._log.debug("reset")
        return self.current_node

    # ── Internals ─────────────────────────────────────────────────────────
    def _find_in_path(self, node_id: str) -> Optional[int]:
        for index, entry in enumerate(self._path):
            if entry.node_id == node_id:
                return index
        return None

    def _commit(self, operation: Operation) -> None:
        self._revision += 1
        self._last_operation = operation
