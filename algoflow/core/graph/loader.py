"""
Graph Loader & Validator

Turns a GraphDefinition into an AlgorithmGraph with adjacency maps, or
raises ValidationError listing every structural problem found.

Rules:
  - start_node_id must name an existing node, and it must be the only
    node declared with type "start"
  - node ids and edge ids are unique
  - every edge references existing source and target nodes
  - outcome nodes are terminal (no outgoing edges)

Cycles are allowed; a traversal only ever follows explicit user choices.
"""
from __future__ import annotations

from collections import deque
from typing import Dict, FrozenSet, List, Optional, Tuple

from algoflow.utils import get_logger, ValidationError
from .base import AlgorithmEdge, AlgorithmNode, GraphDefinition, NodeType

logger = get_logger(__name__)


class AlgorithmGraph:
    """
    Read-only view of a validated GraphDefinition.

    Only lookups are exposed; there is no way to add or remove nodes or
    edges after load.
    """

    def __init__(self, definition: GraphDefinition):
        self._definition = definition
        self._nodes: Dict[str, AlgorithmNode] = {n.id: n for n in definition.nodes}
        self._edges: Dict[str, AlgorithmEdge] = {e.id: e for e in definition.edges}
        self._node_index: Dict[str, int] = {n.id: i for i, n in enumerate(definition.nodes)}

        outgoing: Dict[str, List[AlgorithmEdge]] = {n.id: [] for n in definition.nodes}
        incoming: Dict[str, List[AlgorithmEdge]] = {n.id: [] for n in definition.nodes}
        for edge in definition.edges:
            outgoing[edge.source].append(edge)
            incoming[edge.target].append(edge)
        self._outgoing = {k: tuple(v) for k, v in outgoing.items()}
        self._incoming = {k: tuple(v) for k, v in incoming.items()}

        self._reachable = self._compute_reachable()

    # ── Identity ──────────────────────────────────────────────────────────
    @property
    def definition(self) -> GraphDefinition:
        return self._definition

    @property
    def id(self) -> str:
        return self._definition.id

    @property
    def start_node_id(self) -> str:
        return self._definition.start_node_id

    @property
    def start_node(self) -> AlgorithmNode:
        return self._nodes[self._definition.start_node_id]

    @property
    def nodes(self) -> Tuple[AlgorithmNode, ...]:
        """Nodes in declaration order."""
        return self._definition.nodes

    @property
    def edges(self) -> Tuple[AlgorithmEdge, ...]:
        """Edges in declaration order."""
        return self._definition.edges

    # ── Lookups ───────────────────────────────────────────────────────────
    def get_node(self, node_id: str) -> Optional[AlgorithmNode]:
        return self._nodes.get(node_id)

    def get_outgoing_edges(self, node_id: str) -> Tuple[AlgorithmEdge, ...]:
        return self._outgoing.get(node_id, ())

    def get_incoming_edges(self, node_id: str) -> Tuple[AlgorithmEdge, ...]:
        return self._incoming.get(node_id, ())

    def get_edge(self, edge_id: str) -> Optional[AlgorithmEdge]:
        return self._edges.get(edge_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def node_index(self, node_id: str) -> int:
        """Declaration position of a node, used for deterministic tie-breaks."""
        return self._node_index[node_id]

    @property
    def reachable_node_ids(self) -> FrozenSet[str]:
        """Nodes reachable from the start node by following edges."""
        return self._reachable

    def _compute_reachable(self) -> FrozenSet[str]:
        seen = {self.start_node_id}
        queue = deque([self.start_node_id])
        while queue:
            node_id = queue.popleft()
            for edge in self._outgoing[node_id]:
                if edge.target not in seen:
                    seen.add(edge.target)
                    queue.append(edge.target)
        return frozenset(seen)

    def __repr__(self) -> str:
        return (
            f"AlgorithmGraph(id={self.id!r}, nodes={len(self._nodes)}, "
            f"edges={len(self._edges)})"
        )


def find_problems(definition: GraphDefinition) -> List[str]:
    """Return every structural problem in the definition (empty when valid)."""
    problems: List[str] = []

    if not definition.nodes:
        problems.append("Algorithm declares no nodes")

    node_ids = set()
    for node in definition.nodes:
        if node.id in node_ids:
            problems.append(f"Duplicate node id '{node.id}'")
        node_ids.add(node.id)

    if not definition.start_node_id:
        problems.append("start_node_id is missing")
    elif definition.start_node_id not in node_ids:
        problems.append(f"start_node_id '{definition.start_node_id}' does not name a node")
    else:
        start = next(n for n in definition.nodes if n.id == definition.start_node_id)
        if start.type != NodeType.START:
            problems.append(
                f"start_node_id '{start.id}' names a {start.type.value} node, not a start node"
            )

    for node in definition.nodes:
        if node.type == NodeType.START and node.id != definition.start_node_id:
            problems.append(
                f"Node '{node.id}' is declared as a start node but start_node_id "
                f"is '{definition.start_node_id}'"
            )

    edge_ids = set()
    outcome_ids = {n.id for n in definition.nodes if n.type == NodeType.OUTCOME}
    for edge in definition.edges:
        if edge.id in edge_ids:
            problems.append(f"Duplicate edge id '{edge.id}'")
        edge_ids.add(edge.id)

        if edge.source not in node_ids:
            problems.append(f"Edge '{edge.id}' references missing source node '{edge.source}'")
        if edge.target not in node_ids:
            problems.append(f"Edge '{edge.id}' references missing target node '{edge.target}'")
        if edge.source in outcome_ids:
            problems.append(f"Outcome node '{edge.source}' has outgoing edge '{edge.id}'")

    return problems


def load_graph(definition: GraphDefinition) -> AlgorithmGraph:
    """
    Validate a definition and build its adjacency maps.

    Raises:
        ValidationError: if the definition is malformed. Traversal must not
            start on a graph that failed to load.
    """
    problems = find_problems(definition)
    if problems:
        logger.error(
            f"Algorithm '{definition.id}' failed validation: "
            f"{len(problems)} problem(s) — " + "; ".join(problems)
        )
        raise ValidationError(
            problems[0],
            algorithm_id=definition.id,
            problems=problems,
        )

    graph = AlgorithmGraph(definition)

    unreachable = [n.id for n in graph.nodes if n.id not in graph.reachable_node_ids]
    if unreachable:
        logger.warning(
            f"Algorithm '{definition.id}': {len(unreachable)} node(s) unreachable "
            f"from start — {', '.join(unreachable)}"
        )

    logger.debug(f"Loaded {graph!r}")
    return graph
