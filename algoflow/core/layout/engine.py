"""
Layered Layout Engine

Deterministic Sugiyama-style layout for algorithm flowcharts:

  1. Cycle edges are found with a DFS (start node first, then declaration
     order) and left out of ranking.
  2. Ranking: longest path from the start node. Nodes unreachable from start
     are ranked by longest path from their own sources.
  3. Ordering: declaration order, then a fixed number of alternating
     barycenter sweeps. The ordering with the fewest crossings between
     adjacent ranks wins; ties keep the earlier ordering.
  4. Coordinates: fixed node size, every rank centred on one axis.
  5. Routing: orthogonal connector between the two boxes, label at the
     polyline midpoint. Edges spanning several ranks keep clear of the boxes
     in between, detouring round the outside when no direct column is free.

Everything iterates in declaration order and sorts with explicit tie-break
keys, so identical input always produces identical geometry.
"""
from __future__ import annotations

import heapq
from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from algoflow.core.graph import AlgorithmEdge, AlgorithmGraph
from algoflow.utils import get_logger
from .base import (
    EdgeRoute,
    LabelPlacement,
    LayoutConfig,
    LayoutResult,
    NodeGeometry,
    Point,
)

logger = get_logger(__name__)

Layers = List[List[str]]

_WHITE, _GRAY, _BLACK = 0, 1, 2


# ── 1. Cycle edges ────────────────────────────────────────────────────────────

def find_cycle_edges(graph: AlgorithmGraph) -> FrozenSet[str]:
    """Edge ids that close a cycle (DFS back edges, including self loops)."""
    state = {n.id: _WHITE for n in graph.nodes}
    roots = [graph.start_node_id] + [n.id for n in graph.nodes if n.id != graph.start_node_id]
    back_edges = set()

    for root in roots:
        if state[root] != _WHITE:
            continue
        state[root] = _GRAY
        stack = [(root, iter(graph.get_outgoing_edges(root)))]
        while stack:
            node_id, pending = stack[-1]
            edge = next(pending, None)
            if edge is None:
                state[node_id] = _BLACK
                stack.pop()
                continue
            target_state = state[edge.target]
            if target_state == _GRAY:
                back_edges.add(edge.id)
            elif target_state == _WHITE:
                state[edge.target] = _GRAY
                stack.append((edge.target, iter(graph.get_outgoing_edges(edge.target))))

    return frozenset(back_edges)


# ── 2. Ranking ────────────────────────────────────────────────────────────────

def _topological_order(graph: AlgorithmGraph, dag_edges: List[AlgorithmEdge]) -> List[str]:
    """Kahn's algorithm; ready nodes are released in declaration order."""
    indegree = {n.id: 0 for n in graph.nodes}
    successors: Dict[str, List[str]] = {n.id: [] for n in graph.nodes}
    for edge in dag_edges:
        indegree[edge.target] += 1
        successors[edge.source].append(edge.target)

    ready = [(graph.node_index(nid), nid) for nid, deg in indegree.items() if deg == 0]
    heapq.heapify(ready)
    order = []
    while ready:
        _, node_id = heapq.heappop(ready)
        order.append(node_id)
        for target in successors[node_id]:
            indegree[target] -= 1
            if indegree[target] == 0:
                heapq.heappush(ready, (graph.node_index(target), target))
    return order


def assign_ranks(graph: AlgorithmGraph, cycle_edges: FrozenSet[str]) -> Dict[str, int]:
    """
    Longest-path ranking over the acyclic part of the graph.

    Reachable nodes are ranked by their longest path from the start node,
    ignoring edges from unreachable nodes. Unreachable nodes are ranked
    among themselves, sources at rank 0.
    """
    dag_edges = [e for e in graph.edges if e.id not in cycle_edges]
    order = _topological_order(graph, dag_edges)
    reachable = graph.reachable_node_ids

    predecessors: Dict[str, List[str]] = {n.id: [] for n in graph.nodes}
    for edge in dag_edges:
        predecessors[edge.target].append(edge.source)

    ranks: Dict[str, int] = {graph.start_node_id: 0}
    for node_id in order:
        if node_id == graph.start_node_id:
            continue
        if node_id in reachable:
            preds = [p for p in predecessors[node_id] if p in reachable]
        else:
            preds = predecessors[node_id]
        ranks[node_id] = max((ranks[p] + 1 for p in preds), default=0)

    return ranks


# ── 3. Ordering ───────────────────────────────────────────────────────────────

def _build_layers(graph: AlgorithmGraph, ranks: Dict[str, int]) -> Layers:
    layers: Layers = [[] for _ in range(max(ranks.values()) + 1)]
    for node in graph.nodes:
        layers[ranks[node.id]].append(node.id)
    return layers


def _centered_positions(layers: Layers) -> Dict[str, float]:
    """In-rank index shifted so every rank is centred on 0."""
    positions = {}
    for layer in layers:
        offset = (len(layer) - 1) / 2
        for index, node_id in enumerate(layer):
            positions[node_id] = index - offset
    return positions


def count_crossings(graph: AlgorithmGraph, layers: Layers, ranks: Dict[str, int]) -> int:
    """Edge crossings between adjacent ranks for the given ordering."""
    index = {nid: i for layer in layers for i, nid in enumerate(layer)}
    segments: Dict[int, List[Tuple[int, int]]] = {}
    for edge in graph.edges:
        upper, lower = edge.source, edge.target
        if ranks[upper] > ranks[lower]:
            upper, lower = lower, upper
        if ranks[lower] - ranks[upper] != 1:
            continue
        segments.setdefault(ranks[upper], []).append((index[upper], index[lower]))

    total = 0
    for pairs in segments.values():
        if len(pairs) < 2:
            continue
        arr = np.array(pairs, dtype=float)
        top = arr[:, 0][:, None] - arr[:, 0][None, :]
        bottom = arr[:, 1][:, None] - arr[:, 1][None, :]
        total += int(np.count_nonzero(top * bottom < 0)) // 2
    return total


def _neighbours(graph: AlgorithmGraph, ranks: Dict[str, int]) -> Tuple[Dict[str, List[str]], Dict[str, List[str]]]:
    """Per node: neighbours in lower ranks and in higher ranks (edge direction ignored)."""
    above: Dict[str, List[str]] = {n.id: [] for n in graph.nodes}
    below: Dict[str, List[str]] = {n.id: [] for n in graph.nodes}
    for edge in graph.edges:
        s, t = edge.source, edge.target
        if ranks[s] < ranks[t]:
            above[t].append(s)
            below[s].append(t)
        elif ranks[s] > ranks[t]:
            above[s].append(t)
            below[t].append(s)
    return above, below


def order_layers(graph: AlgorithmGraph, ranks: Dict[str, int], iterations: int) -> Layers:
    """Barycenter crossing minimisation with a fixed sweep count."""
    layers = _build_layers(graph, ranks)
    above, below = _neighbours(graph, ranks)

    best = [list(layer) for layer in layers]
    best_crossings = count_crossings(graph, best, ranks)

    for sweep in range(iterations):
        downward = sweep % 2 == 0
        rank_order = range(1, len(layers)) if downward else range(len(layers) - 2, -1, -1)
        neighbour_map = above if downward else below

        for rank in rank_order:
            positions = _centered_positions(layers)
            keys = {}
            for node_id in layers[rank]:
                fixed = [positions[n] for n in neighbour_map[node_id]]
                barycenter = float(np.mean(fixed)) if fixed else positions[node_id]
                keys[node_id] = (barycenter, graph.node_index(node_id))
            layers[rank] = sorted(layers[rank], key=keys.__getitem__)

        crossings = count_crossings(graph, layers, ranks)
        if crossings < best_crossings:
            best = [list(layer) for layer in layers]
            best_crossings = crossings

    logger.debug(
        f"Layout ordering for '{graph.id}': {best_crossings} crossing(s) "
        f"after {iterations} sweep(s)"
    )
    return best


# ── 4. Coordinates ────────────────────────────────────────────────────────────

def _place_nodes(layers: Layers, config: LayoutConfig) -> Dict[str, NodeGeometry]:
    horizontal = config.direction == "TB"
    cross_size, main_size = (
        (config.node_width, config.node_height) if horizontal
        else (config.node_height, config.node_width)
    )

    raw = {}
    for rank, layer in enumerate(layers):
        span = len(layer) * cross_size + (len(layer) - 1) * config.node_sep
        for order, node_id in enumerate(layer):
            cross = order * (cross_size + config.node_sep) - span / 2
            main = rank * (main_size + config.rank_sep)
            raw[node_id] = (cross, main, rank, order)

    min_cross = min(v[0] for v in raw.values())
    geometry = {}
    for node_id, (cross, main, rank, order) in raw.items():
        cross = round(cross - min_cross, 2)
        main = round(main, 2)
        x, y = (cross, main) if horizontal else (main, cross)
        geometry[node_id] = NodeGeometry(
            node_id=node_id,
            x=x,
            y=y,
            width=config.node_width,
            height=config.node_height,
            rank=rank,
            order=order,
        )
    return geometry


# ── 5. Edge routing ───────────────────────────────────────────────────────────

class _Frame:
    """Rank-aligned frame: 'main' runs along ranks, 'cross' inside a rank."""

    def __init__(self, config: LayoutConfig):
        self.horizontal = config.direction == "TB"
        self.cross_size = config.node_width if self.horizontal else config.node_height
        self.main_size = config.node_height if self.horizontal else config.node_width

    def box(self, g: NodeGeometry) -> Tuple[float, float, float]:
        """(cross centre, main start, main end) of a node box."""
        if self.horizontal:
            return g.x + g.width / 2, g.y, g.y + g.height
        return g.y + g.height / 2, g.x, g.x + g.width

    def point(self, cross: float, main: float) -> Point:
        if self.horizontal:
            return Point(round(cross, 2), round(main, 2))
        return Point(round(main, 2), round(cross, 2))


def _rank_spans(geometry: Dict[str, NodeGeometry], frame: _Frame) -> Dict[int, List[Tuple[float, float]]]:
    """Cross-axis extent of every node box, grouped by rank."""
    spans: Dict[int, List[Tuple[float, float]]] = {}
    for g in geometry.values():
        centre, _, _ = frame.box(g)
        half = frame.cross_size / 2
        spans.setdefault(g.rank, []).append((centre - half, centre + half))
    return spans


def _column_free(cross: float, spans: List[Tuple[float, float]], margin: float) -> bool:
    return all(not (lo - margin <= cross <= hi + margin) for lo, hi in spans)


def _route_points(
    source: NodeGeometry,
    target: NodeGeometry,
    is_cycle_edge: bool,
    frame: _Frame,
    config: LayoutConfig,
    spans: Dict[int, List[Tuple[float, float]]],
) -> Tuple[Point, ...]:
    s_cross, s_start, s_end = frame.box(source)
    t_cross, t_start, t_end = frame.box(target)

    if source.node_id == target.node_id:
        outer = s_cross + frame.cross_size / 2
        loop = outer + config.node_sep / 2
        middle = (s_start + s_end) / 2
        quarter = frame.main_size / 4
        return (
            frame.point(outer, middle - quarter),
            frame.point(loop, middle - quarter),
            frame.point(loop, middle + quarter),
            frame.point(outer, middle + quarter),
        )

    gap = config.rank_sep / 2
    if target.rank > source.rank and not is_cycle_edge:
        # Leave the far side of the source, enter the near side of the target
        begin, end = (s_cross, s_end), (t_cross, t_start)
        exit_bend, entry_bend = s_end + gap, t_start - gap
    else:
        # Edges pointing back up the ranks run off-centre so they do not
        # overlap the forward edge between the same pair
        offset = frame.cross_size / 4
        begin, end = (s_cross + offset, s_start), (t_cross + offset, t_end)
        exit_bend, entry_bend = s_start - gap, t_end + gap

    low, high = sorted((source.rank, target.rank))
    between = [span for rank in range(low + 1, high) for span in spans.get(rank, ())]
    margin = config.node_sep / 4

    if _column_free(end[0], between, margin):
        bend = exit_bend
    elif _column_free(begin[0], between, margin):
        bend = entry_bend
    else:
        # Both columns cross a box in the ranks in between: detour outside them
        left = min(lo for lo, _ in between) - config.node_sep / 2
        right = max(hi for _, hi in between) + config.node_sep / 2
        near_left = abs(begin[0] - left) < abs(right - begin[0])
        lane = left if near_left and left >= 0 else right
        return (
            frame.point(*begin),
            frame.point(begin[0], exit_bend),
            frame.point(lane, exit_bend),
            frame.point(lane, entry_bend),
            frame.point(end[0], entry_bend),
            frame.point(*end),
        )

    if begin[0] == end[0]:
        return frame.point(*begin), frame.point(*end)
    return (
        frame.point(*begin),
        frame.point(begin[0], bend),
        frame.point(end[0], bend),
        frame.point(*end),
    )


def _polyline_midpoint(points: Tuple[Point, ...]) -> Point:
    """Point halfway along the polyline's arc length."""
    coords = np.array([(p.x, p.y) for p in points], dtype=float)
    segments = np.diff(coords, axis=0)
    lengths = np.hypot(segments[:, 0], segments[:, 1])
    total = float(lengths.sum())
    if total == 0:
        return points[0]

    half = total / 2
    cumulative = np.cumsum(lengths)
    index = int(np.searchsorted(cumulative, half))
    start_len = float(cumulative[index - 1]) if index > 0 else 0.0
    fraction = (half - start_len) / float(lengths[index])
    mid = coords[index] + fraction * segments[index]
    return Point(round(float(mid[0]), 2), round(float(mid[1]), 2))


def _place_label(edge: AlgorithmEdge, points: Tuple[Point, ...], config: LayoutConfig) -> Optional[LabelPlacement]:
    if not edge.label:
        return None
    mid = _polyline_midpoint(points)
    return LabelPlacement(
        text=edge.label,
        x=mid.x,
        y=mid.y,
        width=round(len(edge.label) * config.label_char_width + 2 * config.label_padding, 2),
        height=round(config.label_font_size + 2 * config.label_padding, 2),
    )


# ── Entry point ───────────────────────────────────────────────────────────────

def compute_layout(graph: AlgorithmGraph, config: Optional[LayoutConfig] = None) -> LayoutResult:
    """
    Compute static geometry for a loaded graph.

    Pure: depends only on the graph and ``config``. Calling it twice with
    the same input returns equal results.
    """
    config = config or LayoutConfig.from_settings()

    cycle_edges = find_cycle_edges(graph)
    ranks = assign_ranks(graph, cycle_edges)
    layers = order_layers(graph, ranks, config.order_iterations)
    geometry = _place_nodes(layers, config)

    frame = _Frame(config)
    spans = _rank_spans(geometry, frame)
    routes = []
    for edge in graph.edges:
        is_cycle_edge = edge.id in cycle_edges
        points = _route_points(
            geometry[edge.source], geometry[edge.target], is_cycle_edge, frame, config, spans
        )
        routes.append(EdgeRoute(
            edge_id=edge.id,
            source=edge.source,
            target=edge.target,
            points=points,
            label=_place_label(edge, points, config),
            is_cycle_edge=is_cycle_edge,
        ))

    nodes = tuple(geometry[n.id] for n in graph.nodes)
    # Self loops and detours may reach past the outermost node boxes
    route_points = [p for route in routes for p in route.points]
    width = max([n.x + n.width for n in nodes] + [p.x for p in route_points])
    height = max([n.y + n.height for n in nodes] + [p.y for p in route_points])

    logger.info(
        f"Layout computed for '{graph.id}': {len(nodes)} nodes in {len(layers)} ranks, "
        f"{len(cycle_edges)} cycle edge(s), {width:.0f}x{height:.0f}"
    )
    return LayoutResult(
        algorithm_id=graph.id,
        direction=config.direction,
        width=round(width, 2),
        height=round(height, 2),
        nodes=nodes,
        edges=tuple(routes),
    )
