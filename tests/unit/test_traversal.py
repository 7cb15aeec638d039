"""
Unit Tests for the Traversal State Machine

Tests for advance/back/jump_to/reset semantics and snapshots.
"""
from collections import deque
import dataclasses
import pytest

from algoflow.core.graph import NodeType
from algoflow.core.traversal import Operation, PathEntry, TraversalStateMachine
from algoflow.utils import InvalidTransition, NoOpTransition


def route_to(graph, node_id):
    """Shortest edge-id sequence from the start node to node_id."""
    queue = deque([(graph.start_node_id, [])])
    seen = {graph.start_node_id}
    while queue:
        current, edges = queue.popleft()
        if current == node_id:
            return edges
        for edge in graph.get_outgoing_edges(current):
            if edge.target not in seen:
                seen.add(edge.target)
                queue.append((edge.target, edges + [edge.id]))
    raise AssertionError(f"{node_id} unreachable")


def state(machine):
    return machine.current_node_id, machine.path


STAGE2_ROUTE = ["e-start-cat", "e-cat-stage2", "e-s2-dm"]


class TestInitialState:

    def test_starts_at_start_node(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        assert machine.current_node_id == "start"
        assert machine.path == ()
        assert not machine.is_terminal

    def test_initial_snapshot(self, hypertension_graph):
        snapshot = TraversalStateMachine(hypertension_graph).snapshot()
        assert snapshot.revision == 0
        assert snapshot.last_operation == Operation.LOAD
        assert snapshot.step_count == 0


class TestAdvance:

    def test_appends_path_entry(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        entered = machine.advance("e-start-cat")
        assert entered.id == "bp_category"
        assert machine.path == (PathEntry("start", "e-start-cat", "Classify"),)

    def test_unknown_edge_leaves_state(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        before = state(machine)
        with pytest.raises(InvalidTransition) as exc_info:
            machine.advance("e-does-not-exist")
        assert state(machine) == before
        assert exc_info.value.code == "INVALID_TRANSITION"

    def test_edge_of_other_node_rejected(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        with pytest.raises(InvalidTransition):
            machine.advance("e-cat-stage2")
        assert machine.current_node_id == "start"
        assert machine.snapshot().revision == 0

    def test_outcome_is_terminal(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        for edge_id in STAGE2_ROUTE:
            machine.advance(edge_id)
        assert machine.is_terminal
        assert machine.current_node.type == NodeType.OUTCOME
        assert machine.available_edges() == ()
        with pytest.raises(InvalidTransition):
            machine.advance("e-fu-goal")

    def test_same_sequence_same_state(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        for edge_id in STAGE2_ROUTE:
            machine.advance(edge_id)
        first = state(machine)
        machine.reset()
        for edge_id in STAGE2_ROUTE:
            machine.advance(edge_id)
        assert state(machine) == first


class TestBack:

    def test_empty_path_is_noop(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        with pytest.raises(NoOpTransition):
            machine.back()
        assert state(machine) == ("start", ())

    def test_advance_then_back_restores_everywhere(self, hypertension_graph):
        """Every reachable non-terminal node, every outgoing edge."""
        machine = TraversalStateMachine(hypertension_graph)
        checked = 0
        for node in hypertension_graph.nodes:
            if node.type == NodeType.OUTCOME or node.id not in hypertension_graph.reachable_node_ids:
                continue
            for edge in hypertension_graph.get_outgoing_edges(node.id):
                machine.reset()
                for edge_id in route_to(hypertension_graph, node.id):
                    machine.advance(edge_id)
                before = state(machine)
                machine.advance(edge.id)
                machine.back()
                assert state(machine) == before
                checked += 1
        assert checked == len(hypertension_graph.edges)

    def test_back_forgets_choice(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        machine.advance("e-start-cat")
        machine.back()
        assert machine.path == ()
        assert machine.snapshot().last_operation == Operation.BACK


class TestJumpTo:

    def test_jump_to_kth_entry(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        for edge_id in STAGE2_ROUTE:
            machine.advance(edge_id)
        originals = [entry.node_id for entry in machine.path]
        for k in range(len(originals), 0, -1):
            machine.reset()
            for edge_id in STAGE2_ROUTE:
                machine.advance(edge_id)
            machine.jump_to(originals[k - 1])
            assert machine.current_node_id == originals[k - 1]
            assert len(machine.path) == k - 1

    def test_jump_to_unvisited_is_noop(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        machine.advance("e-start-cat")
        before = state(machine)
        with pytest.raises(NoOpTransition):
            machine.jump_to("hf")
        assert state(machine) == before

    def test_jump_to_current_node_is_noop(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        machine.advance("e-start-cat")
        with pytest.raises(NoOpTransition):
            machine.jump_to("bp_category")

    def test_cycle_uses_first_occurrence(self, triage_graph):
        machine = TraversalStateMachine(triage_graph)
        for edge_id in ["e-start-ask", "e-ask-treat", "e-treat-review",
                        "e-review-treat", "e-treat-review"]:
            machine.advance(edge_id)
        assert [e.node_id for e in machine.path].count("treat") == 2
        machine.jump_to("treat")
        assert machine.current_node_id == "treat"
        assert [e.node_id for e in machine.path] == ["start", "ask"]


class TestReset:

    def test_reset_from_any_depth(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        for depth in range(len(STAGE2_ROUTE) + 1):
            machine.reset()
            for edge_id in STAGE2_ROUTE[:depth]:
                machine.advance(edge_id)
            machine.reset()
            assert state(machine) == ("start", ())


class TestSnapshot:

    def test_revision_counts_changes(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        machine.advance("e-start-cat")
        machine.back()
        with pytest.raises(NoOpTransition):
            machine.back()
        assert machine.snapshot().revision == 2

    def test_visited_sets(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        for edge_id in STAGE2_ROUTE:
            machine.advance(edge_id)
        snapshot = machine.snapshot()
        assert snapshot.visited_node_ids == {"start", "bp_category", "stage2"}
        assert snapshot.visited_edge_ids == set(STAGE2_ROUTE)
        assert snapshot.is_terminal

    def test_snapshot_is_frozen_copy(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        snapshot = machine.snapshot()
        machine.advance("e-start-cat")
        assert snapshot.path == ()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.current_node_id = "elsewhere"

    def test_to_dict(self, hypertension_graph):
        machine = TraversalStateMachine(hypertension_graph)
        machine.advance("e-start-cat")
        data = machine.snapshot().to_dict()
        assert data["current_node_id"] == "bp_category"
        assert data["last_operation"] == "advance"
        assert data["path"][0]["edge_label"] == "Classify"
