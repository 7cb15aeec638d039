"""
Unit Tests for Graph Definition & Validator

Tests for definition parsing, structural validation and graph lookups.
"""
import dataclasses
import pytest

from algoflow.core.graph import (
    GraphDefinition, NodeType, AlgorithmGraph, load_graph, find_problems
)
from algoflow.core.views import DualViewController
from algoflow.utils import ValidationError


class TestGraphDefinitionParsing:
    """Tests for GraphDefinition.from_dict."""

    def test_hypertension_fields(self, hypertension_definition):
        d = hypertension_definition
        assert d.id == "hypertension-mgmt"
        assert d.version == "1.0"
        assert d.guideline == "ACC/AHA 2017"
        assert d.start_node_id == "start"
        assert d.i18n_key == "hypertension"
        assert len(d.faq) == 5

    def test_camel_case_educational_content(self, hypertension_definition):
        start = next(n for n in hypertension_definition.nodes if n.id == "start")
        assert start.type == NodeType.START
        assert start.educational_content.why.startswith("Accurate BP measurement")
        assert len(start.educational_content.key_points) == 4
        assert len(start.educational_content.references) == 1

    def test_edge_educational_note(self, hypertension_definition):
        edge = next(e for e in hypertension_definition.edges if e.id == "e-start-cat")
        assert edge.label == "Classify"
        assert edge.educational_note.startswith("Classification")

    def test_snake_case_accepted(self):
        definition = GraphDefinition.from_dict({
            "id": "snake",
            "version": "2",
            "guideline": "G",
            "start_node_id": "a",
            "nodes": [
                {"id": "a", "type": "start", "label": "A",
                 "educational_content": {"why": "because", "key_points": ["k"]}},
                {"id": "b", "type": "outcome", "label": "B"},
            ],
            "edges": [{"id": "ab", "source": "a", "target": "b", "label": "go",
                       "educational_note": "note"}],
        })
        assert definition.start_node_id == "a"
        assert definition.nodes[0].educational_content.key_points == ("k",)
        assert definition.edges[0].educational_note == "note"

    def test_missing_field_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            GraphDefinition.from_dict({
                "id": "broken",
                "startNodeId": "a",
                "nodes": [{"id": "a", "type": "start"}],
                "edges": [],
            })
        assert exc_info.value.code == "VALIDATION_ERROR"
        assert "label" in exc_info.value.message

    def test_unknown_node_type_raises(self):
        with pytest.raises(ValidationError):
            GraphDefinition.from_dict({
                "id": "broken",
                "startNodeId": "a",
                "nodes": [{"id": "a", "type": "teleport", "label": "A"}],
                "edges": [],
            })

    def test_definition_is_immutable(self, hypertension_definition):
        with pytest.raises(dataclasses.FrozenInstanceError):
            hypertension_definition.start_node_id = "elsewhere"
        assert isinstance(hypertension_definition.nodes, tuple)

    def test_to_dict_includes_faq(self, hypertension_definition):
        data = hypertension_definition.to_dict()
        assert data["faq"][0]["question"].startswith("What is the first-line")
        assert len(data["nodes"]) == len(hypertension_definition.nodes)


class TestLoadGraph:
    """Tests for load_graph validation."""

    def test_hypertension_loads(self, hypertension_graph):
        assert isinstance(hypertension_graph, AlgorithmGraph)
        assert hypertension_graph.start_node.id == "start"

    def test_outcomes_are_terminal(self, hypertension_graph):
        outcomes = [n for n in hypertension_graph.nodes if n.type == NodeType.OUTCOME]
        assert outcomes
        for node in outcomes:
            assert hypertension_graph.get_outgoing_edges(node.id) == ()

    def test_stage2_offers_compelling_indications(self, hypertension_graph):
        edges = hypertension_graph.get_outgoing_edges("stage2")
        assert len(edges) >= 2
        targets = {e.target for e in edges}
        assert "diabetes_ckd" in targets
        assert "hf" in targets

    def test_every_node_reachable(self, hypertension_graph):
        assert hypertension_graph.reachable_node_ids == {n.id for n in hypertension_graph.nodes}

    def test_dangling_edge(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("o", "outcome")],
            edges=[("e1", "s", "o"), ("e2", "s", "ghost")],
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert "ghost" in exc_info.value.message

    def test_outcome_with_outgoing_edge(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("o", "outcome"), ("a", "action")],
            edges=[("e1", "s", "o"), ("e2", "o", "a")],
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert "Outcome node 'o'" in exc_info.value.message

    def test_missing_start(self, build_definition):
        definition = build_definition(
            nodes=[("q", "question"), ("o", "outcome")],
            edges=[("e1", "q", "o")],
            start="",
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert exc_info.value.message == "start_node_id is missing"

    def test_start_names_unknown_node(self, build_definition):
        definition = build_definition(
            nodes=[("q", "question"), ("o", "outcome")],
            edges=[("e1", "q", "o")],
            start="nowhere",
        )
        with pytest.raises(ValidationError):
            load_graph(definition)

    def test_start_node_wrong_type(self, build_definition):
        definition = build_definition(
            nodes=[("q", "question"), ("o", "outcome")],
            edges=[("e1", "q", "o")],
            start="q",
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert exc_info.value.message == "start_node_id 'q' names a question node, not a start node"

    def test_start_on_outcome_rejected(self, build_definition):
        definition = build_definition(nodes=[("o", "outcome")], edges=[], start="o")
        with pytest.raises(ValidationError):
            DualViewController(definition)

    def test_duplicate_ids(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("o", "outcome"), ("o", "outcome")],
            edges=[("e1", "s", "o"), ("e1", "s", "o")],
        )
        problems = find_problems(definition)
        assert "Duplicate node id 'o'" in problems
        assert "Duplicate edge id 'e1'" in problems

    def test_second_start_node(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("t", "start"), ("o", "outcome")],
            edges=[("e1", "s", "o"), ("e2", "t", "o")],
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert "'t'" in exc_info.value.message

    def test_no_nodes(self):
        definition = GraphDefinition(
            id="empty", version="1", guideline="", start_node_id="s", nodes=(), edges=()
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert "Algorithm declares no nodes" in exc_info.value.problems

    def test_all_problems_reported(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("o", "outcome")],
            edges=[("e1", "s", "x"), ("e2", "o", "s")],
        )
        with pytest.raises(ValidationError) as exc_info:
            load_graph(definition)
        assert len(exc_info.value.details["problems"]) == 2

    def test_unreachable_node_still_loads(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("o", "outcome"), ("orphan", "info")],
            edges=[("e1", "s", "o")],
        )
        graph = load_graph(definition)
        assert "orphan" not in graph.reachable_node_ids
        assert graph.has_node("orphan")


class TestGraphLookups:
    """Tests for AlgorithmGraph read-only lookups."""

    def test_outgoing_in_declaration_order(self, triage_graph):
        ids = [e.id for e in triage_graph.get_outgoing_edges("ask")]
        assert ids == ["e-ask-done", "e-ask-treat"]

    def test_unknown_ids(self, triage_graph):
        assert triage_graph.get_node("nope") is None
        assert triage_graph.get_edge("nope") is None
        assert triage_graph.get_outgoing_edges("nope") == ()
        assert not triage_graph.has_node("nope")

    def test_incoming_edges(self, triage_graph):
        ids = {e.id for e in triage_graph.get_incoming_edges("treat")}
        assert ids == {"e-ask-treat", "e-review-treat"}
