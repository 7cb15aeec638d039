"""
Unit Tests for Summary/Export

Tests for the decision summary model and the export/retry actions.
"""
import pytest

from algoflow.core.summary import (
    DecisionSummary, DocumentGenerator, SummaryExporter, build_summary
)
from algoflow.core.traversal import PathEntry
from algoflow.utils import SummaryError, ExportError


COMPELLING_ROUTE = ["e-start-cat", "e-cat-stage2", "e-s2-hf"]


class RecordingGenerator(DocumentGenerator):
    name = "recording"

    def __init__(self):
        self.received = []

    def generate(self, summary):
        self.received.append(summary)
        return {"pages": 1, "algorithm_id": summary.algorithm_id}


class FailingGenerator(DocumentGenerator):
    name = "failing"

    def generate(self, summary):
        raise IOError("disk full")


@pytest.fixture
def finished(controller):
    for edge_id in COMPELLING_ROUTE:
        controller.advance(edge_id)
    return controller


class TestBuildSummary:

    def test_hypertension_scenario(self, finished):
        """Measure -> classify -> Stage 2 -> compelling indication -> outcome."""
        stage2_choices = finished.graph.get_outgoing_edges("stage2")
        assert len(stage2_choices) >= 2

        summary = finished.summary()
        assert isinstance(summary, DecisionSummary)
        assert [s.step for s in summary.steps] == [1, 2, 3]
        assert [s.node_label for s in summary.steps] == [
            "Measure Blood Pressure",
            "What is the BP category?",
            "Stage 2 HTN — Start Medication + Lifestyle",
        ]
        assert [s.choice for s in summary.steps] == [
            "Classify", "Stage 2 (>=140/90)", "Heart Failure"
        ]
        assert summary.steps[0].note.startswith("Classification")
        assert summary.steps[1].note is None
        assert summary.steps[2].node_why.startswith("Stage 2 hypertension")

        outcome = summary.outcome
        assert outcome.node_id == "hf"
        assert outcome.label == "ACEi/ARB + Beta-Blocker + Diuretic"
        assert outcome.why
        assert outcome.detail
        assert len(outcome.key_points) == 5

    def test_header_fields(self, finished):
        summary = finished.summary()
        assert summary.algorithm_id == "hypertension-mgmt"
        assert summary.version == "1.0"
        assert summary.title == "ACC/AHA 2017 — Algorithm"

    def test_to_dict(self, finished):
        data = finished.summary().to_dict()
        assert data["step_count"] == 3
        assert data["steps"][2]["choice"] == "Heart Failure"
        assert data["outcome"]["key_points"][0].startswith("ACEi/ARB")

    def test_not_terminal_raises(self, controller):
        controller.advance("e-start-cat")
        with pytest.raises(SummaryError) as exc_info:
            controller.summary()
        assert exc_info.value.code == "SUMMARY_ERROR"

    def test_path_with_unknown_edge_raises(self, hypertension_definition):
        path = (PathEntry("start", "e-nope", "??"),)
        with pytest.raises(SummaryError):
            build_summary(hypertension_definition, path, "hf")

    def test_outcome_without_steps(self, build_definition):
        definition = build_definition(
            nodes=[("s", "start"), ("o", "outcome")], edges=[("e", "s", "o")]
        )
        summary = build_summary(definition, (), "o")
        assert summary.steps == ()
        assert summary.outcome.node_id == "o"


@pytest.mark.asyncio
class TestSummaryExporter:

    async def test_export_hands_summary_to_generator(self, finished):
        generator = RecordingGenerator()
        document = await SummaryExporter(finished, generator).export()
        assert document == {"pages": 1, "algorithm_id": "hypertension-mgmt"}
        assert generator.received[0].outcome.node_id == "hf"

    async def test_export_before_outcome_raises(self, controller):
        with pytest.raises(SummaryError):
            await SummaryExporter(controller, RecordingGenerator()).export()

    async def test_generator_failure_wrapped(self, finished):
        before = finished.snapshot
        with pytest.raises(ExportError) as exc_info:
            await SummaryExporter(finished, FailingGenerator()).export()
        assert exc_info.value.details["generator"] == "failing"
        assert finished.snapshot == before
        assert finished.current_node_id == "hf"

    async def test_retry_returns_to_start(self, finished):
        exporter = SummaryExporter(finished, RecordingGenerator())
        assert exporter.retry()
        assert finished.current_node_id == "start"
        assert finished.is_consistent()
