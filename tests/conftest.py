"""
Pytest Configuration and Fixtures

Shared fixtures for clinical algorithm engine tests.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from algoflow.core.graph import GraphDefinition, load_graph
from algoflow.core.views import DualViewController
from algoflow.data import HYPERTENSION


def make_definition(
    nodes: List[tuple],
    edges: List[tuple],
    start: Optional[str] = None,
    algorithm_id: str = "test-algo",
) -> GraphDefinition:
    """
    Build a definition from (id, type[, label]) and (id, source, target[, label]) tuples.
    """
    raw: Dict[str, Any] = {
        "id": algorithm_id,
        "version": "0.1",
        "guideline": "Test Guideline",
        "startNodeId": start if start is not None else nodes[0][0],
        "nodes": [
            {"id": n[0], "type": n[1], "label": n[2] if len(n) > 2 else n[0].title()}
            for n in nodes
        ],
        "edges": [
            {"id": e[0], "source": e[1], "target": e[2], "label": e[3] if len(e) > 3 else e[0]}
            for e in edges
        ],
    }
    return GraphDefinition.from_dict(raw)


@pytest.fixture
def build_definition():
    """Factory for ad-hoc definitions; see make_definition."""
    return make_definition


@pytest.fixture
def hypertension_definition() -> GraphDefinition:
    """Bundled hypertension algorithm."""
    return GraphDefinition.from_dict(HYPERTENSION)


@pytest.fixture
def hypertension_graph(hypertension_definition):
    return load_graph(hypertension_definition)


@pytest.fixture
def triage_definition() -> GraphDefinition:
    """
    Small graph with a branch, a shared target and a cycle:

        start -> ask -> (done | treat)
        treat -> review -> (done | treat)
    """
    return make_definition(
        nodes=[
            ("start", "start"),
            ("ask", "question"),
            ("treat", "action"),
            ("review", "question"),
            ("done", "outcome"),
        ],
        edges=[
            ("e-start-ask", "start", "ask", "Begin"),
            ("e-ask-done", "ask", "done", "Fine"),
            ("e-ask-treat", "ask", "treat", "Unwell"),
            ("e-treat-review", "treat", "review", "Review"),
            ("e-review-done", "review", "done", "Better"),
            ("e-review-treat", "review", "treat", "Worse"),
        ],
    )


@pytest.fixture
def triage_graph(triage_definition):
    return load_graph(triage_definition)


@pytest.fixture
def controller(hypertension_definition) -> DualViewController:
    return DualViewController(hypertension_definition)


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir
