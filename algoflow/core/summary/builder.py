"""
Decision Summary Builder

Compiles a finished traversal into a structured document model: one step
per path entry (node, choice, optional edge note) followed by the outcome
node's full educational content. The model is handed to a document
generator; nothing here produces bytes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from algoflow.core.graph import GraphDefinition, NodeType
from algoflow.core.traversal import PathEntry
from algoflow.utils import get_logger, SummaryError

logger = get_logger(__name__)


@dataclass(frozen=True)
class SummaryStep:
    """One decision on the path."""
    step: int                      # 1-based
    node_id: str
    node_label: str
    choice: str                    # label of the edge taken
    note: Optional[str] = None     # edge educational note
    node_why: str = ""

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "node_id": self.node_id,
            "node_label": self.node_label,
            "choice": self.choice,
            "note": self.note,
            "node_why": self.node_why,
        }


@dataclass(frozen=True)
class OutcomeContent:
    """The terminal recommendation."""
    node_id: str
    label: str
    why: str = ""
    detail: str = ""
    key_points: Tuple[str, ...] = ()
    references: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "node_id": self.node_id,
            "label": self.label,
            "why": self.why,
            "detail": self.detail,
            "key_points": list(self.key_points),
            "references": list(self.references),
        }


@dataclass(frozen=True)
class DecisionSummary:
    """Structured decision summary for an external document generator."""
    algorithm_id: str
    version: str
    guideline: str
    steps: Tuple[SummaryStep, ...]
    outcome: OutcomeContent

    @property
    def title(self) -> str:
        return f"{self.guideline} — Algorithm" if self.guideline else self.algorithm_id

    def to_dict(self) -> dict:
        return {
            "algorithm_id": self.algorithm_id,
            "version": self.version,
            "guideline": self.guideline,
            "title": self.title,
            "step_count": len(self.steps),
            "steps": [s.to_dict() for s in self.steps],
            "outcome": self.outcome.to_dict(),
        }


def build_summary(
    definition: GraphDefinition,
    path: Sequence[PathEntry],
    current_node_id: str,
) -> DecisionSummary:
    """
    Assemble the decision summary for a traversal that ended at an outcome.

    Raises:
        SummaryError: the current node is unknown or not an outcome, or the
            path references nodes/edges missing from the definition.
    """
    nodes = {n.id: n for n in definition.nodes}
    edges = {e.id: e for e in definition.edges}

    terminal = nodes.get(current_node_id)
    if terminal is None or terminal.type != NodeType.OUTCOME:
        raise SummaryError(
            f"Summary requires an outcome node; current node is '{current_node_id}'",
            current_node_id=current_node_id,
        )

    steps = []
    for number, entry in enumerate(path, start=1):
        node = nodes.get(entry.node_id)
        edge = edges.get(entry.edge_id)
        if node is None or edge is None:
            raise SummaryError(
                f"Path step {number} references unknown node '{entry.node_id}' "
                f"or edge '{entry.edge_id}'",
                current_node_id=current_node_id,
                details={"step": number},
            )
        steps.append(SummaryStep(
            step=number,
            node_id=node.id,
            node_label=node.label,
            choice=entry.edge_label,
            note=edge.educational_note,
            node_why=node.educational_content.why,
        ))

    edu = terminal.educational_content
    summary = DecisionSummary(
        algorithm_id=definition.id,
        version=definition.version,
        guideline=definition.guideline,
        steps=tuple(steps),
        outcome=OutcomeContent(
            node_id=terminal.id,
            label=terminal.label,
            why=edu.why,
            detail=edu.detail,
            key_points=edu.key_points,
            references=edu.references,
        ),
    )
    logger.info(
        f"Decision summary for '{definition.id}': {len(steps)} step(s) -> '{terminal.label}'"
    )
    return summary
