"""
Graph Definition — Base Types

Immutable value types describing one clinical algorithm: nodes, edges,
educational content and FAQ entries. A content loader builds a
GraphDefinition once; nothing in the engine mutates it afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from algoflow.utils.exceptions import ValidationError


class NodeType(str, Enum):
    """
    Role of a node in the decision tree.

    START    – entry point, exactly one per algorithm
    QUESTION – asks the clinician to classify / answer
    DECISION – a management decision with several continuations
    ACTION   – an intervention step
    OUTCOME  – terminal recommendation, never has outgoing edges
    INFO     – informational waypoint
    """
    START    = "start"
    QUESTION = "question"
    DECISION = "decision"
    ACTION   = "action"
    OUTCOME  = "outcome"
    INFO     = "info"


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present; accepts camelCase and snake_case spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class EducationalContent:
    """Teaching material attached to a node."""
    why: str = ""
    detail: str = ""
    key_points: Tuple[str, ...] = ()
    references: Tuple[str, ...] = ()

    @property
    def has_content(self) -> bool:
        return bool(self.why or self.detail or self.key_points or self.references)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EducationalContent":
        if not data:
            return cls()
        return cls(
            why=_pick(data, "why", default=""),
            detail=_pick(data, "detail", default=""),
            key_points=tuple(_pick(data, "keyPoints", "key_points", default=())),
            references=tuple(_pick(data, "references", default=())),
        )

    def to_dict(self) -> dict:
        return {
            "why": self.why,
            "detail": self.detail,
            "key_points": list(self.key_points),
            "references": list(self.references),
        }


@dataclass(frozen=True)
class AlgorithmNode:
    """One step of the algorithm."""
    id: str
    type: NodeType
    label: str
    educational_content: EducationalContent = field(default_factory=EducationalContent)
    # Authoring hint only; layout always computes positions itself
    position: Optional[Tuple[float, float]] = None

    @property
    def is_terminal(self) -> bool:
        return self.type == NodeType.OUTCOME

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "educational_content": self.educational_content.to_dict(),
        }


@dataclass(frozen=True)
class AlgorithmEdge:
    """A declared, user-selectable transition between two nodes."""
    id: str
    source: str
    target: str
    label: str
    educational_note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "label": self.label,
            "educational_note": self.educational_note,
        }


@dataclass(frozen=True)
class FAQEntry:
    """Presentation-only question/answer pair shown next to the algorithm."""
    question: str
    answer: str

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer}


@dataclass(frozen=True)
class GraphDefinition:
    """
    Static declarative description of one clinical algorithm.

    Node and edge order is significant: layout and validation use
    declaration order to break ties.
    """
    id: str
    version: str
    guideline: str
    start_node_id: str
    nodes: Tuple[AlgorithmNode, ...]
    edges: Tuple[AlgorithmEdge, ...]
    faq: Tuple[FAQEntry, ...] = ()
    i18n_key: Optional[str] = None

    # ── Construction ──────────────────────────────────────────────────────
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphDefinition":
        """
        Build a definition from the plain-dict shape content authors use.

        Both camelCase (``startNodeId``, ``educationalContent``) and
        snake_case keys are accepted. Structural checks (dangling edges,
        terminal outcomes, ...) happen later in ``load_graph``; this only
        rejects data that cannot be turned into the value types at all.
        """
        algorithm_id = str(data.get("id", "unknown"))
        try:
            nodes = tuple(
                AlgorithmNode(
                    id=n["id"],
                    type=NodeType(n["type"]),
                    label=n["label"],
                    educational_content=EducationalContent.from_dict(
                        _pick(n, "educationalContent", "educational_content")
                    ),
                    position=_position(n.get("position")),
                )
                for n in data.get("nodes", [])
            )
            edges = tuple(
                AlgorithmEdge(
                    id=e["id"],
                    source=e["source"],
                    target=e["target"],
                    label=e.get("label", ""),
                    educational_note=_pick(e, "educationalNote", "educational_note"),
                )
                for e in data.get("edges", [])
            )
            faq = tuple(
                FAQEntry(question=f["question"], answer=f["answer"])
                for f in data.get("faq") or []
            )
        except KeyError as exc:
            raise ValidationError(
                f"Algorithm '{algorithm_id}' is missing required field {exc}",
                algorithm_id=algorithm_id,
            ) from exc
        except ValueError as exc:
            raise ValidationError(
                f"Algorithm '{algorithm_id}' has an invalid value: {exc}",
                algorithm_id=algorithm_id,
            ) from exc

        return cls(
            id=algorithm_id,
            version=str(data.get("version", "")),
            guideline=data.get("guideline", ""),
            start_node_id=_pick(data, "startNodeId", "start_node_id", default=""),
            nodes=nodes,
            edges=edges,
            faq=faq,
            i18n_key=_pick(data, "i18nKey", "i18n_key"),
        )

    # ── Serialisation ─────────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "i18n_key": self.i18n_key,
            "version": self.version,
            "guideline": self.guideline,
            "start_node_id": self.start_node_id,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "faq": [f.to_dict() for f in self.faq],
        }


def _position(raw: Optional[Dict[str, Any]]) -> Optional[Tuple[float, float]]:
    if not raw:
        return None
    return float(raw["x"]), float(raw["y"])
