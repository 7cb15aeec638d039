"""
Graph Definition & Validator

Usage:
    from algoflow.core.graph import GraphDefinition, load_graph

    graph = load_graph(GraphDefinition.from_dict(raw))
    graph.get_outgoing_edges(graph.start_node_id)
"""
from .base import (
    NodeType,
    EducationalContent,
    AlgorithmNode,
    AlgorithmEdge,
    FAQEntry,
    GraphDefinition,
)
from .loader import AlgorithmGraph, load_graph, find_problems

__all__ = [
    "NodeType",
    "EducationalContent",
    "AlgorithmNode",
    "AlgorithmEdge",
    "FAQEntry",
    "GraphDefinition",
    "AlgorithmGraph",
    "load_graph",
    "find_problems",
]
