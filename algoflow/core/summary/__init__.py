"""
Summary/Export Module

Usage:
    from algoflow.core.summary import build_summary, SummaryExporter

    summary = build_summary(definition, snapshot.path, snapshot.current_node_id)
    document = await SummaryExporter(controller, generator).export()
"""
from .builder import SummaryStep, OutcomeContent, DecisionSummary, build_summary
from .exporter import DocumentGenerator, SummaryExporter

__all__ = [
    "SummaryStep",
    "OutcomeContent",
    "DecisionSummary",
    "build_summary",
    "DocumentGenerator",
    "SummaryExporter",
]
