"""
Report Generation Module

Generates downloadable PDF summaries of a finished decision path.
"""
from .summary_pdf import SummaryPDFGenerator, SummaryReport

__all__ = [
    "SummaryPDFGenerator",
    "SummaryReport",
]
