"""
Clinical Algorithm Engine

Interactive guideline decision trees: graph model, traversal state machine,
layered auto-layout, synchronized graph/wizard views and decision summaries.
"""

__version__ = "1.0.0"
