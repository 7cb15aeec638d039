"""
Core engine: graph loading, layout, traversal, dual views and summaries.
"""
