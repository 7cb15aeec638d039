"""
Traversal State Machine

Usage:
    from algoflow.core.traversal import TraversalStateMachine

    machine = TraversalStateMachine(graph)
    machine.advance("e-start-cat")
    machine.back()
"""
from .machine import Operation, PathEntry, TraversalSnapshot, TraversalStateMachine

__all__ = [
    "Operation",
    "PathEntry",
    "TraversalSnapshot",
    "TraversalStateMachine",
]
