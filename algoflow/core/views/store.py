"""
Traversal Store

Single writer in front of the state machine. Every accepted operation is
followed by exactly one immutable snapshot, delivered synchronously to all
subscribers before dispatch() returns, so no subscriber can observe a
different state from another.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from algoflow.core.traversal import Operation, TraversalSnapshot, TraversalStateMachine
from algoflow.utils import algorithm_logger, InvalidTransition, NoOpTransition

Subscriber = Callable[[TraversalSnapshot], None]


class TraversalStore:
    """Owns the machine; views subscribe and only ever read snapshots."""

    def __init__(self, machine: TraversalStateMachine):
        self._machine = machine
        self._log = algorithm_logger(__name__, machine.graph.id)
        self._subscribers: List[Subscriber] = []
        self._snapshot = machine.snapshot()

    @property
    def machine(self) -> TraversalStateMachine:
        return self._machine

    @property
    def snapshot(self) -> TraversalSnapshot:
        return self._snapshot

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber, render it once, and return an unsubscribe callable."""
        self._subscribers.append(subscriber)
        subscriber(self._snapshot)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def dispatch(self, operation: Operation, argument: Optional[str] = None) -> bool:
        """
        Apply one operation.

        Returns:
            True when state changed (and was published), False when the
            operation was rejected and state is unchanged.
        """
        machine = self._machine
        try:
            if operation == Operation.ADVANCE:
                machine.advance(argument)
            elif operation == Operation.BACK:
                machine.back()
            elif operation == Operation.JUMP:
                machine.jump_to(argument)
            elif operation == Operation.RESET:
                machine.reset()
            else:
                raise ValueError(f"Operation {operation!r} cannot be dispatched")
        except InvalidTransition as exc:
            self._log.warning(exc.message)
            return False
        except NoOpTransition as exc:
            self._log.debug(f"ignored: {exc.message}")
            return False

        self._publish()
        return True

    def replace(self, machine: TraversalStateMachine) -> None:
        """Swap in a machine for a reloaded graph and publish its state."""
        self._machine = machine
        self._log = algorithm_logger(__name__, machine.graph.id)
        self._publish()

    def _publish(self) -> None:
        snapshot = self._machine.snapshot()
        self._snapshot = snapshot
        for subscriber in list(self._subscribers):
            subscriber(snapshot)
