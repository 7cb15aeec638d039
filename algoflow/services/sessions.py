"""
Session Service

One DualViewController per interactive session, kept in memory. Sessions
are created from the algorithm registry. Once the configured limit is
reached the least recently used session is evicted.
"""
from collections import OrderedDict
from datetime import datetime
from typing import Callable, Optional
import uuid

from algoflow.config import settings
from algoflow.core.graph import GraphDefinition
from algoflow.core.layout import LayoutConfig
from algoflow.core.views import DualViewController
from algoflow.utils import algorithm_logger, get_logger

logger = get_logger(__name__)


class Session:
    """A controller plus bookkeeping."""

    def __init__(self, session_id: str, controller: DualViewController):
        self.session_id = session_id
        self.controller = controller
        self.created_at = datetime.now()

    def to_dict(self) -> dict:
        state = self.controller.state_dict()
        state["session_id"] = self.session_id
        state["created_at"] = self.created_at.isoformat()
        return state


class SessionManager:
    """In-memory session store (replace with shared storage for multi-process deployments)."""

    def __init__(
        self,
        lookup: Callable[[str], Optional[GraphDefinition]],
        max_sessions: Optional[int] = None,
        layout_config: Optional[LayoutConfig] = None,
    ):
        self._lookup = lookup
        self._max_sessions = max_sessions or settings.max_sessions
        self._layout_config = layout_config
        self._sessions: "OrderedDict[str, Session]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, algorithm_id: str) -> Optional[Session]:
        """
        Start a session on a registered algorithm.

        Returns:
            The new session, or None when the algorithm is unknown.

        Raises:
            ValidationError: the registered definition is malformed.
        """
        definition = self._lookup(algorithm_id)
        if definition is None:
            logger.warning(f"Session requested for unknown algorithm '{algorithm_id}'")
            return None

        controller = DualViewController(definition, layout_config=self._layout_config)
        session = Session(uuid.uuid4().hex, controller)

        while len(self._sessions) >= self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Session limit {self._max_sessions} reached, evicted idle session {evicted_id}")

        self._sessions[session.session_id] = session
        algorithm_logger(__name__, algorithm_id, session.session_id).info("Session started")
        return session

    def get(self, session_id: str) -> Optional[Session]:
        """Look up a session and mark it as most recently used."""
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def delete(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        algorithm_logger(__name__, session.controller.definition.id, session_id).info("Session closed")
        return True

    def clear(self) -> None:
        self._sessions.clear()
