"""
Summary Export

Hands a finished traversal's DecisionSummary to a document generator.
Generation runs off the event loop and fails independently: an export
error never touches traversal state.
"""
from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

from algoflow.utils import get_logger, ExportError
from .builder import DecisionSummary

if TYPE_CHECKING:
    from algoflow.core.views import DualViewController

logger = get_logger(__name__)


class DocumentGenerator(ABC):
    """Anything that turns a DecisionSummary into a document."""

    name: str = "document"

    @abstractmethod
    def generate(self, summary: DecisionSummary) -> Any:
        """Produce the document. Called in a worker thread."""


class SummaryExporter:
    """Export + Retry actions shown once the traversal reaches an outcome."""

    def __init__(self, controller: "DualViewController", generator: DocumentGenerator):
        self._controller = controller
        self._generator = generator

    async def export(self) -> Any:
        """
        Build the summary from the controller's current state and generate
        the document.

        Raises:
            SummaryError: traversal is not at an outcome node.
            ExportError: the generator failed.
        """
        summary = self._controller.summary()
        try:
            document = await asyncio.to_thread(self._generator.generate, summary)
        except Exception as exc:
            logger.error(
                f"Export of '{summary.algorithm_id}' via {self._generator.name} failed: {exc}",
                exc_info=True
            )
            raise ExportError(
                f"Document generation failed: {exc}",
                generator=self._generator.name,
                details={"algorithm_id": summary.algorithm_id},
            ) from exc

        logger.info(f"Exported '{summary.algorithm_id}' summary via {self._generator.name}")
        return document

    def retry(self) -> bool:
        """Start over from the first node."""
        return self._controller.reset()
