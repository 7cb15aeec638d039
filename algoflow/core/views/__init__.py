"""
Dual View Controller

Usage:
    from algoflow.core.views import DualViewController

    controller = DualViewController(definition)
    controller.advance("e-start-cat")
    controller.graph_view.select_node("start")   # rewinds the wizard too
    assert controller.is_consistent()
"""
from .store import TraversalStore
from .graph_view import GraphView
from .wizard_view import WizardView, Choice, Breadcrumb
from .controller import DualViewController

__all__ = [
    "TraversalStore",
    "GraphView",
    "WizardView",
    "Choice",
    "Breadcrumb",
    "DualViewController",
]
