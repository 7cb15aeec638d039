"""
Bundled algorithm registry.

Definitions are parsed once at import; the registry only hands out
immutable GraphDefinition values.
"""
from typing import Any, Dict, List, Optional

from algoflow.core.graph import GraphDefinition
from .hypertension import HYPERTENSION

ALGORITHM_REGISTRY: Dict[str, GraphDefinition] = {
    definition.id: definition
    for definition in (
        GraphDefinition.from_dict(HYPERTENSION),
    )
}


def get_definition(algorithm_id: str) -> Optional[GraphDefinition]:
    return ALGORITHM_REGISTRY.get(algorithm_id)


def list_algorithms() -> List[Dict[str, Any]]:
    """Short listing for menus."""
    return [
        {
            "id": d.id,
            "version": d.version,
            "guideline": d.guideline,
            "i18n_key": d.i18n_key,
            "node_count": len(d.nodes),
        }
        for d in ALGORITHM_REGISTRY.values()
    ]


__all__ = ["ALGORITHM_REGISTRY", "get_definition", "list_algorithms", "HYPERTENSION"]
