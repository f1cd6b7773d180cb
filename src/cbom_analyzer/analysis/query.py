"""
Pure query functions used by presentation layers.

Selection state (current node, active filter) is held by the caller;
nothing here keeps state between calls.
"""

from typing import Iterable, List, Optional, Tuple

from ..models import (
    ClassifiedEntry, ComponentKind, DependencyGraph, GraphNode,
    InventoryEntry, InventoryStatistics
)

ALL = "all"
IMPACT_PROPERTY = "impact.outbound.count"


def filter_by_primitive(entries: Iterable[ClassifiedEntry], category: str = ALL) -> List[ClassifiedEntry]:
    """
    Filter classified entries by primitive.

    Args:
        entries: Classified entries
        category: ``ALL`` or a primitive name matched exactly and case-sensitively

    Returns:
        Matching entries in their original order
    """
    if category == ALL:
        return list(entries)
    return [e for e in entries if e.primitive == category]


def lookup(graph: DependencyGraph, node_id: str) -> Optional[GraphNode]:
    """Find a node by exact id; None means nothing is selected."""
    return graph.node_index.get(node_id)


def primitive_categories(statistics: InventoryStatistics) -> List[str]:
    """Filter choices: ``ALL`` then each primitive seen in the inventory."""
    return [ALL] + list(statistics.by_primitive)


def file_impacts(entries: Iterable[InventoryEntry]) -> List[Tuple[InventoryEntry, str]]:
    """
    Pair each file entry with its outbound impact count.

    The first ``impact.outbound.count`` property is used verbatim;
    ``"0"`` when it is missing or empty.
    """
    return [
        (entry, entry.first_property(IMPACT_PROPERTY) or "0")
        for entry in entries
        if entry.kind is ComponentKind.FILE
    ]
