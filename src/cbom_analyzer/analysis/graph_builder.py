"""
Graph builder: one node per component, one link per resolvable dependency.
"""

import logging
from typing import Dict, Iterable, List

from ..models import (
    InventoryEntry, DependencyEdge, GraphNode, GraphLink, DependencyGraph
)
from .classifier import classify, DEFAULT_VULNERABILITY_KEY

logger = logging.getLogger(__name__)


def build(
    entries: Iterable[InventoryEntry],
    edges: Iterable[DependencyEdge],
    vulnerability_key: str = DEFAULT_VULNERABILITY_KEY
) -> DependencyGraph:
    """
    Build the dependency graph for a document.

    Every entry becomes a node. A link is emitted for each (source, target)
    pair of each edge when both ids resolve to nodes; other pairs are
    dropped. Cycles and parallel links are kept as declared.

    Args:
        entries: Inventory entries
        edges: Declared dependency edges
        vulnerability_key: Property carrying the vulnerability classification

    Returns:
        DependencyGraph
    """
    nodes: List[GraphNode] = []
    index: Dict[str, GraphNode] = {}

    for entry in entries:
        node = GraphNode(
            id=entry.identifier,
            name=entry.name,
            kind=entry.kind,
            tier=classify(entry, vulnerability_key).tier,
            entry=entry
        )
        nodes.append(node)
        index[node.id] = node

    links: List[GraphLink] = []
    dropped = 0

    for edge in edges:
        if edge.ref not in index:
            dropped += len(edge.depends_on)
            continue
        for target in edge.depends_on:
            if target in index:
                links.append(GraphLink(source=edge.ref, target=target))
            else:
                dropped += 1

    if dropped:
        logger.debug(f"Dropped {dropped} dependency links with unknown endpoints")

    return DependencyGraph(nodes=nodes, links=links, dropped_links=dropped)
