"""
Dependency graph relating files to the crypto assets they use.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List

from .inventory import InventoryEntry, ComponentKind
from .classified import RiskTier


@dataclass(frozen=True)
class GraphNode:
    """A graph node; ``entry`` is kept for detail lookup."""

    id: str
    name: str
    kind: ComponentKind
    tier: RiskTier
    entry: InventoryEntry

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "tier": self.tier.value
        }


@dataclass(frozen=True)
class GraphLink:
    """A directed link; ``value`` is a constant rendering hint, not a weight."""

    source: str
    target: str
    value: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "value": self.value}


@dataclass(frozen=True)
class DependencyGraph:
    """
    Nodes and links built from one CBOM document.

    Parallel links are kept. ``dropped_links`` counts declared
    (source, target) pairs that referenced an unknown identifier.
    """

    nodes: List[GraphNode] = field(default_factory=list)
    links: List[GraphLink] = field(default_factory=list)
    dropped_links: int = 0

    @property
    def node_index(self) -> Dict[str, GraphNode]:
        """Identifier to node; with duplicate identifiers the last node wins."""
        return {node.id: node for node in self.nodes}

    def outgoing(self, node_id: str) -> List[GraphLink]:
        return [link for link in self.links if link.source == node_id]

    def incoming(self, node_id: str) -> List[GraphLink]:
        return [link for link in self.links if link.target == node_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [link.to_dict() for link in self.links],
            "dropped_links": self.dropped_links
        }
