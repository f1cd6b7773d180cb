"""
Data models for the CBOM analyzer.
"""

from .inventory import (
    UNKNOWN, ComponentKind, Property, HashValue, EvidenceOccurrence,
    InventoryEntry, DependencyEdge, CBOMDocument
)
from .classified import RiskTier, ClassifiedEntry
from .statistics import (
    QUANTUM_VULNERABLE, SYMMETRIC_SAFE, WeaknessFinding, InventoryStatistics
)
from .graph import GraphNode, GraphLink, DependencyGraph

__all__ = [
    "UNKNOWN",
    "ComponentKind",
    "Property",
    "HashValue",
    "EvidenceOccurrence",
    "InventoryEntry",
    "DependencyEdge",
    "CBOMDocument",
    "RiskTier",
    "ClassifiedEntry",
    "QUANTUM_VULNERABLE",
    "SYMMETRIC_SAFE",
    "WeaknessFinding",
    "InventoryStatistics",
    "GraphNode",
    "GraphLink",
    "DependencyGraph"
]
