"""
Aggregate statistics for a cryptographic inventory.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List

QUANTUM_VULNERABLE = "quantum-vulnerable"
SYMMETRIC_SAFE = "symmetric-safe"

GROUPINGS = ("primitive", "provider", "vulnerability", "operation")


@dataclass(frozen=True)
class WeaknessFinding:
    """A crypto asset flagged with a weakness, located by its first evidence file."""

    name: str
    weakness: str
    file: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "weakness": self.weakness, "file": self.file}


@dataclass(frozen=True)
class InventoryStatistics:
    """
    Counts over the ``data`` entries of one document.

    Grouping dictionaries keep keys in first-seen order.
    """

    total: int = 0
    by_primitive: Dict[str, int] = field(default_factory=dict)
    by_provider: Dict[str, int] = field(default_factory=dict)
    by_vulnerability: Dict[str, int] = field(default_factory=dict)
    by_operation: Dict[str, int] = field(default_factory=dict)
    weaknesses: List[WeaknessFinding] = field(default_factory=list)

    @property
    def quantum_vulnerable(self) -> int:
        return self.by_vulnerability.get(QUANTUM_VULNERABLE, 0)

    @property
    def symmetric_safe(self) -> int:
        return self.by_vulnerability.get(SYMMETRIC_SAFE, 0)

    def grouping(self, name: str) -> Dict[str, int]:
        """
        Look up a grouping by name.

        Args:
            name: One of ``primitive``, ``provider``, ``vulnerability``, ``operation``

        Raises:
            KeyError: For any other name
        """
        if name not in GROUPINGS:
            raise KeyError(name)
        return getattr(self, f"by_{name}")

    def share(self, grouping: str, key: str) -> float:
        """Percentage of ``total`` that falls in ``key`` of ``grouping``."""
        if self.total == 0:
            return 0.0
        return self.grouping(grouping).get(key, 0) / self.total * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_primitive": dict(self.by_primitive),
            "by_provider": dict(self.by_provider),
            "by_vulnerability": dict(self.by_vulnerability),
            "by_operation": dict(self.by_operation),
            "weaknesses": [w.to_dict() for w in self.weaknesses]
        }
