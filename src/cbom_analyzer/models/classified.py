"""
Classification results for inventory entries.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
from enum import Enum

from .inventory import InventoryEntry, ComponentKind

# Tag properties shown in the asset header rather than among the details
TAG_PROPERTIES = ("primitive", "provider")


class RiskTier(Enum):
    """Abstract display tier; concrete colors belong to the presentation layer."""
    RED = "red"
    GREEN = "green"
    GRAY = "gray"
    BLUE = "blue"


@dataclass(frozen=True)
class ClassifiedEntry:
    """An inventory entry with its derived tags and risk tier."""

    entry: InventoryEntry
    primitive: str
    provider: str
    vulnerability: str
    operation: str
    tier: RiskTier
    weakness: Optional[str] = None
    vulnerability_key: str = "pqm.vulnerability"

    @property
    def identifier(self) -> str:
        return self.entry.identifier

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def kind(self) -> ComponentKind:
        return self.entry.kind

    @property
    def is_crypto_asset(self) -> bool:
        return self.entry.kind is ComponentKind.DATA

    def detail_properties(self) -> Dict[str, str]:
        """Flattened properties other than the tag properties."""
        hidden = set(TAG_PROPERTIES) | {self.vulnerability_key}
        return {k: v for k, v in self.entry.property_map().items() if k not in hidden}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "name": self.name,
            "type": self.kind.value,
            "primitive": self.primitive,
            "provider": self.provider,
            "vulnerability": self.vulnerability,
            "operation": self.operation,
            "tier": self.tier.value,
            "weakness": self.weakness,
            "occurrences": [o.to_dict() for o in self.entry.occurrences]
        }
