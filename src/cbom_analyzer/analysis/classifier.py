"""
Component classifier: derives tags and a risk tier for each inventory entry.
"""

from typing import Iterable, List

from ..models import (
    UNKNOWN, QUANTUM_VULNERABLE, SYMMETRIC_SAFE,
    ComponentKind, InventoryEntry, ClassifiedEntry, RiskTier
)

DEFAULT_VULNERABILITY_KEY = "pqm.vulnerability"
WEAKNESS_PROPERTY = "weaknesses"


def risk_tier(kind: ComponentKind, vulnerability: str) -> RiskTier:
    """
    Map a component kind and vulnerability classification onto a tier.

    File entries are always BLUE. Data entries are RED when quantum
    vulnerable, GREEN when symmetric safe and GRAY otherwise. Any other
    kind is GRAY.
    """
    if kind is ComponentKind.FILE:
        return RiskTier.BLUE
    if kind is ComponentKind.DATA:
        if vulnerability == QUANTUM_VULNERABLE:
            return RiskTier.RED
        if vulnerability == SYMMETRIC_SAFE:
            return RiskTier.GREEN
    return RiskTier.GRAY


def classify(entry: InventoryEntry, vulnerability_key: str = DEFAULT_VULNERABILITY_KEY) -> ClassifiedEntry:
    """
    Classify one inventory entry.

    Args:
        entry: Entry to classify
        vulnerability_key: Property carrying the vulnerability classification

    Returns:
        ClassifiedEntry with every missing or empty tag set to ``"unknown"``
    """
    props = entry.property_map()

    vulnerability = props.get(vulnerability_key) or UNKNOWN
    weakness = props.get(WEAKNESS_PROPERTY)

    return ClassifiedEntry(
        entry=entry,
        primitive=props.get("primitive") or UNKNOWN,
        provider=props.get("provider") or UNKNOWN,
        vulnerability=vulnerability,
        operation=props.get("operation") or UNKNOWN,
        tier=risk_tier(entry.kind, vulnerability),
        weakness=weakness if weakness and weakness.strip() else None,
        vulnerability_key=vulnerability_key
    )


def classify_all(
    entries: Iterable[InventoryEntry],
    vulnerability_key: str = DEFAULT_VULNERABILITY_KEY
) -> List[ClassifiedEntry]:
    """Classify entries, preserving their order."""
    return [classify(entry, vulnerability_key) for entry in entries]
