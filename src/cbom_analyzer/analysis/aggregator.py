"""
Statistics aggregator for classified crypto assets.
"""

import logging
from typing import Dict, Iterable, List

from ..models import ClassifiedEntry, InventoryStatistics, WeaknessFinding

logger = logging.getLogger(__name__)


def _count(counter: Dict[str, int], key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


def aggregate(entries: Iterable[ClassifiedEntry]) -> InventoryStatistics:
    """
    Compute inventory statistics in a single pass.

    Only ``data`` entries are counted; file and other entries are ignored.
    Entries whose tags are all ``"unknown"`` still count toward the total
    and the ``"unknown"`` bucket of each grouping.

    Args:
        entries: Classified entries in document order

    Returns:
        InventoryStatistics; weaknesses follow input order
    """
    total = 0
    by_primitive: Dict[str, int] = {}
    by_provider: Dict[str, int] = {}
    by_vulnerability: Dict[str, int] = {}
    by_operation: Dict[str, int] = {}
    weaknesses: List[WeaknessFinding] = []

    for classified in entries:
        if not classified.is_crypto_asset:
            continue

        total += 1
        _count(by_primitive, classified.primitive)
        _count(by_provider, classified.provider)
        _count(by_vulnerability, classified.vulnerability)
        _count(by_operation, classified.operation)

        if classified.weakness is not None:
            weaknesses.append(WeaknessFinding(
                name=classified.name,
                weakness=classified.weakness,
                file=classified.entry.first_evidence_file
            ))

    logger.debug(f"Aggregated {total} crypto assets, {len(weaknesses)} weaknesses")

    return InventoryStatistics(
        total=total,
        by_primitive=by_primitive,
        by_provider=by_provider,
        by_vulnerability=by_vulnerability,
        by_operation=by_operation,
        weaknesses=weaknesses
    )
