"""
Analysis session: holds the snapshot derived from the current CBOM document.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .analysis import (
    ALL, DEFAULT_VULNERABILITY_KEY, aggregate, build, classify_all,
    filter_by_primitive, lookup, file_impacts
)
from .loader import load, load_file
from .models import (
    CBOMDocument, ClassifiedEntry, DependencyGraph, GraphNode, InventoryEntry,
    InventoryStatistics
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisSnapshot:
    """A document together with everything derived from it."""

    document: CBOMDocument
    classified: List[ClassifiedEntry]
    statistics: InventoryStatistics
    graph: DependencyGraph
    source: Optional[str] = None
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_document(
        cls,
        document: CBOMDocument,
        vulnerability_key: str = DEFAULT_VULNERABILITY_KEY,
        source: Optional[str] = None
    ) -> 'AnalysisSnapshot':
        """Derive classification, statistics and graph from ``document``."""
        classified = classify_all(document.entries, vulnerability_key)
        return cls(
            document=document,
            classified=classified,
            statistics=aggregate(classified),
            graph=build(document.entries, document.edges, vulnerability_key),
            source=source
        )

    @property
    def crypto_assets(self) -> List[ClassifiedEntry]:
        """Classified ``data`` entries in document order."""
        return [c for c in self.classified if c.is_crypto_asset]

    def filter_crypto(self, category: str = ALL) -> List[ClassifiedEntry]:
        return filter_by_primitive(self.crypto_assets, category)

    def file_impacts(self) -> List[Tuple[InventoryEntry, str]]:
        return file_impacts(self.document.entries)

    def lookup(self, node_id: str) -> Optional[GraphNode]:
        return lookup(self.graph, node_id)

    def classified_for(self, node_id: str) -> Optional[ClassifiedEntry]:
        """Classified entry for ``node_id``, resolving duplicates like ``lookup``."""
        match = None
        for classified in self.classified:
            if classified.identifier == node_id:
                match = classified
        return match


class AnalysisSession:
    """
    Keeps the current snapshot for a presentation layer.

    A new document is fully analyzed before it replaces the current
    snapshot, so statistics and graph always come from the same document.
    If loading fails the previous snapshot stays current.
    """

    def __init__(self, vulnerability_key: str = DEFAULT_VULNERABILITY_KEY):
        self.vulnerability_key = vulnerability_key
        self._snapshot: Optional[AnalysisSnapshot] = None

    @property
    def snapshot(self) -> Optional[AnalysisSnapshot]:
        return self._snapshot

    @property
    def has_document(self) -> bool:
        return self._snapshot is not None

    def load(self, raw_text: Union[str, bytes], source: Optional[str] = None) -> AnalysisSnapshot:
        """
        Parse and analyze a document, then make it current.

        Raises:
            ParseError: If the text is not valid JSON; the current snapshot is kept
        """
        return self._commit(load(raw_text, source=source), source)

    def load_file(self, path: Union[str, Path]) -> AnalysisSnapshot:
        """
        Read, parse and analyze a CBOM file, then make it current.

        Raises:
            DocumentLoadError: If the file cannot be read
            ParseError: If the file is not valid JSON
        """
        return self._commit(load_file(path), str(path))

    def _commit(self, document: CBOMDocument, source: Optional[str]) -> AnalysisSnapshot:
        snapshot = AnalysisSnapshot.from_document(document, self.vulnerability_key, source)
        self._snapshot = snapshot
        logger.info(
            f"Analyzed {snapshot.statistics.total} crypto assets, "
            f"{len(snapshot.graph.nodes)} nodes, {len(snapshot.graph.links)} links"
        )
        return snapshot

    def clear(self) -> None:
        self._snapshot = None
