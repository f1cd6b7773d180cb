"""
Inventory data model for CBOM documents.

The ``from_dict`` constructors are deliberately forgiving: a CBOM is an
untrusted document and every field except the JSON syntax itself is
optional. Values of the wrong shape are treated as absent.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from enum import Enum
import logging

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


class ComponentKind(Enum):
    """Kinds of CBOM components."""
    FILE = "file"
    DATA = "data"
    OTHER = "other"

    @classmethod
    def from_type(cls, raw_type: Any) -> 'ComponentKind':
        """Map a raw CycloneDX ``type`` value onto a kind; anything unrecognized is OTHER."""
        if raw_type == cls.FILE.value:
            return cls.FILE
        if raw_type == cls.DATA.value:
            return cls.DATA
        return cls.OTHER


def _as_text(value: Any) -> Optional[str]:
    """Scalar JSON values as text; containers and null are treated as absent."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


@dataclass(frozen=True)
class Property:
    """A single name/value property of a component."""

    name: str
    value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Property']:
        if not isinstance(data, dict):
            return None
        name = _as_text(data.get("name"))
        if name is None:
            return None
        return cls(name=name, value=_as_text(data.get("value")) or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class HashValue:
    """A content hash attached to a component."""

    content: str
    alg: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional['HashValue']:
        if not isinstance(data, dict):
            return None
        content = _as_text(data.get("content"))
        if content is None:
            return None
        return cls(content=content, alg=_as_text(data.get("alg")))

    def to_dict(self) -> Dict[str, Any]:
        return {"alg": self.alg, "content": self.content}


@dataclass(frozen=True)
class EvidenceOccurrence:
    """A source location substantiating a component."""

    file: Optional[str] = None
    line: Optional[int] = None
    snippet: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional['EvidenceOccurrence']:
        if not isinstance(data, dict):
            return None

        line = data.get("line")
        if isinstance(line, bool) or not isinstance(line, (int, float)):
            line = None
        else:
            line = int(line)

        return cls(
            file=_as_text(data.get("file")),
            line=line,
            snippet=_as_text(data.get("snippet"))
        )

    @property
    def location(self) -> str:
        """``file:line`` label for display."""
        file_label = self.file or UNKNOWN
        return f"{file_label}:{self.line}" if self.line is not None else file_label

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "line": self.line, "snippet": self.snippet}


@dataclass(frozen=True)
class InventoryEntry:
    """
    A CBOM component: a source file, a cryptographic asset or something else.

    ``properties`` keeps the document order and may repeat names;
    ``property_map()`` gives the flattened view where the last occurrence
    of a name wins.
    """

    identifier: str
    name: str
    kind: ComponentKind
    raw_type: str = ""
    properties: List[Property] = field(default_factory=list)
    hashes: List[HashValue] = field(default_factory=list)
    occurrences: List[EvidenceOccurrence] = field(default_factory=list)

    def property_map(self) -> Dict[str, str]:
        """
        Flatten properties into a mapping.

        Returns:
            Property name to value, last occurrence winning
        """
        flattened: Dict[str, str] = {}
        for prop in self.properties:
            flattened[prop.name] = prop.value
        return flattened

    def first_property(self, name: str) -> Optional[str]:
        """Value of the first property called ``name``, or None."""
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return None

    @property
    def first_evidence_file(self) -> str:
        """File path of the first evidence occurrence, or ``"unknown"``."""
        if self.occurrences and self.occurrences[0].file is not None:
            return self.occurrences[0].file
        return UNKNOWN

    @property
    def primary_hash(self) -> Optional[str]:
        """Content of the first hash, if any."""
        if self.hashes and self.hashes[0].content:
            return self.hashes[0].content
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InventoryEntry':
        """
        Create an entry from a CBOM component object.

        Args:
            data: Component dictionary

        Returns:
            InventoryEntry instance
        """
        identifier = _as_text(data.get("bom-ref"))
        if not identifier:
            logger.warning(f"Component {data.get('name')!r} has no bom-ref; it cannot take part in dependencies")
            identifier = ""

        raw_type = _as_text(data.get("type")) or ""

        evidence = data.get("evidence")
        raw_occurrences = evidence.get("occurrences") if isinstance(evidence, dict) else None

        properties = [Property.from_dict(p) for p in _as_list(data.get("properties"))]
        hashes = [HashValue.from_dict(h) for h in _as_list(data.get("hashes"))]
        occurrences = [EvidenceOccurrence.from_dict(o) for o in _as_list(raw_occurrences)]

        return cls(
            identifier=identifier,
            name=_as_text(data.get("name")) or "",
            kind=ComponentKind.from_type(raw_type),
            raw_type=raw_type,
            properties=[p for p in properties if p is not None],
            hashes=[h for h in hashes if h is not None],
            occurrences=[o for o in occurrences if o is not None]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bom-ref": self.identifier,
            "name": self.name,
            "type": self.raw_type or self.kind.value,
            "properties": [p.to_dict() for p in self.properties],
            "hashes": [h.to_dict() for h in self.hashes],
            "evidence": {"occurrences": [o.to_dict() for o in self.occurrences]}
        }


@dataclass(frozen=True)
class DependencyEdge:
    """A declared dependency: ``ref`` depends on every id in ``depends_on``."""

    ref: str
    depends_on: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional['DependencyEdge']:
        if not isinstance(data, dict):
            return None
        ref = _as_text(data.get("ref"))
        if ref is None:
            return None
        targets = [_as_text(t) for t in _as_list(data.get("dependsOn"))]
        return cls(ref=ref, depends_on=[t for t in targets if t is not None])


@dataclass(frozen=True)
class CBOMDocument:
    """A parsed CBOM: its components, dependency edges and metadata timestamp."""

    entries: List[InventoryEntry] = field(default_factory=list)
    edges: List[DependencyEdge] = field(default_factory=list)
    timestamp: Optional[str] = None

    @property
    def data_entries(self) -> List[InventoryEntry]:
        return [e for e in self.entries if e.kind is ComponentKind.DATA]

    @property
    def file_entries(self) -> List[InventoryEntry]:
        return [e for e in self.entries if e.kind is ComponentKind.FILE]

    @classmethod
    def from_dict(cls, data: Any) -> 'CBOMDocument':
        """
        Shape a decoded JSON value into a document.

        Args:
            data: Any decoded JSON value

        Returns:
            CBOMDocument; empty when ``data`` is not an object
        """
        if not isinstance(data, dict):
            logger.warning(f"CBOM root is a {type(data).__name__}, not an object; treating it as empty")
            return cls()

        raw_components = data.get("components")
        if raw_components is not None and not isinstance(raw_components, list):
            logger.warning("CBOM 'components' is not a list; ignoring it")

        entries = [
            InventoryEntry.from_dict(c)
            for c in _as_list(raw_components)
            if isinstance(c, dict)
        ]
        edges = [DependencyEdge.from_dict(d) for d in _as_list(data.get("dependencies"))]

        metadata = data.get("metadata")
        timestamp = _as_text(metadata.get("timestamp")) if isinstance(metadata, dict) else None

        return cls(
            entries=entries,
            edges=[e for e in edges if e is not None],
            timestamp=timestamp or None
        )
