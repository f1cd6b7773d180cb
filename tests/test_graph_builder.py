"""
Unit tests for the dependency graph builder.
"""

from __future__ import annotations

from cbom_analyzer.analysis import build
from cbom_analyzer.models import (
    CBOMDocument, DependencyEdge, GraphLink, InventoryEntry, ComponentKind, RiskTier
)


def entry(identifier, kind=ComponentKind.DATA):
    return InventoryEntry(identifier=identifier, name=identifier.upper(), kind=kind)


class TestBuild:
    """Tests for build()."""

    def test_minimal_example(self, minimal_cbom):
        document = CBOMDocument.from_dict(minimal_cbom)

        graph = build(document.entries, document.edges)

        assert len(graph.nodes) == 2
        assert graph.links == [GraphLink(source="f1", target="c1", value=1)]
        tiers = {node.id: node.tier for node in graph.nodes}
        assert tiers == {"f1": RiskTier.BLUE, "c1": RiskTier.GREEN}

    def test_every_entry_becomes_a_node(self, sample_document):
        graph = build(sample_document.entries, sample_document.edges)

        assert [n.id for n in graph.nodes] == [e.identifier for e in sample_document.entries]
        assert graph.nodes[2].entry is sample_document.entries[2]

    def test_sample_tiers(self, sample_document):
        graph = build(sample_document.entries, sample_document.edges)

        tiers = {node.id: node.tier for node in graph.nodes}
        assert tiers == {
            "file:main.go": RiskTier.BLUE,
            "file:util.go": RiskTier.BLUE,
            "crypto:rsa": RiskTier.RED,
            "crypto:md5": RiskTier.GRAY,
            "crypto:aes": RiskTier.GREEN,
            "crypto:mystery": RiskTier.GRAY,
            "lib:openssl": RiskTier.GRAY,
        }

    def test_dangling_references_are_dropped(self, sample_document):
        graph = build(sample_document.entries, sample_document.edges)

        assert [(link.source, link.target) for link in graph.links] == [
            ("file:main.go", "crypto:rsa"),
            ("file:main.go", "crypto:aes"),
            ("file:util.go", "crypto:md5"),
            ("file:util.go", "crypto:rsa"),
        ]
        assert graph.dropped_links == 2

    def test_dangling_target_yields_no_edges_from_source(self):
        graph = build([entry("A")], [DependencyEdge(ref="A", depends_on=["B"])])

        assert graph.outgoing("A") == []
        assert graph.dropped_links == 1

    def test_parallel_links_are_kept(self):
        graph = build(
            [entry("a"), entry("b")],
            [DependencyEdge("a", ["b", "b"]), DependencyEdge("a", ["b"])]
        )

        assert len(graph.links) == 3
        assert all(link.value == 1 for link in graph.links)

    def test_cycles_and_self_links_are_kept(self):
        graph = build(
            [entry("a"), entry("b")],
            [DependencyEdge("a", ["b"]), DependencyEdge("b", ["a", "b"])]
        )

        assert len(graph.links) == 3
        assert len(graph.incoming("b")) == 2

    def test_duplicate_identifiers_index_last_node(self):
        first = InventoryEntry(identifier="x", name="first", kind=ComponentKind.FILE)
        second = InventoryEntry(identifier="x", name="second", kind=ComponentKind.DATA)

        graph = build([first, second], [])

        assert len(graph.nodes) == 2
        assert graph.node_index["x"].name == "second"

    def test_to_dict(self, minimal_cbom):
        document = CBOMDocument.from_dict(minimal_cbom)

        data = build(document.entries, document.edges).to_dict()

        assert data["nodes"][0] == {"id": "f1", "name": "a.go", "type": "file", "tier": "blue"}
        assert data["links"] == [{"source": "f1", "target": "c1", "value": 1}]
        assert data["dropped_links"] == 0
