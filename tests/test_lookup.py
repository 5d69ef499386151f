"""Tests for catalog lookup and the catalog indexes."""

from __future__ import annotations

import pytest

from skillshelf.catalog.lookup import by_name, by_tag, lookup, render_manifest, search
from skillshelf.catalog.models import Catalog, Entry


@pytest.fixture
def entries() -> list[Entry]:
    return [
        Entry("swiftui-nav", "Navigation stacks in SwiftUI.", frozenset({"mobile", "ios"}),
              body="Use NavigationStack."),
        Entry("compose-lists", "Lazy lists in Jetpack Compose.", frozenset({"mobile", "android"}),
              body="LazyColumn keys matter."),
        Entry("pg-indexing", "Postgres index selection.", frozenset({"databases"}),
              body="Partial indexes help mobile backends."),
        Entry("k8s-probes", "Liveness vs readiness.", frozenset({"devops"}),
              body="Probe the HTTP port."),
    ]


@pytest.fixture
def catalog(entries: list[Entry]) -> Catalog:
    return Catalog(entries)


class TestCatalog:
    def test_indexes(self, catalog: Catalog):
        assert len(catalog) == 4
        assert "pg-indexing" in catalog
        assert catalog.names_for_tag("mobile") == {"swiftui-nav", "compose-lists"}
        assert catalog.tag_counts() == {
            "android": 1,
            "databases": 1,
            "devops": 1,
            "ios": 1,
            "mobile": 2,
        }

    def test_duplicate_add_rejected(self, catalog: Catalog):
        with pytest.raises(ValueError, match="Duplicate"):
            catalog.add(Entry("pg-indexing", "again"))
        assert len(catalog) == 4


class TestByName:
    def test_exact(self, catalog: Catalog):
        assert [e.name for e in by_name(catalog, "k8s-probes")] == ["k8s-probes"]

    def test_case_sensitive(self, catalog: Catalog):
        assert by_name(catalog, "K8S-PROBES") == []

    def test_unknown(self, catalog: Catalog):
        assert by_name(catalog, "nope") == []


class TestByTag:
    def test_discovery_order(self, catalog: Catalog):
        assert [e.name for e in by_tag(catalog, "mobile")] == ["swiftui-nav", "compose-lists"]

    def test_tag_normalized(self, catalog: Catalog):
        assert [e.name for e in by_tag(catalog, "  DevOps ")] == ["k8s-probes"]

    def test_unknown_tag(self, catalog: Catalog):
        assert by_tag(catalog, "security") == []

    def test_independent_of_insertion_order(self, entries: list[Entry]):
        forward = Catalog(entries)
        backward = Catalog(reversed(entries))
        for tag in ("mobile", "ios", "databases", "devops", "missing"):
            expected = {e.name for e in entries if tag in e.tags}
            assert {e.name for e in by_tag(forward, tag)} == expected
            assert {e.name for e in by_tag(backward, tag)} == expected


class TestLookup:
    def test_by_name(self, catalog: Catalog):
        assert [e.name for e in lookup(catalog, name="pg-indexing")] == ["pg-indexing"]

    def test_by_tag(self, catalog: Catalog):
        assert len(lookup(catalog, tag="mobile")) == 2

    def test_needs_exactly_one_query(self, catalog: Catalog):
        with pytest.raises(ValueError):
            lookup(catalog)
        with pytest.raises(ValueError):
            lookup(catalog, name="a", tag="b")


class TestSearch:
    def test_header_hits_rank_before_body_hits(self, catalog: Catalog):
        names = [e.name for e in search(catalog, "mobile")]
        assert names == ["swiftui-nav", "compose-lists", "pg-indexing"]

    def test_case_insensitive(self, catalog: Catalog):
        assert [e.name for e in search(catalog, "POSTGRES")] == ["pg-indexing"]

    def test_empty_query(self, catalog: Catalog):
        assert search(catalog, "   ") == []


class TestManifest:
    def test_table(self, catalog: Catalog):
        manifest = render_manifest(catalog)
        lines = manifest.splitlines()
        assert lines[0] == "| Name | Tags | Description |"
        assert lines[2] == "| swiftui-nav | ios, mobile | Navigation stacks in SwiftUI. |"
        assert len(lines) == 6

    def test_escapes_pipes_and_newlines(self):
        catalog = Catalog([Entry("a", "one | two\nthree")])
        assert "| a |  | one \\| two three |" in render_manifest(catalog)

    def test_empty(self):
        assert render_manifest(Catalog()) == ""
