"""Tests for the assistant-facing catalog tools."""

from __future__ import annotations

import pytest

from skillshelf.catalog.models import Catalog, Entry
from skillshelf.tools.catalog_tools import get_catalog_tools


@pytest.fixture
def tools() -> dict:
    catalog = Catalog(
        [
            Entry("jwt-auth", "Validate JWTs server-side.", frozenset({"security"}),
                  body="Check exp and aud."),
            Entry("pytest-fixtures", "Compose fixtures.", frozenset({"testing"}),
                  body="Prefer tmp_path."),
        ]
    )
    return get_catalog_tools(catalog)


class TestCatalogTools:
    def test_tool_names(self, tools: dict):
        assert set(tools) == {"list_skills", "get_skill", "find_by_tag", "search_skills"}

    def test_list_skills(self, tools: dict):
        out = tools["list_skills"]()
        assert "jwt-auth" in out
        assert "pytest-fixtures" in out

    def test_get_skill(self, tools: dict):
        out = tools["get_skill"]("jwt-auth")
        assert out.startswith("# jwt-auth")
        assert "Tags: security" in out
        assert "Check exp and aud." in out

    def test_get_unknown_skill(self, tools: dict):
        assert "no skill named" in tools["get_skill"]("nope")

    def test_find_by_tag(self, tools: dict):
        out = tools["find_by_tag"]("Testing")
        assert "pytest-fixtures" in out
        assert "jwt-auth" not in out
        assert "no skills tagged" in tools["find_by_tag"]("mobile")

    def test_search(self, tools: dict):
        assert "jwt-auth" in tools["search_skills"]("aud")
        assert "no skills match" in tools["search_skills"]("kubernetes")

    def test_empty_catalog(self):
        assert get_catalog_tools(Catalog())["list_skills"]() == "(catalog is empty)"
