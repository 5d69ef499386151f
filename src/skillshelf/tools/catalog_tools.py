"""Assistant-facing tools for catalog access.

These functions are designed to be exposed as tools to an AI agent,
allowing it to browse the skill catalog without reading the tree itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from skillshelf.catalog.lookup import by_name, by_tag, render_manifest, search

if TYPE_CHECKING:
    from skillshelf.catalog.models import Catalog


def get_catalog_tools(catalog: Catalog) -> dict[str, Callable[..., str]]:
    """Return a dict of tool_name -> callable for catalog lookups.

    These can be registered as MCP tools or called directly.
    """

    def list_skills() -> str:
        """List every skill with its tags and description."""
        return render_manifest(catalog) or "(catalog is empty)"

    def get_skill(name: str) -> str:
        """Return the full body of one skill by exact name."""
        found = by_name(catalog, name)
        if not found:
            return f"(no skill named {name!r})"
        entry = found[0]
        tags = ", ".join(sorted(entry.tags)) or "-"
        return f"# {entry.name}\n\n{entry.description}\n\nTags: {tags}\n\n{entry.body}"

    def find_by_tag(tag: str) -> str:
        """List skills carrying a tag."""
        found = by_tag(catalog, tag)
        return render_manifest(catalog, found) or f"(no skills tagged {tag!r})"

    def search_skills(query: str) -> str:
        """Search skill names, descriptions, tags and bodies."""
        found = search(catalog, query)
        return render_manifest(catalog, found) or f"(no skills match {query!r})"

    return {
        "list_skills": list_skills,
        "get_skill": get_skill,
        "find_by_tag": find_by_tag,
        "search_skills": search_skills,
    }
