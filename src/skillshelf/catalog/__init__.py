"""Skill catalog: load → validate → lookup.

Layout of a skill tree (any nesting is fine):
    skills/
    ├── README.md                      # No frontmatter → ignored
    ├── mobile/
    │   └── swiftui-navigation.md      # ---\nname: ...\ndescription: ...\ntags: [...]\n---
    └── databases/
        └── postgres-indexing.md

Hidden directories and ``node_modules`` are never scanned.
"""

from skillshelf.catalog.loader import CatalogLoader, LoadResult, load_catalog
from skillshelf.catalog.lookup import by_name, by_tag, lookup, render_manifest, search
from skillshelf.catalog.models import Catalog, Entry, Issue, normalize_tag
from skillshelf.catalog.validator import ValidationReport, validate

__all__ = [
    "Catalog",
    "CatalogLoader",
    "Entry",
    "Issue",
    "LoadResult",
    "ValidationReport",
    "by_name",
    "by_tag",
    "load_catalog",
    "lookup",
    "normalize_tag",
    "render_manifest",
    "search",
    "validate",
]
