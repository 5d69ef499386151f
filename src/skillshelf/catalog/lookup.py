"""Lookup over a loaded catalog: by name, by tag, and free-text search.

All results come back in file-discovery order.
"""

from __future__ import annotations

from skillshelf.catalog.models import Catalog, Entry


def by_name(catalog: Catalog, name: str) -> list[Entry]:
    """Exact, case-sensitive name match (zero or one entry)."""
    entry = catalog.get(name)
    return [entry] if entry is not None else []


def by_tag(catalog: Catalog, tag: str) -> list[Entry]:
    """Every entry whose tag set contains ``tag``."""
    names = catalog.names_for_tag(tag)
    return [e for e in catalog if e.name in names]


def lookup(catalog: Catalog, *, name: str | None = None, tag: str | None = None) -> list[Entry]:
    """Query by exactly one of ``name`` or ``tag``."""
    if (name is None) == (tag is None):
        raise ValueError("lookup needs exactly one of name= or tag=")
    if name is not None:
        return by_name(catalog, name)
    return by_tag(catalog, tag)


def search(catalog: Catalog, query: str) -> list[Entry]:
    """Case-insensitive substring search.

    Hits on name, description or tags rank before hits that only appear in
    the body; within each group discovery order is kept.
    """
    q = query.strip().lower()
    if not q:
        return []
    header_hits: list[Entry] = []
    body_hits: list[Entry] = []
    for entry in catalog:
        if (
            q in entry.name.lower()
            or q in entry.description.lower()
            or any(q in tag for tag in entry.tags)
        ):
            header_hits.append(entry)
        elif q in entry.body.lower():
            body_hits.append(entry)
    return header_hits + body_hits


def _cell(text: str) -> str:
    return " ".join(text.split()).replace("|", "\\|")


def render_manifest(catalog: Catalog, entries: list[Entry] | None = None) -> str:
    """Markdown table of the catalog, suitable for embedding in a prompt."""
    rows = catalog.entries if entries is None else entries
    if not rows:
        return ""
    out = "| Name | Tags | Description |\n|------|------|-------------|\n"
    for entry in rows:
        tags = ", ".join(sorted(entry.tags))
        out += f"| {_cell(entry.name)} | {_cell(tags)} | {_cell(entry.description)} |\n"
    return out
