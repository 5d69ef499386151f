"""Catalog data model: entries, issues, and the name/tag indexed catalog."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

IssueKind = Literal[
    "missing_field",
    "duplicate_name",
    "unreadable_path",
    "malformed_header",
    "empty_tags",
]


def normalize_tag(tag: object) -> str:
    """Tags compare case-insensitively and ignore surrounding whitespace."""
    return str(tag).strip().lower()


@dataclass(frozen=True)
class Issue:
    """A problem found while loading or validating a catalog."""

    kind: IssueKind
    path: Path | None
    message: str
    name: str | None = None

    def __str__(self) -> str:
        where = str(self.path) if self.path else "<catalog>"
        return f"{where}: [{self.kind}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "path": str(self.path) if self.path else None,
            "message": self.message,
            "name": self.name,
        }


@dataclass
class Entry:
    """One parsed skill document."""

    name: str
    description: str
    tags: frozenset[str] = field(default_factory=frozenset)
    body: str = ""
    path: Path | None = None
    metadata: dict = field(default_factory=dict)

    def summary(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "tags": sorted(self.tags),
            "path": str(self.path) if self.path else None,
        }

    def to_dict(self) -> dict:
        data = self.summary()
        data["metadata"] = dict(self.metadata)
        data["body"] = self.body
        return data


class Catalog:
    """Ordered collection of entries, indexed by name and by tag.

    Order is insertion order, which the loader keeps equal to file-discovery
    order. Names are unique; adding a second entry under an existing name
    raises ``ValueError``.
    """

    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: list[Entry] = []
        self._by_name: dict[str, Entry] = {}
        self._by_tag: dict[str, set[str]] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: Entry) -> None:
        if entry.name in self._by_name:
            raise ValueError(f"Duplicate skill name: {entry.name!r}")
        self._entries.append(entry)
        self._by_name[entry.name] = entry
        for tag in entry.tags:
            self._by_tag.setdefault(tag, set()).add(entry.name)

    def get(self, name: str) -> Entry | None:
        return self._by_name.get(name)

    def names_for_tag(self, tag: str) -> set[str]:
        return set(self._by_tag.get(normalize_tag(tag), ()))

    def tag_counts(self) -> dict[str, int]:
        """Tag → number of entries carrying it, sorted by tag."""
        return {tag: len(names) for tag, names in sorted(self._by_tag.items())}

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries)

    def names(self) -> list[str]:
        return [e.name for e in self._entries]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Catalog({len(self._entries)} entries)"
