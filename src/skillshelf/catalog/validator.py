"""Catalog validation: required fields, tag presence, unique names."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from skillshelf.catalog.models import Entry, Issue


@dataclass
class ValidationReport:
    violations: list[Issue] = field(default_factory=list)
    checked: int = 0

    @property
    def passed(self) -> bool:
        return not self.violations

    def by_kind(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for issue in self.violations:
            counts[issue.kind] = counts.get(issue.kind, 0) + 1
        return counts


def _has_field(entry: Entry, key: str) -> bool:
    if key == "name":
        return bool(entry.name.strip())
    if key == "description":
        return bool(entry.description.strip())
    if key == "tags":
        return bool(entry.tags)
    value = entry.metadata.get(key)
    if isinstance(value, str):
        return bool(value.strip())
    return value not in (None, [], {})


def validate(
    entries: Iterable[Entry],
    *,
    require_tags: bool = False,
    required_fields: Iterable[str] = (),
    load_issues: Iterable[Issue] = (),
) -> ValidationReport:
    """Check every entry and return a report; never raises on bad content.

    ``entries`` is usually a ``Catalog`` but any iterable works, which is how
    duplicate names can reach this check at all. ``load_issues`` are copied
    into the report first so one report covers the whole load.
    """
    report = ValidationReport(violations=list(load_issues))
    skip = {"name", "description", "tags"} if require_tags else {"name", "description"}
    extra_fields = [f for f in required_fields if f not in skip]
    seen: dict[str, Entry] = {}

    for entry in entries:
        report.checked += 1

        missing = [f for f in ("name", "description") if not _has_field(entry, f)]
        missing += [f for f in extra_fields if f not in missing and not _has_field(entry, f)]
        if missing:
            report.violations.append(
                Issue(
                    "missing_field",
                    entry.path,
                    f"missing required field(s): {', '.join(missing)}",
                    name=entry.name or None,
                )
            )

        if require_tags and not entry.tags:
            report.violations.append(
                Issue("empty_tags", entry.path, "tag set is empty", name=entry.name or None)
            )

        if entry.name in seen:
            first = seen[entry.name]
            report.violations.append(
                Issue(
                    "duplicate_name",
                    entry.path,
                    f"name {entry.name!r} already defined in {first.path}",
                    name=entry.name,
                )
            )
        else:
            seen[entry.name] = entry

    return report
