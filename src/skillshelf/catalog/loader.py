"""Catalog loader: scan a directory tree for skill documents.

A skill document is a text file whose leading YAML frontmatter block carries
at least ``name`` and ``description``. Files without a frontmatter block are
not skill documents and are skipped quietly. Every other problem becomes an
``Issue`` and the offending file is left out of the catalog; loading never
stops early.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

from skillshelf.catalog.models import Catalog, Entry, Issue, normalize_tag

logger = logging.getLogger(__name__)

CORE_FIELDS = ("name", "description", "tags")

_YAML = YAMLHandler()


@dataclass
class LoadResult:
    """Outcome of one load: the catalog plus everything that was rejected."""

    root: Path
    catalog: Catalog = field(default_factory=Catalog)
    issues: list[Issue] = field(default_factory=list)
    scanned: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues


def parse_tags(raw: object) -> frozenset[str]:
    """Accept a YAML list or a comma-separated string."""
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        items: Iterable[object] = raw.split(",")
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        items = [raw]
    tags = (normalize_tag(t) for t in items if t is not None)
    return frozenset(t for t in tags if t)


def _field_text(meta: dict, key: str) -> str:
    value = meta.get(key)
    if value is None:
        return ""
    return str(value).strip()


class CatalogLoader:
    """Build a fresh ``Catalog`` from the files under ``root``."""

    def __init__(
        self,
        root: Path,
        extensions: Iterable[str] = (".md",),
        exclude_dirs: Iterable[str] = ("node_modules",),
    ) -> None:
        self.root = Path(root)
        self.extensions = {e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions}
        self.exclude_dirs = set(exclude_dirs)

    # ── Discovery ─────────────────────────────────────────────

    def _is_excluded(self, path: Path) -> bool:
        rel = path.relative_to(self.root)
        for part in rel.parts[:-1]:
            if part.startswith(".") or part in self.exclude_dirs:
                return True
        return rel.name.startswith(".")

    def discover(self) -> list[Path]:
        """Candidate files in sorted path order (the catalog's discovery order)."""
        found = []
        for path in self.root.rglob("*"):
            if path.suffix.lower() not in self.extensions or self._is_excluded(path):
                continue
            if path.is_file():
                found.append(path)
        return sorted(found)

    # ── Parsing ───────────────────────────────────────────────

    def parse_file(self, path: Path) -> Entry | Issue | None:
        """Parse one file. Returns None when the file is not a skill document."""
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            return Issue("unreadable_path", path, f"cannot read file: {e}")

        if not _YAML.detect(text.lstrip()):
            return None

        try:
            post = frontmatter.loads(text, handler=_YAML)
        except yaml.YAMLError as e:
            problem = str(e).splitlines()[0] if str(e) else type(e).__name__
            return Issue("malformed_header", path, f"metadata block is not valid YAML: {problem}")

        meta = dict(post.metadata)
        if not meta:
            return Issue("malformed_header", path, "metadata block is empty or not a mapping")

        name = _field_text(meta, "name")
        description = _field_text(meta, "description")
        missing = [key for key, value in (("name", name), ("description", description)) if not value]
        if missing:
            return Issue(
                "missing_field",
                path,
                f"missing required field(s): {', '.join(missing)}",
                name=name or None,
            )

        return Entry(
            name=name,
            description=description,
            tags=parse_tags(meta.get("tags")),
            body=post.content,
            path=path,
            metadata={k: v for k, v in meta.items() if k not in CORE_FIELDS},
        )

    # ── Load ──────────────────────────────────────────────────

    def load(self) -> LoadResult:
        result = LoadResult(root=self.root)
        if not self.root.is_dir():
            logger.warning("Catalog root is not a readable directory: %s", self.root)
            result.issues.append(
                Issue("unreadable_path", self.root, "catalog root does not exist or is not a directory")
            )
            return result

        for path in self.discover():
            result.scanned += 1
            parsed = self.parse_file(path)
            if parsed is None:
                logger.debug("Skipping %s: no metadata block", path)
                continue
            if isinstance(parsed, Issue):
                logger.warning("Skipping %s", parsed)
                result.issues.append(parsed)
                continue

            existing = result.catalog.get(parsed.name)
            if existing is not None:
                issue = Issue(
                    "duplicate_name",
                    path,
                    f"name {parsed.name!r} already defined in {existing.path}",
                    name=parsed.name,
                )
                logger.warning("Rejecting %s", issue)
                result.issues.append(issue)
                continue

            result.catalog.add(parsed)

        logger.info(
            "Loaded %d skill(s) from %s (%d file(s) scanned, %d issue(s))",
            len(result.catalog),
            self.root,
            result.scanned,
            len(result.issues),
        )
        return result


def load_catalog(root: Path, **kwargs) -> LoadResult:
    """Convenience wrapper: ``CatalogLoader(root, **kwargs).load()``."""
    return CatalogLoader(root, **kwargs).load()
