"""Entry point: python -m skillshelf <command>

- check [ROOT]         Load + validate, print issues (exit 1 if any)
- list [ROOT]          Manifest table of every skill
- show NAME [ROOT]     Full document of one skill
- tag TAG [ROOT]       Skills carrying a tag
- search QUERY [ROOT]  Free-text search
- serve                Read-only HTTP lookup server
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from skillshelf.catalog.loader import CatalogLoader, LoadResult
from skillshelf.catalog.lookup import by_name, by_tag, render_manifest, search
from skillshelf.catalog.validator import validate
from skillshelf.config import SkillshelfConfig, load_config

USAGE = """\
Usage: python -m skillshelf <command> [args]
  check [ROOT]         — Validate every skill document (exit 1 on issues)
  list [ROOT]          — Print the catalog manifest
  show NAME [ROOT]     — Print one skill document
  tag TAG [ROOT]       — List skills carrying TAG
  search QUERY [ROOT]  — Search names, descriptions, tags and bodies
  serve                — Run the HTTP lookup server"""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load(config: SkillshelfConfig, root: str | None) -> LoadResult:
    loader = CatalogLoader(
        Path(root) if root else config.catalog.root,
        extensions=config.catalog.extensions,
        exclude_dirs=config.catalog.exclude_dirs,
    )
    return loader.load()


def _cmd_check(config: SkillshelfConfig, args: list[str]) -> int:
    result = _load(config, args[0] if args else None)
    report = validate(
        result.catalog,
        require_tags=config.validator.require_tags,
        required_fields=config.validator.required_fields,
        load_issues=result.issues,
    )
    for issue in report.violations:
        print(issue)
    status = "OK" if report.passed else "FAILED"
    print(f"{status}: {len(result.catalog)} skill(s), {len(report.violations)} issue(s)")
    return 0 if report.passed else 1


def _cmd_list(config: SkillshelfConfig, args: list[str]) -> int:
    result = _load(config, args[0] if args else None)
    print(render_manifest(result.catalog) or "(catalog is empty)")
    return 0


def _cmd_show(config: SkillshelfConfig, args: list[str]) -> int:
    if not args:
        print("show needs a skill NAME", file=sys.stderr)
        return 1
    result = _load(config, args[1] if len(args) > 1 else None)
    found = by_name(result.catalog, args[0])
    if not found:
        print(f"No skill named {args[0]!r}", file=sys.stderr)
        return 1
    entry = found[0]
    if entry.path is None:
        print(entry.body)
        return 0
    try:
        print(entry.path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {entry.path}: {e}", file=sys.stderr)
        return 1
    return 0


def _cmd_tag(config: SkillshelfConfig, args: list[str]) -> int:
    if not args:
        print("tag needs a TAG", file=sys.stderr)
        return 1
    result = _load(config, args[1] if len(args) > 1 else None)
    for entry in by_tag(result.catalog, args[0]):
        print(entry.name)
    return 0


def _cmd_search(config: SkillshelfConfig, args: list[str]) -> int:
    if not args:
        print("search needs a QUERY", file=sys.stderr)
        return 1
    result = _load(config, args[1] if len(args) > 1 else None)
    for entry in search(result.catalog, args[0]):
        print(f"{entry.name}: {entry.description}")
    return 0


def _cmd_serve(config: SkillshelfConfig, args: list[str]) -> int:
    from skillshelf.server import CatalogServer

    server = CatalogServer(config)
    asyncio.run(server.run())
    return 0


COMMANDS = {
    "check": _cmd_check,
    "list": _cmd_list,
    "show": _cmd_show,
    "tag": _cmd_tag,
    "search": _cmd_search,
    "serve": _cmd_serve,
}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    cmd = argv[0] if argv else ""
    handler = COMMANDS.get(cmd)
    if handler is None:
        print(USAGE)
        return 1

    config = load_config()
    _setup_logging(config.log_level)
    return handler(config, argv[1:])


if __name__ == "__main__":
    sys.exit(main())
