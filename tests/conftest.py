"""Shared fixtures: build small skill trees under tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest


def render_skill(
    name: str | None,
    description: str | None = "A skill.",
    tags: list[str] | None = None,
    body: str = "Body text.",
    extra: str = "",
) -> str:
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    if tags is not None:
        lines.append(f"tags: [{', '.join(tags)}]")
    if extra:
        lines.append(extra.rstrip("\n"))
    lines += ["---", "", body, ""]
    return "\n".join(lines)


@pytest.fixture
def skills_root(tmp_path: Path) -> Path:
    root = tmp_path / "skills"
    root.mkdir()
    return root


@pytest.fixture
def write_skill(skills_root: Path):
    """Write a skill document at a path relative to skills_root."""

    def _write(relpath: str, name: str | None, **kwargs) -> Path:
        path = skills_root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_skill(name, **kwargs), encoding="utf-8")
        return path

    return _write
