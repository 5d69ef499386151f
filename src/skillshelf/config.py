"""Configuration loading from environment variables and skillshelf.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "skillshelf.toml"
_USER_CONFIG_DIR = Path.home() / ".skillshelf"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class CatalogConfig:
    """Where to look for skill documents."""

    root: Path = Path(".")
    extensions: list[str] = field(default_factory=lambda: [".md"])
    exclude_dirs: list[str] = field(default_factory=lambda: ["node_modules"])


@dataclass
class ValidatorConfig:
    """Extra checks on top of the always-required name/description."""

    require_tags: bool = False
    required_fields: list[str] = field(default_factory=list)


@dataclass
class ServerConfig:
    """HTTP lookup server configuration."""

    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class SkillshelfConfig:
    """Top-level skillshelf configuration."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    validator: ValidatorConfig = field(default_factory=ValidatorConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _read_file_data(config_path: Path | None) -> dict:
    if config_path and config_path.exists():
        return tomllib.loads(config_path.read_text(encoding="utf-8"))
    # Search current dir and ~/.skillshelf/
    for candidate in [Path.cwd() / _CONFIG_FILENAME, _USER_CONFIG_DIR / _CONFIG_FILENAME]:
        if candidate.exists():
            return tomllib.loads(candidate.read_text(encoding="utf-8"))
    return {}


def load_config(config_path: Path | None = None) -> SkillshelfConfig:
    """Load configuration from environment variables and optional skillshelf.toml.

    Priority: environment variables > skillshelf.toml > defaults.
    """
    file_data = _read_file_data(config_path)

    catalog_data = file_data.get("catalog", {})
    validator_data = file_data.get("validator", {})
    server_data = file_data.get("server", {})

    config = SkillshelfConfig(
        catalog=CatalogConfig(
            root=Path(os.getenv("SKILLSHELF_ROOT", catalog_data.get("root", "."))).expanduser(),
            extensions=list(catalog_data.get("extensions", [".md"])),
            exclude_dirs=list(catalog_data.get("exclude_dirs", ["node_modules"])),
        ),
        validator=ValidatorConfig(
            require_tags=_as_bool(
                os.getenv("SKILLSHELF_REQUIRE_TAGS", validator_data.get("require_tags", False))
            ),
            required_fields=list(validator_data.get("required_fields", [])),
        ),
        server=ServerConfig(
            host=os.getenv("SKILLSHELF_HOST", server_data.get("host", "127.0.0.1")),
            port=int(os.getenv("SKILLSHELF_PORT", server_data.get("port", 8765))),
        ),
        log_level=os.getenv("SKILLSHELF_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
