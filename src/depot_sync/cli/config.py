"""Optional TOML config file feeding CLI option defaults.

Values from the file become click defaults, so explicit options and
environment variables still take precedence.

Example ``depot-sync.toml``:

    repo = "purduesigbots/pros"
    branch = "depot"
    path = "stable.json"
    pre_release_path = "beta.json"
    readable = true
    max_workers = 4
"""

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import click

CONFIG_FILENAME = "depot-sync.toml"

DEFAULT_BRANCH = "depot"
DEFAULT_STABLE_PATH = "stable.json"
DEFAULT_BETA_PATH = "beta.json"
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of ``depot-sync.toml``. None means not set."""

    repo: str | None = None
    dest_repo: str | None = None
    branch: str | None = None
    path: str | None = None
    pre_release_branch: str | None = None
    pre_release_path: str | None = None
    readable: bool | None = None
    message: str | None = None
    quiet_warnings: bool | None = None
    silent_non_templates: bool | None = None
    max_workers: int | None = None

    def as_default_map(self) -> dict[str, Any]:
        """Values that were set, keyed by click parameter name."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {key: value for key, value in values.items() if value is not None}


_EXPECTED_TYPES: dict[str, type] = {
    "repo": str,
    "dest_repo": str,
    "branch": str,
    "path": str,
    "pre_release_branch": str,
    "pre_release_path": str,
    "readable": bool,
    "message": str,
    "quiet_warnings": bool,
    "silent_non_templates": bool,
    "max_workers": int,
}


def parse_config(data: dict[str, Any], source: Path) -> LoadedConfig:
    """Validate parsed TOML into a LoadedConfig.

    Raises:
        ValueError: On unknown keys or values of the wrong type
    """
    unknown = sorted(set(data) - set(_EXPECTED_TYPES))
    if unknown:
        raise ValueError(f"Unknown keys in {source}: {', '.join(unknown)}")

    for key, value in data.items():
        expected = _EXPECTED_TYPES[key]
        # bool is a subclass of int; max_workers = true is still wrong
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(f"{key!r} in {source} must be a {expected.__name__}")

    return LoadedConfig(**data)


def load_config(config_path: Path | None, cwd: Path) -> LoadedConfig:
    """Load the config file if present; otherwise return an empty config.

    Args:
        config_path: Explicit path from --config, which must exist
        cwd: Directory searched for depot-sync.toml when no path is given

    Raises:
        FileNotFoundError: If an explicit config path does not exist
        ValueError: If the file is not valid TOML or has invalid values
    """
    if config_path is None:
        config_path = cwd / CONFIG_FILENAME
        if not config_path.exists():
            return LoadedConfig()
    elif not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
    return parse_config(data, config_path)


def apply_config_file(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    """Eager --config callback: load the file into the command's default_map."""
    try:
        loaded = load_config(Path(value) if value else None, Path.cwd())
    except (FileNotFoundError, ValueError) as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e

    ctx.default_map = {**(ctx.default_map or {}), **loaded.as_default_map()}
    return value
