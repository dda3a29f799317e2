"""
TOML-based config file for copycat.

The config lives at `copycat/copycat_config.toml` under the project root. It is
read with `tomllib` and written with `tomli_w`. Explicit CLI flags take
precedence over config values.
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w
from strif import atomic_output_file

from copycat.file_walker import DEFAULT_EXCLUDES

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

CONFIG_DIRNAME = "copycat"
CONFIG_FILENAME = "copycat_config.toml"
DEFAULT_OUTPUT = f"{CONFIG_DIRNAME}/concatenated_codebase.md"

# The `.gitignore` rule that keeps copycat's own directory out of version control.
IGNORE_ENTRY = f"/{CONFIG_DIRNAME}"


class ConfigError(ValueError):
    """The config file is unreadable or invalid."""


@dataclass
class CopycatConfig:
    """
    Persisted copycat settings.

    `include` is stored and round-tripped but is not consulted when deciding
    which files to emit.
    """

    output: str = DEFAULT_OUTPUT
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    include: list[str] = field(default_factory=list)
    ignore_hidden: bool = True


_FIELD_TYPES: dict[str, type] = {
    "output": str,
    "exclude": list,
    "include": list,
    "ignore_hidden": bool,
}

_VALID_FIELDS = {f.name for f in fields(CopycatConfig)}


def config_dir(root: Path) -> Path:
    return root / CONFIG_DIRNAME


def config_path(root: Path) -> Path:
    """Location of the config file for a project root."""
    return config_dir(root) / CONFIG_FILENAME


def _check_type(key: str, value: Any) -> None:
    expected = _FIELD_TYPES[key]
    if not isinstance(value, expected):
        raise ConfigError(
            f"Config key {key!r} must be {expected.__name__}, got {type(value).__name__}"
        )
    if expected is list and not all(isinstance(item, str) for item in value):
        raise ConfigError(f"Config key {key!r} must be a list of strings")


def _parse_config_data(data: dict[str, Any]) -> CopycatConfig:
    """Validate a parsed TOML dict. Missing keys keep their defaults."""
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _VALID_FIELDS:
            print(f"Warning: unrecognized config key {key!r} (ignored)", file=sys.stderr)
            continue
        _check_type(key, value)
        values[key] = value
    return CopycatConfig(**values)


def load_config(path: Path) -> CopycatConfig:
    """
    Load a `CopycatConfig` from a TOML file. Raises `ConfigError` if the file
    cannot be read, is not valid TOML, or has values of the wrong type.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e
    return _parse_config_data(data)


def save_config(config: CopycatConfig, path: Path) -> None:
    """Write the config as TOML, creating parent directories as needed."""
    content = tomli_w.dumps(asdict(config))
    with atomic_output_file(path, make_parents=True) as temp_path:
        Path(temp_path).write_text(content, encoding="utf-8")
