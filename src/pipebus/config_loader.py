"""Load BusConfig from pipebus.yaml or pipebus.toml if present.

Merges file config with keyword overrides. Overrides take precedence.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from pipebus._errors import ConfigError
from pipebus.config import BusConfig

_KNOWN_KEYS = ("default_pipe", "observe", "max_events")


def load_config(root: Path, **overrides: object) -> BusConfig:
    """Load BusConfig from root, optionally merging a pipebus config file.

    Looks for pipebus.yaml, pipebus.yml, or pipebus.toml in root. If found,
    loads and merges with overrides. Overrides take precedence.
    """
    file_config = _read_pipebus_config(Path(root))
    merged = {**file_config, **overrides}
    unknown = sorted(set(merged) - set(_KNOWN_KEYS))
    if unknown:
        msg = f"Unknown pipebus config keys: {', '.join(unknown)}"
        raise ConfigError(msg)
    return BusConfig(**merged)  # type: ignore[arg-type]


def _read_pipebus_config(root: Path) -> dict[str, object]:
    """Read pipebus config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("pipebus.yaml", "pipebus.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "pipebus.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_pipebus_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_pipebus_section(data)


def _flatten_pipebus_section(data: dict[str, object]) -> dict[str, object]:
    """Extract pipebus.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("pipebus")
    if isinstance(section, dict):
        result.update(section)
    return result
