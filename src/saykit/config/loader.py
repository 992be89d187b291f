"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
- Environment overrides (SAYKIT_LAUNCH_PATH, SAYKIT_LOG_LEVEL)
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from . import LoggingConfig, SayConfig, SayToolConfig

ENV_LAUNCH_PATH = "SAYKIT_LAUNCH_PATH"
ENV_LOG_LEVEL = "SAYKIT_LOG_LEVEL"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return `base` updated with `override`, merging nested sections."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_yaml_with_inheritance(
    path: Path, _chain: tuple[Path, ...] = ()
) -> dict[str, Any]:
    """Read a saykit YAML file, resolving its 'extends' chain.

    The file named by 'extends' is resolved relative to `path` and merged
    underneath it.

    Raises:
        FileNotFoundError: If a file in the chain does not exist
        ValueError: If the chain extends itself
    """
    resolved = path.resolve()
    if resolved in _chain:
        names = " -> ".join(p.name for p in (*_chain, resolved))
        raise ValueError(f"Config inheritance cycle: {names}")
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text()) or {}
    parent = data.pop("extends", None)
    if parent is None:
        return data
    base = load_yaml_with_inheritance(path.parent / parent, (*_chain, resolved))
    return deep_merge(base, data)


def dict_to_config(data: dict[str, Any]) -> SayConfig:
    """Convert raw dict to typed SayConfig dataclass."""
    root = data.get("saykit", {}) or {}

    def safe_get(key: str) -> dict[str, Any]:
        value = root.get(key, {})
        return value if value is not None else {}

    return SayConfig(
        say=SayToolConfig(**safe_get("say")),
        logging=LoggingConfig(**safe_get("logging")),
    )


def apply_env_overrides(config: SayConfig, environ: Mapping[str, str]) -> SayConfig:
    """Override config values from environment variables."""
    if environ.get(ENV_LAUNCH_PATH):
        config.say.launch_path = environ[ENV_LAUNCH_PATH]
    if environ.get(ENV_LOG_LEVEL):
        config.logging.level = environ[ENV_LOG_LEVEL]
    return config


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def load(self, path: Path) -> SayConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed SayConfig
        """
        return dict_to_config(load_yaml_with_inheritance(path))


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> SayConfig:
    """Load saykit configuration.

    Args:
        path: Path to a YAML config file. Defaults are used if None.
        environ: Environment to read overrides from (default: os.environ)

    Returns:
        Parsed SayConfig

    Examples:
        >>> config = load_config()
        >>> config = load_config(path="/path/to/saykit.yaml")
    """
    config = YAMLConfigLoader().load(Path(path)) if path is not None else SayConfig()
    return apply_env_overrides(config, os.environ if environ is None else environ)


__all__ = [
    "ENV_LAUNCH_PATH",
    "ENV_LOG_LEVEL",
    "YAMLConfigLoader",
    "apply_env_overrides",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
