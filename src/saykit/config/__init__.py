"""Configuration module for saykit.

This module provides the configuration dataclasses; see `loader` for
reading them from YAML files and the environment.
"""

from dataclasses import dataclass, field

from ..process import DEFAULT_LAUNCH_PATH


@dataclass
class SayToolConfig:
    """Speech tool configuration."""

    launch_path: str = DEFAULT_LAUNCH_PATH
    voice: str | None = None
    wait: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class SayConfig:
    """Main saykit configuration."""

    say: SayToolConfig = field(default_factory=SayToolConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


__all__ = [
    "LoggingConfig",
    "SayConfig",
    "SayToolConfig",
]
