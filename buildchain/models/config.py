"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BuilderConfig:
    """Dependency tree builder configuration."""

    max_depth: int = 256


@dataclass
class OutputConfig:
    """Rendering configuration."""

    format: str = "json"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"


@dataclass
class BuildChainConfig:
    """Top-level buildchain configuration."""

    namespace: str = "default"
    builder: BuilderConfig = field(default_factory=BuilderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)
