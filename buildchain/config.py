"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from buildchain.models.config import BuildChainConfig, BuilderConfig, LogConfig, OutputConfig

OUTPUT_FORMATS = ("json", "dot", "ast")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"BUILDCHAIN_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    val = int(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def validate_output_format(value: str) -> str:
    if value.lower() not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output format: {value}. Must be one of {OUTPUT_FORMATS}")
    return value.lower()


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> BuildChainConfig:
    """Load configuration from BUILDCHAIN_* environment variables."""
    return BuildChainConfig(
        namespace=_env("NAMESPACE", "default") or "default",
        builder=BuilderConfig(
            # Python's default recursion limit is 1000 frames
            max_depth=_env_int("MAX_DEPTH", 256, min_val=1, max_val=900),
        ),
        output=OutputConfig(
            format=validate_output_format(_env("OUTPUT", "json")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "warning")),
        ),
    )
