"""Tests for BUILDCHAIN_* environment configuration."""

from __future__ import annotations

import pytest

from buildchain.config import load_config, validate_output_format


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("NAMESPACE", "OUTPUT", "MAX_DEPTH", "LOG_LEVEL"):
        monkeypatch.delenv(f"BUILDCHAIN_{key}", raising=False)
    config = load_config()
    assert config.namespace == "default"
    assert config.output.format == "json"
    assert config.builder.max_depth == 256
    assert config.log.level == "warning"


def test_values_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUILDCHAIN_NAMESPACE", "testing")
    monkeypatch.setenv("BUILDCHAIN_OUTPUT", "DOT")
    monkeypatch.setenv("BUILDCHAIN_MAX_DEPTH", "12")
    monkeypatch.setenv("BUILDCHAIN_LOG_LEVEL", "Debug")
    config = load_config()
    assert config.namespace == "testing"
    assert config.output.format == "dot"
    assert config.builder.max_depth == 12
    assert config.log.level == "debug"


@pytest.mark.parametrize(("raw", "expected"), [("0", 1), ("5000", 900)])
def test_max_depth_is_clamped(monkeypatch: pytest.MonkeyPatch, raw: str, expected: int) -> None:
    monkeypatch.setenv("BUILDCHAIN_MAX_DEPTH", raw)
    assert load_config().builder.max_depth == expected


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BUILDCHAIN_LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="Invalid log level"):
        load_config()


def test_invalid_output_format() -> None:
    with pytest.raises(ValueError, match="Invalid output format"):
        validate_output_format("yaml")
