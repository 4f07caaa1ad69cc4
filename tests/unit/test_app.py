"""Tests for build-chain orchestration."""

from __future__ import annotations

import json

import pytest

from buildchain.app import run_build_chain, scope_configs
from buildchain.errors import CycleError

from .conftest import make_config


def test_scope_configs_filters_namespace() -> None:
    configs = [make_config("a", namespace="ns"), make_config("b", namespace="other")]
    assert [c.name for c in scope_configs(configs, "ns", all_namespaces=False)] == ["a"]
    assert [c.name for c in scope_configs(configs, "ns", all_namespaces=True)] == ["a", "b"]


def test_results_per_root_and_tag() -> None:
    configs = [make_config("bc", source="myapp:latest", output="built")]
    results = run_build_chain(configs, {"ns/myapp": ["latest", "v2"]})

    assert [(r.repository, r.tag, r.has_dependencies) for r in results] == [
        ("ns/myapp", "latest", True),
        ("ns/myapp", "v2", False),
    ]
    assert json.loads(results[0].output or "")["children"][0]["fullname"] == "ns/built"
    assert results[1].output is None


@pytest.mark.parametrize(
    ("output_format", "check"),
    [
        ("ast", lambda out: out == "ns/myapp(ns/built)"),
        ("dot", lambda out: out.lstrip().startswith("digraph") and "ns/myapp:latest" in out),
        ("json", lambda out: json.loads(out)["fullname"] == "ns/myapp"),
    ],
)
def test_output_formats(output_format: str, check) -> None:
    configs = [make_config("bc", source="myapp:latest", output="built")]
    (result,) = run_build_chain(configs, {"ns/myapp": ["latest"]}, output_format=output_format)
    assert check(result.output)


def test_dot_root_label_uses_selected_tag() -> None:
    configs = [
        make_config("bc1", source="myapp:latest", output="built"),
        make_config("bc2", source="myapp:v2", output="built"),
    ]
    results = run_build_chain(configs, {"ns/myapp": ["latest", "v2"]}, output_format="dot")
    assert "ns/myapp:latest" in (results[0].output or "")
    assert "ns/myapp:v2" in (results[1].output or "")


def test_unknown_format_fails_before_building() -> None:
    with pytest.raises(ValueError, match="wrong output format"):
        run_build_chain([], {"ns/myapp": ["latest"]}, output_format="yaml")


def test_errors_abort_the_batch() -> None:
    configs = [make_config("aa", source="a:latest", output="a")]
    with pytest.raises(CycleError):
        run_build_chain(configs, {"ns/b": ["latest"], "ns/a": ["latest"]})
