"""Shared fixtures for buildchain integration tests.

Provides a realistic ``oc get bc -o json`` / ``oc get is -o json`` pair
covering the cases the pipeline has to handle: cross-namespace sources,
combined docker output references, pinned (immutable) sources, fan-out
to one repository via two configurations, and config-change-only builds.
"""

from __future__ import annotations

import io
import json
from typing import Any

import pytest

from buildchain.loader import load_build_configs, load_image_stream_tags, read_objects
from buildchain.models.buildconfig import BuildConfig

# ---------------------------------------------------------------------------
# Object factories
# ---------------------------------------------------------------------------


def make_buildconfig(
    name: str,
    namespace: str,
    source: dict[str, Any] | None,
    output: dict[str, Any],
    trigger_types: tuple[str, ...] = ("ImageChange",),
) -> dict[str, Any]:
    """Create a BuildConfig object as the API server returns it."""
    triggers: list[dict[str, Any]] = []
    for trigger_type in trigger_types:
        trigger: dict[str, Any] = {"type": trigger_type}
        if trigger_type == "ImageChange":
            trigger["imageChange"] = {}
        triggers.append(trigger)
    strategy: dict[str, Any] = {"type": "Source", "sourceStrategy": {}}
    if source is not None:
        strategy["sourceStrategy"]["from"] = source
    return {
        "kind": "BuildConfig",
        "apiVersion": "v1",
        "metadata": {"name": name, "namespace": namespace},
        "spec": {"triggers": triggers, "strategy": strategy, "output": output},
    }


def make_image_stream(name: str, namespace: str, tags: list[str]) -> dict[str, Any]:
    return {
        "kind": "ImageStream",
        "apiVersion": "v1",
        "metadata": {"name": name, "namespace": namespace},
        "status": {"tags": [{"tag": tag, "items": []} for tag in tags]},
    }


def _ist(name: str, namespace: str = "") -> dict[str, Any]:
    ref = {"kind": "ImageStreamTag", "name": name}
    if namespace:
        ref["namespace"] = namespace
    return ref


BUILDCONFIG_LIST: dict[str, Any] = {
    "kind": "List",
    "apiVersion": "v1",
    "items": [
        # openshift/ruby-20-centos7:latest -> myproject/origin-ruby-sample:latest
        make_buildconfig(
            "ruby-sample-build",
            "myproject",
            _ist("ruby-20-centos7:latest", "openshift"),
            {"to": _ist("origin-ruby-sample:latest")},
        ),
        # Same source, second configuration targets the same repository with another tag
        make_buildconfig(
            "ruby-sample-build-debug",
            "myproject",
            _ist("ruby-20-centos7:latest", "openshift"),
            {"to": _ist("origin-ruby-sample:debug")},
        ),
        # myproject/origin-ruby-sample:latest -> myproject/frontend:prod via a pull spec
        make_buildconfig(
            "frontend-build",
            "myproject",
            _ist("origin-ruby-sample:latest"),
            {"to": {"kind": "DockerImage", "name": "registry.example.com:5000/myproject/frontend:prod"}},
        ),
        # Pinned digest: never triggers
        make_buildconfig(
            "pinned-build",
            "myproject",
            {"kind": "ImageStreamImage", "name": "ruby-20-centos7@sha256:0123abcd", "namespace": "openshift"},
            {"to": _ist("pinned:latest")},
        ),
        # Config change only: never triggers on image updates
        make_buildconfig(
            "manual-build",
            "myproject",
            _ist("ruby-20-centos7:latest", "openshift"),
            {"to": _ist("manual:latest")},
            trigger_types=("ConfigChange", "GitHub"),
        ),
        # Another namespace, independent chain
        make_buildconfig(
            "python-app-build",
            "team-b",
            _ist("python-33-centos7:latest", "openshift"),
            {"to": _ist("python-app:latest")},
        ),
    ],
}

IMAGE_STREAM_LIST: dict[str, Any] = {
    "kind": "List",
    "items": [
        make_image_stream("ruby-20-centos7", "openshift", ["latest", "2.0"]),
        make_image_stream("python-33-centos7", "openshift", ["latest"]),
        make_image_stream("origin-ruby-sample", "myproject", ["latest", "debug"]),
    ],
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def buildconfigs() -> list[BuildConfig]:
    objects = read_objects(io.StringIO(json.dumps(BUILDCONFIG_LIST)))
    return load_build_configs(objects, "default")


@pytest.fixture()
def image_stream_tags() -> dict[str, list[str]]:
    objects = read_objects(io.StringIO(json.dumps(IMAGE_STREAM_LIST)))
    return load_image_stream_tags(objects, "default")
