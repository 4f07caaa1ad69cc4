"""Decode Kubernetes-style JSON documents into build records.

Accepts what ``oc get bc -o json`` and ``oc get is -o json`` print: a
``List`` with ``items``, a single object, or a bare JSON array. Objects
of other kinds are skipped.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import IO, Any

from buildchain.errors import DocumentError
from buildchain.models.buildconfig import (
    BuildConfig,
    BuildOutput,
    BuildTrigger,
    ImageChangeTrigger,
    ObjectReference,
    SourceKind,
    TriggerType,
)
from buildchain.observability.logging import get_logger
from buildchain.reference import DEFAULT_TAG, join, split_image_stream_tag

_log = get_logger("loader")

_STRATEGY_KEYS = ("sourceStrategy", "dockerStrategy", "customStrategy")


def read_objects(stream: IO[str]) -> list[dict[str, Any]]:
    """Read a JSON document and flatten it into a list of API objects."""
    try:
        document = json.load(stream)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"invalid JSON in {getattr(stream, 'name', '<stream>')}: {exc}") from exc
    return _flatten(document)


def _flatten(document: Any) -> list[dict[str, Any]]:
    if isinstance(document, list):
        items = document
    elif isinstance(document, dict) and isinstance(document.get("items"), list):
        items = document["items"]
    elif isinstance(document, dict):
        items = [document]
    else:
        raise DocumentError(f"expected a JSON object or array, got {type(document).__name__}")
    for item in items:
        if not isinstance(item, dict):
            raise DocumentError(f"expected API objects, got {type(item).__name__}")
    return items


def _metadata(obj: dict[str, Any], default_namespace: str) -> tuple[str, str]:
    meta = obj.get("metadata") or {}
    name = meta.get("name")
    if not name:
        raise DocumentError(f"{obj.get('kind', 'object')} without metadata.name")
    return meta.get("namespace") or default_namespace, name


def _reference(data: dict[str, Any] | None) -> ObjectReference | None:
    if not data:
        return None
    return ObjectReference(
        kind=data.get("kind", ""),
        name=data.get("name", ""),
        namespace=data.get("namespace", ""),
    )


def _trigger(data: dict[str, Any]) -> BuildTrigger | None:
    try:
        trigger_type = TriggerType(data.get("type", ""))
    except ValueError:
        _log.debug("unknown_trigger_type", type=data.get("type"))
        return None
    image_change = None
    if trigger_type == TriggerType.IMAGE_CHANGE:
        image_change = ImageChangeTrigger(from_ref=_reference((data.get("imageChange") or {}).get("from")))
    return BuildTrigger(type=trigger_type, image_change=image_change)


def _output(spec: dict[str, Any]) -> BuildOutput:
    output = spec.get("output") or {}
    to = _reference(output.get("to"))
    if to is None:
        return BuildOutput(docker_image_reference=output.get("dockerImageReference", ""))
    if to.kind == SourceKind.DOCKER_IMAGE:
        return BuildOutput(docker_image_reference=to.name)
    if to.kind == SourceKind.IMAGE_STREAM_TAG:
        name, tag = split_image_stream_tag(to.name)
        return BuildOutput(to=ObjectReference(kind=to.kind, name=name, namespace=to.namespace), tag=tag)
    return BuildOutput(to=to, tag=output.get("tag") or DEFAULT_TAG)


def parse_build_config(obj: dict[str, Any], default_namespace: str) -> BuildConfig:
    """Decode one BuildConfig object."""
    namespace, name = _metadata(obj, default_namespace)
    spec = obj.get("spec") or {}
    strategy = spec.get("strategy") or {}
    strategy_from = None
    for key in _STRATEGY_KEYS:
        if strategy.get(key):
            strategy_from = _reference(strategy[key].get("from"))
            break
    triggers = [t for t in (_trigger(data) for data in spec.get("triggers") or []) if t is not None]
    return BuildConfig(
        namespace=namespace,
        name=name,
        triggers=triggers,
        strategy_from=strategy_from,
        output=_output(spec),
    )


def load_build_configs(objects: Iterable[dict[str, Any]], default_namespace: str) -> list[BuildConfig]:
    configs = []
    for obj in objects:
        if obj.get("kind", "BuildConfig") != "BuildConfig":
            _log.debug("skipping_object", kind=obj.get("kind"))
            continue
        configs.append(parse_build_config(obj, default_namespace))
    _log.info("buildconfigs_loaded", count=len(configs))
    return configs


def load_image_stream_tags(objects: Iterable[dict[str, Any]], default_namespace: str) -> dict[str, list[str]]:
    """Map ``namespace/name`` of each ImageStream to its known tags."""
    streams: dict[str, list[str]] = {}
    for obj in objects:
        if obj.get("kind", "ImageStream") != "ImageStream":
            _log.debug("skipping_object", kind=obj.get("kind"))
            continue
        namespace, name = _metadata(obj, default_namespace)
        status_tags = [t.get("tag", "") for t in (obj.get("status") or {}).get("tags") or []]
        spec_tags = [t.get("name", "") for t in (obj.get("spec") or {}).get("tags") or []]
        tags = streams.setdefault(join(namespace, name), [])
        for tag in status_tags or spec_tags:
            if tag and tag not in tags:
                tags.append(tag)
    return streams
