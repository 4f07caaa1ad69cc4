"""Dependency tree construction.

``build_tree`` walks build configurations transitively: every build whose
trigger watches ``repository:tag`` produces a child, and the child's own
dependents are computed the same way. Children reached through several
tags or configurations are merged into one node.

Triggers are indexed by their matching key once per call, so each level
of the walk is a dict lookup instead of a scan over every configuration.
The current path is tracked so that trigger loops raise ``CycleError``
rather than recursing forever.
"""

from __future__ import annotations

from collections.abc import Sequence

from buildchain.errors import CycleError, DepthLimitExceededError
from buildchain.models.buildconfig import BuildConfig
from buildchain.models.tree import Edge, ImageRepoNode
from buildchain.observability.logging import get_logger
from buildchain.reference import (
    DEFAULT_TAG,
    join,
    matching_key,
    parse_docker_image_reference,
    split,
    split_image_stream_tag,
)

_log = get_logger("graph.builder")

DEFAULT_MAX_DEPTH = 256


def resolve_output(cfg: BuildConfig) -> tuple[str, str, str]:
    """Return ``(namespace, name, tag)`` of the image a build produces.

    An explicit ``to`` reference wins when it has a name; otherwise the
    docker image reference is parsed and the configuration's namespace
    is used. Raises MalformedReferenceError for an unparseable reference.
    """
    output = cfg.output
    if output.to is not None and output.to.name:
        return output.to.namespace or cfg.namespace, output.to.name, output.tag or DEFAULT_TAG
    ref = parse_docker_image_reference(output.docker_image_reference)
    return cfg.namespace, ref.name, ref.tag or DEFAULT_TAG


def _index_triggers(configs: Sequence[BuildConfig]) -> dict[str, list[BuildConfig]]:
    # One entry per matching (configuration, trigger) pair, in input order.
    index: dict[str, list[BuildConfig]] = {}
    for cfg in configs:
        for trigger in cfg.triggers:
            source = cfg.trigger_source(trigger)
            if source is None or not source.is_mutable:
                continue
            name, tag = split_image_stream_tag(source.name)
            key = matching_key(source.namespace or cfg.namespace, name, tag)
            index.setdefault(key, []).append(cfg)
    return index


def build_tree(
    repository: str,
    tag: str,
    configs: Sequence[BuildConfig],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ImageRepoNode:
    """Build the dependency tree rooted at ``repository:tag``.

    Args:
        repository: ``namespace/name`` of the root image repository.
        tag:        Root tag.
        configs:    Every build configuration to consider.
        max_depth:  Longest trigger chain allowed below the root.

    Returns:
        The root node. A root without dependents has no children.

    Raises:
        MalformedReferenceError: an identity or output reference is unparseable.
        CycleError:              triggers loop back onto the current path.
        DepthLimitExceededError: the chain is longer than ``max_depth``.
    """
    index = _index_triggers(configs)
    return _build(repository, tag, index, [], max_depth)


def _build(
    repository: str,
    tag: str,
    index: dict[str, list[BuildConfig]],
    path: list[str],
    max_depth: int,
) -> ImageRepoNode:
    namespace, name = split(repository)
    key = matching_key(namespace, name, tag)
    if key in path:
        cycle = path[path.index(key) :] + [key]
        _log.warning("cycle_detected", path=cycle)
        raise CycleError(cycle)
    if len(path) > max_depth:
        raise DepthLimitExceededError(path[0], max_depth)

    root = ImageRepoNode(full_name=repository, tags=[tag])
    path.append(key)
    for cfg in index.get(key, []):
        child_namespace, child_name, child_tag = resolve_output(cfg)
        _log.debug("trigger_matched", parent=key, buildconfig=cfg.full_name, output=f"{child_name}:{child_tag}")

        child = _build(join(child_namespace, child_name), child_tag, index, path, max_depth)
        root.edges.append(Edge(full_name=cfg.full_name, to=child.full_name))

        # A child reached via more than one tag appears once; only the
        # first subtree survives and later tags are appended to it.
        existing = root.find_child(child.full_name)
        if existing is not None:
            existing.tags.extend(child.tags)
            continue
        root.children.append(child)
    path.pop()
    return root
