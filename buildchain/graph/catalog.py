"""Repository catalog: which repository tags trigger builds."""

from __future__ import annotations

from collections.abc import Iterable

from buildchain.models.buildconfig import BuildConfig
from buildchain.observability.logging import get_logger
from buildchain.reference import join, split_image_stream_tag

_log = get_logger("graph.catalog")


def collect_watched_repos(configs: Iterable[BuildConfig]) -> dict[str, list[str]]:
    """Map each watched repository to the tags whose updates trigger a build.

    Only ImageStreamTag sources count: ImageStreamImage and DockerImage
    references never change, so they never trigger builds. Tags are kept
    unique per repository in first-seen order.
    """
    repos: dict[str, list[str]] = {}
    seen: set[tuple[str, str]] = set()
    for cfg in configs:
        _log.debug("scanning_buildconfig", buildconfig=cfg.full_name)
        for trigger in cfg.triggers:
            source = cfg.trigger_source(trigger)
            if source is None:
                continue
            if not source.is_mutable:
                _log.debug("skipping_immutable_source", buildconfig=cfg.full_name, kind=source.kind)
                continue
            name, tag = split_image_stream_tag(source.name)
            repo = join(source.namespace or cfg.namespace, name)
            if (repo, tag) in seen:
                continue
            seen.add((repo, tag))
            repos.setdefault(repo, []).append(tag)
            _log.debug("watched_tag_found", repository=repo, tag=tag)
    return repos
