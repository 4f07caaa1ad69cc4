"""Choose the (repository, tag) roots to compute trees for."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from buildchain.errors import EmptyCatalogError, UnresolvableSelectionError
from buildchain.graph.catalog import collect_watched_repos
from buildchain.models.buildconfig import BuildConfig
from buildchain.reference import join, parse_tag


def select_roots(
    configs: Sequence[BuildConfig],
    namespace: str,
    argument: str | None = None,
    image_stream_tags: Mapping[str, Sequence[str]] | None = None,
    all_tags: bool = False,
) -> dict[str, list[str]]:
    """Resolve the user's selection into ``{repository: [tags]}``.

    With ``argument`` (``name[:tag]``) the image stream must be listed in
    ``image_stream_tags``; the tag must be one of its tags unless
    ``all_tags`` asks for every tag. Without an argument, every repository
    watched by ``configs`` is selected.

    Raises:
        UnresolvableSelectionError: unknown image stream or tag.
        EmptyCatalogError:          nothing to compute.
    """
    if argument:
        name, tag = parse_tag(argument)
        repo = join(namespace, name)
        streams = image_stream_tags or {}
        if repo not in streams:
            raise UnresolvableSelectionError(f"image stream {repo} not found")
        known = list(streams[repo])
        if all_tags:
            repos = {repo: known} if known else {}
        elif tag not in known:
            raise UnresolvableSelectionError(f"no tag {tag} exists in {repo}")
        else:
            repos = {repo: [tag]}
    else:
        repos = collect_watched_repos(configs)

    if not repos:
        raise EmptyCatalogError()
    return repos
