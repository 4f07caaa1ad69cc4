"""Build-chain orchestration.

Pipeline per invocation: scope configurations → select roots → build one
tree per (repository, tag) → render each non-trivial tree. Any error
aborts the whole batch; there is no partial output.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from buildchain.graph.builder import DEFAULT_MAX_DEPTH, build_tree
from buildchain.graph.render import to_ast, to_dot, to_json, tree_size
from buildchain.models.buildconfig import BuildConfig
from buildchain.models.tree import ImageRepoNode
from buildchain.observability.logging import get_logger

_log = get_logger("app")


# Renderers take the tree and the tag it was built for.
RENDERERS: dict[str, Callable[[ImageRepoNode, str], str]] = {
    "json": lambda tree, _tag: to_json(tree),
    "dot": lambda tree, tag: to_dot(tree, root_tag=tag),
    "ast": lambda tree, _tag: to_ast(tree),
}


@dataclass
class ChainResult:
    """Outcome for one root: rendered text, or None when it has no dependents."""

    repository: str
    tag: str
    tree: ImageRepoNode
    output: str | None = None

    @property
    def has_dependencies(self) -> bool:
        return self.output is not None


def scope_configs(configs: Sequence[BuildConfig], namespace: str, all_namespaces: bool) -> list[BuildConfig]:
    """Keep only configurations in ``namespace`` unless every namespace is wanted."""
    if all_namespaces:
        return list(configs)
    return [cfg for cfg in configs if cfg.namespace == namespace]


def run_build_chain(
    configs: Sequence[BuildConfig],
    roots: Mapping[str, Sequence[str]],
    output_format: str = "json",
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[ChainResult]:
    """Build and render a dependency tree for every selected root.

    Raises ValueError for an unknown ``output_format`` before any tree is
    built; errors from building or rendering propagate unchanged.
    """
    try:
        render = RENDERERS[output_format]
    except KeyError:
        raise ValueError(f"wrong output format specified: {output_format}") from None

    results = []
    for repo, tags in roots.items():
        for tag in tags:
            _log.info("checking_dependencies", repository=repo, tag=tag)
            tree = build_tree(repo, tag, configs, max_depth=max_depth)
            if tree_size(tree) < 2:
                _log.info("no_dependencies", repository=repo, tag=tag)
                results.append(ChainResult(repository=repo, tag=tag, tree=tree))
                continue
            results.append(ChainResult(repository=repo, tag=tag, tree=tree, output=render(tree, tag)))
    return results
