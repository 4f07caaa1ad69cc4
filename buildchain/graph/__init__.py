"""Build dependency graph construction and rendering.

Submodules:
    catalog  -- repositories whose tags trigger builds.
    builder  -- recursive dependency tree construction.
    render   -- JSON, parenthesized tree, and DOT output.
"""

from buildchain.graph.builder import build_tree, resolve_output
from buildchain.graph.catalog import collect_watched_repos
from buildchain.graph.render import DotIdentifierAllocator, to_ast, to_dot, to_json, tree_from_json, tree_size

__all__ = [
    "DotIdentifierAllocator",
    "build_tree",
    "collect_watched_repos",
    "resolve_output",
    "to_ast",
    "to_dot",
    "to_json",
    "tree_from_json",
    "tree_size",
]
