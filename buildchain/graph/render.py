"""Dependency tree renderers.

Three independent formats:
    to_json -- structural dump that round-trips through tree_from_json.
    to_ast  -- parenthesized tree of repository names, tags omitted.
    to_dot  -- Graphviz DOT digraph, validated by re-parsing it.
"""

from __future__ import annotations

import json
import re
from collections import Counter
from typing import Any

import pydot

from buildchain.errors import DocumentError, DotValidationError
from buildchain.models.tree import Edge, ImageRepoNode
from buildchain.observability.logging import get_logger
from buildchain.reference import split

_log = get_logger("graph.render")

__all__ = [
    "DotIdentifierAllocator",
    "sanitize_dot_id",
    "to_ast",
    "to_dict",
    "to_dot",
    "to_json",
    "tree_from_dict",
    "tree_from_json",
    "tree_size",
]

_DOT_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})
_RE_DOT_ILLEGAL = re.compile(r"[^A-Za-z0-9_]")


def tree_size(node: ImageRepoNode) -> int:
    """Count the nodes in a tree, root included."""
    return 1 + sum(tree_size(child) for child in node.children)


# ---------------------------------------------------------------------------
# Structural (JSON) dump
# ---------------------------------------------------------------------------


def to_dict(node: ImageRepoNode) -> dict[str, Any]:
    data: dict[str, Any] = {"fullname": node.full_name}
    if node.tags:
        data["tags"] = list(node.tags)
    if node.edges:
        data["edges"] = [{"fullname": edge.full_name, "to": edge.to} for edge in node.edges]
    if node.children:
        data["children"] = [to_dict(child) for child in node.children]
    return data


def to_json(node: ImageRepoNode) -> str:
    return json.dumps(to_dict(node), indent="\t")


def tree_from_dict(data: Any) -> ImageRepoNode:
    """Rebuild a tree from the output of ``to_dict``."""
    if not isinstance(data, dict) or not isinstance(data.get("fullname"), str):
        raise DocumentError(f"tree node must be an object with a string 'fullname': {data!r}")
    try:
        edges = [Edge(full_name=e["fullname"], to=e["to"]) for e in data.get("edges", [])]
    except (KeyError, TypeError) as exc:
        raise DocumentError(f"malformed edges on {data['fullname']}: {exc}") from exc
    return ImageRepoNode(
        full_name=data["fullname"],
        tags=list(data.get("tags", [])),
        edges=edges,
        children=[tree_from_dict(child) for child in data.get("children", [])],
    )


def tree_from_json(text: str) -> ImageRepoNode:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"invalid tree JSON: {exc}") from exc
    return tree_from_dict(data)


# ---------------------------------------------------------------------------
# Parenthesized tree syntax
# ---------------------------------------------------------------------------


def to_ast(node: ImageRepoNode) -> str:
    return str(node)


# ---------------------------------------------------------------------------
# DOT
# ---------------------------------------------------------------------------


def sanitize_dot_id(name: str) -> str:
    """Turn ``name`` into a bare DOT ID (letters, digits, underscores)."""
    ident = _RE_DOT_ILLEGAL.sub("_", name) or "_"
    if ident[0].isdigit():
        ident = "_" + ident
    if ident.lower() in _DOT_KEYWORDS:
        ident += "_"
    return ident


class DotIdentifierAllocator:
    """Hands out DOT node IDs for repositories within a single render.

    IDs derive from the repository's short name. Two repositories whose
    names sanitize alike (``my-app`` and ``my_app``, or the same name in
    two namespaces) get numbered suffixes so they stay distinct nodes.
    """

    def __init__(self) -> None:
        self._by_repo: dict[str, str] = {}
        self._taken: set[str] = set()

    def identifier(self, full_name: str) -> str:
        ident = self._by_repo.get(full_name)
        if ident is not None:
            return ident
        _, name = split(full_name)
        base = sanitize_dot_id(name)
        ident = base
        suffix = 2
        while ident in self._taken:
            ident = f"{base}_{suffix}"
            suffix += 1
        self._taken.add(ident)
        self._by_repo[full_name] = ident
        return ident


def _collect_tags(node: ImageRepoNode, tags: dict[str, list[str]]) -> None:
    known = tags.setdefault(node.full_name, [])
    for tag in node.tags:
        if tag not in known:
            known.append(tag)
    for child in node.children:
        _collect_tags(child, tags)


def _add_tree(
    graph: pydot.Dot,
    node: ImageRepoNode,
    ids: DotIdentifierAllocator,
    emitted: Counter[tuple[str, str, str]],
) -> None:
    node_id = ids.identifier(node.full_name)
    wanted: Counter[tuple[str, str, str]] = Counter()
    for child in node.children:
        child_id = ids.identifier(child.full_name)
        for edge in node.edges:
            if edge.to == child.full_name:
                wanted[(node_id, child_id, edge.full_name)] += 1

    # A repository reached from several parents is walked once per
    # occurrence; only edges not already drawn are added.
    for key, count in wanted.items():
        for _ in range(count - emitted[key]):
            graph.add_edge(pydot.Edge(key[0], key[1], label=key[2]))
        emitted[key] = max(count, emitted[key])

    for child in node.children:
        _add_tree(graph, child, ids, emitted)


def to_dot(root: ImageRepoNode, root_tag: str | None = None) -> str:
    """Render a tree as a DOT digraph.

    The root's label includes ``root_tag`` (by default its first tag);
    other labels are ``namespace/name``. Parallel edges are allowed, one
    per triggering build configuration.

    Raises:
        DotValidationError: the generated text does not parse as DOT.
    """
    if root_tag is None and root.tags:
        root_tag = root.tags[0]

    _, root_name = split(root.full_name)
    graph = pydot.Dot(sanitize_dot_id(root_name), graph_type="digraph", strict=False)
    ids = DotIdentifierAllocator()

    tags: dict[str, list[str]] = {}
    _collect_tags(root, tags)
    for full_name, repo_tags in tags.items():
        label = f"{full_name}:{root_tag}" if full_name == root.full_name and root_tag else full_name
        graph.add_node(
            pydot.Node(
                ids.identifier(full_name),
                label=label,
                tooltip="tags: " + ", ".join(repo_tags),
            )
        )
    _add_tree(graph, root, ids, Counter())

    output = graph.to_string()
    _validate_dot(output)
    return output


def _validate_dot(output: str) -> None:
    try:
        parsed = pydot.graph_from_dot_data(output)
    except Exception as exc:
        raise DotValidationError(f"cannot parse DOT output: {exc}") from exc
    if not parsed or len(parsed) != 1:
        raise DotValidationError("cannot parse DOT output")
    _log.debug("dot_validated", graph=parsed[0].get_name(), nodes=len(parsed[0].get_nodes()))
