"""Dependency tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edge:
    """Why a parent links to a child: the build configuration that does it.

    Not related to DOT edges; ``to`` is the child's ``full_name``.
    """

    full_name: str
    to: str


@dataclass
class ImageRepoNode:
    """One image repository in a dependency tree.

    ``children`` holds at most one node per repository; ``edges`` keeps
    one entry per triggering build configuration, so several edges may
    point at the same child.
    """

    full_name: str
    tags: list[str] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    children: list[ImageRepoNode] = field(default_factory=list)

    def find_child(self, full_name: str) -> ImageRepoNode | None:
        for child in self.children:
            if child.full_name == full_name:
                return child
        return None

    def __str__(self) -> str:
        # Parenthesized tree syntax: name(child(grandchild))(child2)
        return self.full_name + "".join(f"({child})" for child in self.children)
