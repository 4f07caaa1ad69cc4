"""Error taxonomy for build dependency computation.

Every error aborts the tree (or batch) being computed; nothing here is
retried because all inputs are already in memory.
"""

from __future__ import annotations


class BuildChainError(Exception):
    """Base class for all buildchain errors."""


class MalformedReferenceError(BuildChainError):
    """A repository identity, image stream tag, or pull spec could not be parsed."""

    def __init__(self, reference: str, reason: str) -> None:
        super().__init__(f"malformed reference {reference!r}: {reason}")
        self.reference = reference
        self.reason = reason


class UnresolvableSelectionError(BuildChainError):
    """The requested repository or tag is not known."""


class EmptyCatalogError(BuildChainError):
    """No repository survived selection."""

    def __init__(self) -> None:
        super().__init__("no image repository available for building its dependency tree")


class DotValidationError(BuildChainError):
    """Rendered DOT output failed to parse under the DOT grammar."""


class CycleError(BuildChainError):
    """Build triggers form a loop.

    ``path`` lists the matching keys from the first occurrence of the
    repeated key through the repeat itself.
    """

    def __init__(self, path: list[str]) -> None:
        super().__init__("build trigger cycle detected: " + " -> ".join(path))
        self.path = path


class DepthLimitExceededError(BuildChainError):
    """Trigger chain is deeper than the configured limit."""

    def __init__(self, key: str, max_depth: int) -> None:
        super().__init__(f"dependency chain below {key} exceeds max depth {max_depth}")
        self.key = key
        self.max_depth = max_depth


class DocumentError(BuildChainError):
    """An input document could not be decoded into build records."""
