"""Repository identity and image reference parsing.

A repository identity is ``namespace/name``. The matching key used to
pair build triggers with tree nodes is ``namespace/name:tag``.
"""

from __future__ import annotations

from dataclasses import dataclass

from buildchain.errors import MalformedReferenceError

DEFAULT_TAG = "latest"

# Namespace docker assumes for single-segment names on a registry
DOCKER_DEFAULT_NAMESPACE = "library"


def join(namespace: str, name: str) -> str:
    return f"{namespace}/{name}"


def split(full_name: str) -> tuple[str, str]:
    """Split ``namespace/name`` into its two parts."""
    parts = full_name.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise MalformedReferenceError(full_name, "expected namespace/name")
    return parts[0], parts[1]


def split_image_stream_tag(reference: str) -> tuple[str, str]:
    """Split an ImageStreamTag name ``name:tag`` into ``(name, tag)``."""
    name, sep, tag = reference.partition(":")
    if not sep or not name or not tag or ":" in tag:
        raise MalformedReferenceError(reference, "expected name:tag")
    return name, tag


def parse_tag(argument: str) -> tuple[str, str]:
    """Parse a user supplied ``name[:tag]``; the tag defaults to ``latest``."""
    name, sep, tag = argument.partition(":")
    if not name or ":" in tag or (sep and not tag):
        raise MalformedReferenceError(argument, "expected name or name:tag")
    return name, tag or DEFAULT_TAG


def matching_key(namespace: str, name: str, tag: str) -> str:
    return f"{namespace}/{name}:{tag}"


@dataclass(frozen=True)
class DockerImageReference:
    """Parsed docker pull spec."""

    registry: str = ""
    namespace: str = ""
    name: str = ""
    tag: str = ""
    id: str = ""


def _is_registry(segment: str) -> bool:
    return "." in segment or ":" in segment or segment == "localhost"


def parse_docker_image_reference(spec: str) -> DockerImageReference:
    """Parse ``[registry/][namespace/]name[:tag][@id]``.

    Raises MalformedReferenceError for empty specs, empty segments, or more
    than three path segments. A missing tag (without an id) becomes
    ``latest``.
    """
    if not spec:
        raise MalformedReferenceError(spec, "empty pull spec")

    stream, _, image_id = spec.partition("@")
    tag = ""
    slash = stream.rfind("/")
    colon = stream.rfind(":")
    if colon > slash:
        stream, tag = stream[:colon], stream[colon + 1 :]
        if not tag:
            raise MalformedReferenceError(spec, "empty tag")

    segments = stream.split("/")
    if any(not segment for segment in segments):
        raise MalformedReferenceError(spec, "empty path segment")

    registry = namespace = ""
    if len(segments) == 1:
        name = segments[0]
    elif len(segments) == 2 and _is_registry(segments[0]):
        registry, name = segments
        namespace = DOCKER_DEFAULT_NAMESPACE
    elif len(segments) == 2:
        namespace, name = segments
    elif len(segments) == 3:
        registry, namespace, name = segments
    else:
        raise MalformedReferenceError(spec, "must be one to three segments separated by slashes")

    if not tag and not image_id:
        tag = DEFAULT_TAG
    return DockerImageReference(registry=registry, namespace=namespace, name=name, tag=tag, id=image_id)
