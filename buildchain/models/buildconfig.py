"""Build configuration records consumed by the graph builders.

These mirror the subset of the BuildConfig API object that matters for
trigger analysis. They are produced by the loader (or by tests) and are
never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class SourceKind(StrEnum):
    """Kind of image reference a trigger or output points at."""

    IMAGE_STREAM_TAG = "ImageStreamTag"  # mutable, triggers rebuilds
    IMAGE_STREAM_IMAGE = "ImageStreamImage"  # pinned digest
    DOCKER_IMAGE = "DockerImage"  # external pull spec
    IMAGE_STREAM = "ImageStream"


class TriggerType(StrEnum):
    """Build trigger types."""

    IMAGE_CHANGE = "ImageChange"
    CONFIG_CHANGE = "ConfigChange"
    GITHUB = "GitHub"
    GENERIC = "Generic"


@dataclass(frozen=True)
class ObjectReference:
    """Reference to an image; ``name`` is ``name:tag`` for ImageStreamTag."""

    kind: str
    name: str
    namespace: str = ""

    @property
    def is_mutable(self) -> bool:
        return self.kind == SourceKind.IMAGE_STREAM_TAG


@dataclass(frozen=True)
class ImageChangeTrigger:
    """Image change trigger; ``from_ref`` overrides the strategy image."""

    from_ref: ObjectReference | None = None


@dataclass(frozen=True)
class BuildTrigger:
    type: TriggerType
    image_change: ImageChangeTrigger | None = None


@dataclass(frozen=True)
class BuildOutput:
    """Where a build pushes its result.

    Either ``to`` (plus ``tag``) or ``docker_image_reference`` is set.
    """

    to: ObjectReference | None = None
    tag: str = ""
    docker_image_reference: str = ""


@dataclass(frozen=True)
class BuildConfig:
    """A build configuration: triggers, strategy source image, and output."""

    namespace: str
    name: str
    triggers: list[BuildTrigger] = field(default_factory=list)
    strategy_from: ObjectReference | None = None
    output: BuildOutput = field(default_factory=BuildOutput)

    @property
    def full_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    def trigger_source(self, trigger: BuildTrigger) -> ObjectReference | None:
        """Return the image a trigger watches, or None if it watches nothing.

        Only image change triggers watch an image. A trigger without its
        own ``from`` reference watches the strategy's source image.
        """
        if trigger.type != TriggerType.IMAGE_CHANGE or trigger.image_change is None:
            return None
        source = trigger.image_change.from_ref or self.strategy_from
        if source is None or not source.name:
            return None
        return source
