"""Shared factories for buildchain unit tests."""

from __future__ import annotations

from buildchain.models.buildconfig import (
    BuildConfig,
    BuildOutput,
    BuildTrigger,
    ImageChangeTrigger,
    ObjectReference,
    SourceKind,
    TriggerType,
)


def image_change(from_ref: ObjectReference | None = None) -> BuildTrigger:
    return BuildTrigger(type=TriggerType.IMAGE_CHANGE, image_change=ImageChangeTrigger(from_ref=from_ref))


def make_config(
    name: str,
    source: str = "myapp:latest",
    output: str | None = "built",
    output_tag: str = "latest",
    namespace: str = "ns",
    source_namespace: str = "",
    source_kind: str = SourceKind.IMAGE_STREAM_TAG,
    output_namespace: str = "",
    docker_image_reference: str = "",
    triggers: list[BuildTrigger] | None = None,
) -> BuildConfig:
    """Build a BuildConfig whose single image change trigger watches the strategy image.

    Pass ``output=None`` to use ``docker_image_reference`` as the output.
    """
    to = None
    if output is not None:
        to = ObjectReference(kind=SourceKind.IMAGE_STREAM, name=output, namespace=output_namespace)
    return BuildConfig(
        namespace=namespace,
        name=name,
        triggers=[image_change()] if triggers is None else triggers,
        strategy_from=ObjectReference(kind=source_kind, name=source, namespace=source_namespace),
        output=BuildOutput(to=to, tag=output_tag if to else "", docker_image_reference=docker_image_reference),
    )
