"""Core data structures for buildchain."""

from buildchain.models.buildconfig import (
    BuildConfig,
    BuildOutput,
    BuildTrigger,
    ImageChangeTrigger,
    ObjectReference,
    SourceKind,
    TriggerType,
)
from buildchain.models.config import BuildChainConfig
from buildchain.models.tree import Edge, ImageRepoNode

__all__ = [
    "BuildChainConfig",
    "BuildConfig",
    "BuildOutput",
    "BuildTrigger",
    "Edge",
    "ImageChangeTrigger",
    "ImageRepoNode",
    "ObjectReference",
    "SourceKind",
    "TriggerType",
]
