"""Data models for handler descriptors, rendered wrappers and packaging manifests."""

from lambda_wrapgen.models.enums import RuntimeKind
from lambda_wrapgen.models.handler import (
    HandlerDescriptor,
    ParsedReference,
    RenderedWrapper,
    WrittenWrapper,
)
from lambda_wrapgen.models.manifest import PackagingManifest

__all__ = [
    "HandlerDescriptor",
    "PackagingManifest",
    "ParsedReference",
    "RenderedWrapper",
    "RuntimeKind",
    "WrittenWrapper",
]
