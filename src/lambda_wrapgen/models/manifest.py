"""Packaging manifest model."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PackagingManifest(BaseModel):
    """The deployment tool's packaging section.

    ``include`` stays ``None`` until something needs to add to it, so a
    manifest that never had an include list round-trips unchanged.
    """

    model_config = ConfigDict(extra="allow")

    include: Optional[list[str]] = Field(
        default=None,
        description="Paths and globs bundled into the deployment artifact",
    )
    exclude: Optional[list[str]] = Field(
        default=None,
        description="Paths and globs left out of the deployment artifact",
    )
