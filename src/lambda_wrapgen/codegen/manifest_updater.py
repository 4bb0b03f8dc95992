"""Packaging manifest updates."""

from __future__ import annotations

from collections.abc import Iterable

from lambda_wrapgen.models.manifest import PackagingManifest


def update_manifest(
    manifest: PackagingManifest,
    written_paths: Iterable[str],
    include_glob: str,
) -> PackagingManifest:
    """Add generated wrapper paths and the directory glob to ``manifest.include``.

    The include list is created when absent and otherwise mutated in
    place. Existing entries keep their order. Each written path is
    appended unless it is already listed, and *include_glob* always ends
    up exactly once, as the last entry.

    This deliberately departs from a pure append: an earlier copy of
    *include_glob* is removed and already listed wrapper paths are not
    repeated, so running the pass twice on the same manifest leaves it
    unchanged. No other existing entry is moved or dropped.

    Args:
        manifest: Caller-owned manifest.
        written_paths: Wrapper paths in descriptor order.
        include_glob: Glob covering the whole output directory.

    Returns:
        The same *manifest*, for chaining.
    """
    if manifest.include is None:
        manifest.include = []
    include = manifest.include

    include[:] = [entry for entry in include if entry != include_glob]
    for path in written_paths:
        if path not in include:
            include.append(path)
    include.append(include_glob)
    return manifest
