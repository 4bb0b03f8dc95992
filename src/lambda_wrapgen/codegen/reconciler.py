"""One full wrapper generation pass.

:func:`write_handlers` wipes the output directory, writes one wrapper per
well-formed handler descriptor, and records the written files in the
caller's packaging manifest.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from lambda_wrapgen.codegen.directory import DEFAULT_OUTPUT_DIR, WrapperDirectory
from lambda_wrapgen.codegen.filesystem import FileSystemProtocol
from lambda_wrapgen.codegen.handler_parser import parse_handler_reference
from lambda_wrapgen.codegen.manifest_updater import update_manifest
from lambda_wrapgen.codegen.templates import render_wrapper
from lambda_wrapgen.models.handler import HandlerDescriptor, WrittenWrapper
from lambda_wrapgen.models.manifest import PackagingManifest

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """What a :func:`write_handlers` pass produced."""

    written: list[WrittenWrapper] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    removed_count: int = 0

    @property
    def written_paths(self) -> list[str]:
        return [w.path for w in self.written]


def write_handlers(
    manifest: PackagingManifest,
    descriptors: Sequence[HandlerDescriptor],
    *,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    project_dir: Path | None = None,
    fs: FileSystemProtocol | None = None,
) -> ReconcileResult:
    """Regenerate every wrapper and update *manifest*.

    The output directory is created if needed and emptied before any
    wrapper is written. Descriptors are processed in order; those whose
    handler reference cannot be parsed are skipped and logged. After the
    pass ``manifest.include`` holds its previous entries, then each written
    wrapper path, then the output directory glob.

    Args:
        manifest: Caller-owned packaging manifest, mutated in place.
        descriptors: Handlers to wrap.
        output_dir: Output directory relative to *project_dir*.
        project_dir: Project root. Defaults to the current directory.
        fs: Filesystem implementation. Defaults to the local filesystem.

    Returns:
        A :class:`ReconcileResult` describing written and skipped handlers.

    Raises:
        OutputDirectoryError: If any filesystem operation fails.
    """
    directory = WrapperDirectory(output_dir, project_dir=project_dir, fs=fs)
    result = ReconcileResult()

    directory.ensure_exists()
    result.removed_count = directory.wipe()

    for descriptor in descriptors:
        ref = parse_handler_reference(descriptor.handler_reference)
        if ref is None:
            logger.warning(
                "Skipping '%s': handler '%s' is not of the form <module>.<method>",
                descriptor.name,
                descriptor.handler_reference,
            )
            result.skipped.append(descriptor.name)
            continue

        kind = directory.resolve_runtime(descriptor.runtime_kind, ref)
        rendered = render_wrapper(kind, ref)
        path = directory.write_wrapper(descriptor.name, kind, rendered.text)
        logger.info("Wrote wrapper %s", path)

        result.written.append(
            WrittenWrapper(
                name=descriptor.name,
                runtime_kind=kind,
                path=path,
                handler=f"{directory.output_dir}/{descriptor.name}.{rendered.entrypoint_method}",
            )
        )

    update_manifest(manifest, result.written_paths, directory.include_glob)
    return result


def cleanup_handlers(
    *,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    project_dir: Path | None = None,
    fs: FileSystemProtocol | None = None,
) -> bool:
    """Remove the output directory. Returns ``False`` if there was nothing to remove."""
    directory = WrapperDirectory(output_dir, project_dir=project_dir, fs=fs)
    return directory.remove()
