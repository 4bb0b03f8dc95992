"""Wrapper generation -- parsing, rendering, directory and manifest reconciliation.

- :func:`parse_handler_reference` -- Handler string parsing
- :func:`render_wrapper` -- Per-runtime wrapper templates
- :class:`WrapperDirectory` -- Output directory lifecycle
- :func:`update_manifest` -- Packaging include list updates
- :func:`write_handlers` -- Full reconciliation pass
"""

from lambda_wrapgen.codegen.directory import (
    DEFAULT_OUTPUT_DIR,
    WrapperDirectory,
    extension_for,
)
from lambda_wrapgen.codegen.exceptions import (
    OutputDirectoryError,
    ServiceDefinitionError,
    UnsupportedRuntimeError,
    WrapperGenerationError,
)
from lambda_wrapgen.codegen.filesystem import (
    FileSystemProtocol,
    InMemoryFileSystem,
    LocalFileSystem,
)
from lambda_wrapgen.codegen.handler_parser import parse_handler_reference
from lambda_wrapgen.codegen.manifest_updater import update_manifest
from lambda_wrapgen.codegen.reconciler import (
    ReconcileResult,
    cleanup_handlers,
    write_handlers,
)
from lambda_wrapgen.codegen.templates import get_wrapper_text, render_wrapper

__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "FileSystemProtocol",
    "InMemoryFileSystem",
    "LocalFileSystem",
    "OutputDirectoryError",
    "ReconcileResult",
    "ServiceDefinitionError",
    "UnsupportedRuntimeError",
    "WrapperDirectory",
    "WrapperGenerationError",
    "cleanup_handlers",
    "extension_for",
    "get_wrapper_text",
    "parse_handler_reference",
    "render_wrapper",
    "update_manifest",
    "write_handlers",
]
