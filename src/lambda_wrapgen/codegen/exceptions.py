"""Custom exceptions for the wrapper generation pipeline."""

from __future__ import annotations


class WrapperGenerationError(Exception):
    """Base exception for all wrapper generation errors."""

    pass


class OutputDirectoryError(WrapperGenerationError):
    """Raised when a filesystem operation on the output directory fails.

    Covers directory creation, listing, entry removal, existence probes
    and wrapper writes. The reconciliation pass is aborted.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Output directory error at '{path}': {reason}")


class UnsupportedRuntimeError(WrapperGenerationError):
    """Raised when a runtime outside :class:`RuntimeKind` reaches the renderer."""

    def __init__(self, runtime: object) -> None:
        self.runtime = runtime
        super().__init__(f"Unsupported runtime kind: {runtime!r}")


class ServiceDefinitionError(WrapperGenerationError):
    """Raised when a service definition cannot be loaded or is malformed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid service definition '{source}': {reason}")
