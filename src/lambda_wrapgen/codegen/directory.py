"""Lifecycle of the generated wrapper directory.

The directory is owned entirely by this package: every pass wipes it
before writing, so wrappers for removed functions never linger.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from lambda_wrapgen.codegen.exceptions import (
    OutputDirectoryError,
    UnsupportedRuntimeError,
)
from lambda_wrapgen.codegen.filesystem import FileSystemProtocol, LocalFileSystem
from lambda_wrapgen.models.enums import RuntimeKind
from lambda_wrapgen.models.handler import ParsedReference

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "datadog_handlers"

_EXTENSIONS = {
    RuntimeKind.PYTHON: "py",
    RuntimeKind.NODE: "js",
    RuntimeKind.NODE_TS: "ts",
}


def extension_for(kind: RuntimeKind) -> str:
    """Return the wrapper file extension for *kind*, without the dot."""
    ext = _EXTENSIONS.get(kind) if isinstance(kind, RuntimeKind) else None
    if ext is None:
        raise UnsupportedRuntimeError(kind)
    return ext


class WrapperDirectory:
    """Create, wipe, probe and write into the wrapper output directory.

    Args:
        output_dir: Directory name relative to the project root. This is
            also the prefix used for manifest entries.
        project_dir: Project root. Defaults to the current directory.
        fs: Filesystem implementation. Defaults to :class:`LocalFileSystem`.

    Every filesystem failure is re-raised as :class:`OutputDirectoryError`.

    Raises:
        OutputDirectoryError: If *output_dir* is empty, absolute, contains
            ``..`` or does not resolve strictly below *project_dir*. The
            directory is wiped on every pass, so it must never be the
            project root or lie outside it.
    """

    def __init__(
        self,
        output_dir: str | Path = DEFAULT_OUTPUT_DIR,
        project_dir: Path | None = None,
        fs: FileSystemProtocol | None = None,
    ) -> None:
        self._output_dir = PurePosixPath(Path(output_dir).as_posix())
        self._project_dir = Path(project_dir) if project_dir is not None else Path(".")
        self._fs = fs or LocalFileSystem()
        self._check_inside_project()

    def _check_inside_project(self) -> None:
        out = self._output_dir
        if out.is_absolute() or Path(str(out)).is_absolute():
            raise OutputDirectoryError(str(out), "must be relative to the project directory")
        if ".." in out.parts:
            raise OutputDirectoryError(str(out), "must not contain '..'")
        if not out.parts or out == PurePosixPath("."):
            raise OutputDirectoryError(str(out), "must not be the project directory itself")

        root = self._project_dir.resolve()
        target = (root / out).resolve()
        if target == root or root not in target.parents:
            raise OutputDirectoryError(
                str(out), f"must resolve to a directory inside {root}"
            )

    @property
    def output_dir(self) -> str:
        """Output directory as written into the manifest."""
        return str(self._output_dir)

    @property
    def path(self) -> Path:
        """Location of the output directory on the filesystem."""
        return self._project_dir / self._output_dir

    @property
    def include_glob(self) -> str:
        """Glob covering everything in the output directory."""
        return f"{self._output_dir}/**"

    def ensure_exists(self) -> None:
        try:
            self._fs.make_dir(self.path)
        except OSError as exc:
            raise OutputDirectoryError(str(self.path), str(exc)) from exc

    def wipe(self) -> int:
        """Remove every entry in the output directory.

        Returns:
            The number of entries removed.
        """
        try:
            entries = self._fs.list_entries(self.path)
        except OSError as exc:
            raise OutputDirectoryError(str(self.path), str(exc)) from exc

        for entry in entries:
            try:
                self._fs.remove_entry(entry)
            except OSError as exc:
                raise OutputDirectoryError(str(entry), str(exc)) from exc

        logger.debug("Wiped %d entries from %s", len(entries), self.path)
        return len(entries)

    def remove(self) -> bool:
        """Delete the output directory itself. Returns ``False`` if it was absent."""
        try:
            if not self._fs.exists(self.path):
                return False
            self._fs.remove_entry(self.path)
        except OSError as exc:
            raise OutputDirectoryError(str(self.path), str(exc)) from exc
        logger.debug("Removed %s", self.path)
        return True

    def resolve_runtime(self, kind: RuntimeKind, ref: ParsedReference) -> RuntimeKind:
        """Promote NODE to NODE_TS when the handler's source is TypeScript.

        The probe looks for ``<module_path>.ts`` relative to the project root.
        """
        if kind is not RuntimeKind.NODE:
            return kind

        probe = self._project_dir / f"{ref.module_path}.ts"
        try:
            is_ts = self._fs.exists(probe)
        except OSError as exc:
            raise OutputDirectoryError(str(probe), str(exc)) from exc

        if is_ts:
            logger.debug("Found %s, generating a TypeScript wrapper", probe)
            return RuntimeKind.NODE_TS
        return kind

    def write_wrapper(self, name: str, kind: RuntimeKind, text: str) -> str:
        """Write *text* to ``<output_dir>/<name>.<ext>``.

        Returns:
            The written path relative to the project root, POSIX style.
        """
        filename = f"{name}.{extension_for(kind)}"
        target = self.path / filename
        try:
            self._fs.write_file(target, text)
        except OSError as exc:
            raise OutputDirectoryError(str(target), str(exc)) from exc
        return str(self._output_dir / filename)
