"""Filesystem capability boundary for the wrapper directory.

The reconciler only needs five operations, so it talks to a
:class:`FileSystemProtocol` instead of :mod:`os` directly. Two
implementations are provided: :class:`LocalFileSystem` for real builds
and :class:`InMemoryFileSystem` for tests.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path, PurePosixPath
from typing import Protocol

logger = logging.getLogger(__name__)

WRAPPER_FILE_MODE = 0o644


class FileSystemProtocol(Protocol):
    """Operations the wrapper directory needs from a filesystem."""

    def make_dir(self, path: Path) -> None: ...

    def list_entries(self, path: Path) -> list[Path]: ...

    def remove_entry(self, path: Path) -> None: ...

    def write_file(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...


class LocalFileSystem:
    """The real filesystem. Writes are atomic via temp-file rename."""

    def make_dir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def list_entries(self, path: Path) -> list[Path]:
        return sorted(Path(path).iterdir())

    def remove_entry(self, path: Path) -> None:
        """Remove a file, symlink or whole directory tree."""
        path = Path(path)
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()

    def write_file(self, path: Path, content: str) -> None:
        """Write *content* to *path* atomically.

        A temporary file is written next to the target and renamed over
        it only once the write has succeeded. The result has mode 0644,
        not the owner-only 0600 ``mkstemp`` creates. On failure the
        temporary file is removed and the error re-raised.
        """
        path = Path(path)
        fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            os.chmod(tmp_path, WRAPPER_FILE_MODE)
            os.replace(tmp_path, str(path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.debug("Temp file already gone: %s", tmp_path)
            raise

    def exists(self, path: Path) -> bool:
        return Path(path).exists()


class InMemoryFileSystem:
    """Dictionary-backed filesystem for exercising the reconciler in tests.

    Paths are normalised to :class:`~pathlib.PurePosixPath`. Parent
    directories are tracked explicitly, so writing into a directory that
    was never created raises :class:`FileNotFoundError` just like a real
    filesystem would.
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        dirs: list[str] | None = None,
    ) -> None:
        self.files: dict[PurePosixPath, str] = {}
        self.dirs: set[PurePosixPath] = {PurePosixPath(".")}
        for d in dirs or []:
            self.make_dir(Path(d))
        for p, content in (files or {}).items():
            key = self._key(p)
            self.make_dir(Path(str(key.parent)))
            self.files[key] = content

    @staticmethod
    def _key(path: Path | str) -> PurePosixPath:
        return PurePosixPath(Path(path).as_posix())

    def make_dir(self, path: Path) -> None:
        key = self._key(path)
        if key in self.files:
            raise FileExistsError(str(key))
        self.dirs.add(key)
        self.dirs.update(key.parents)

    def list_entries(self, path: Path) -> list[Path]:
        key = self._key(path)
        if key not in self.dirs:
            raise FileNotFoundError(str(key))
        children = {p for p in self.files if p.parent == key}
        children.update(d for d in self.dirs if d != key and d.parent == key)
        return [Path(str(c)) for c in sorted(children)]

    def remove_entry(self, path: Path) -> None:
        key = self._key(path)
        if key in self.files:
            del self.files[key]
            return
        if key not in self.dirs:
            raise FileNotFoundError(str(key))
        self.files = {p: c for p, c in self.files.items() if key not in p.parents}
        self.dirs = {d for d in self.dirs if d != key and key not in d.parents}

    def write_file(self, path: Path, content: str) -> None:
        key = self._key(path)
        if key.parent not in self.dirs:
            raise FileNotFoundError(str(key.parent))
        if key in self.dirs:
            raise IsADirectoryError(str(key))
        self.files[key] = content

    def exists(self, path: Path) -> bool:
        key = self._key(path)
        return key in self.files or key in self.dirs

    def read_file(self, path: Path | str) -> str:
        """Return the content of a stored file (test helper)."""
        return self.files[self._key(path)]
