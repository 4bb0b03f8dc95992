"""Unit tests for lambda_wrapgen.codegen.reconciler.

Runs full generation passes against a real temporary directory and
against the in-memory filesystem.
"""

from __future__ import annotations

import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from lambda_wrapgen.codegen.exceptions import OutputDirectoryError
from lambda_wrapgen.codegen.filesystem import InMemoryFileSystem
from lambda_wrapgen.codegen.reconciler import cleanup_handlers, write_handlers
from lambda_wrapgen.models.enums import RuntimeKind
from lambda_wrapgen.models.handler import HandlerDescriptor
from lambda_wrapgen.models.manifest import PackagingManifest

OUT = "datadog_handlers"


def _handler(name: str, kind: RuntimeKind, reference: str) -> HandlerDescriptor:
    return HandlerDescriptor(name=name, runtime_kind=kind, handler_reference=reference)


class TestWriteHandlers:
    def test_adds_created_files_to_include(self, tmp_path: Path) -> None:
        manifest = PackagingManifest()
        write_handlers(
            manifest,
            [_handler("my-lambda", RuntimeKind.PYTHON, "mydir/func.myhandler")],
            project_dir=tmp_path,
        )
        assert manifest.include == [f"{OUT}/my-lambda.py", f"{OUT}/**"]

    def test_wrappers_are_readable_by_group_and_others(self, tmp_path: Path) -> None:
        write_handlers(
            PackagingManifest(),
            [
                _handler("py", RuntimeKind.PYTHON, "mydir/func.myhandler"),
                _handler("js", RuntimeKind.NODE, "my.myhandler"),
            ],
            project_dir=tmp_path,
        )
        for name in ("py.py", "js.js"):
            mode = stat.S_IMODE((tmp_path / OUT / name).stat().st_mode)
            assert mode & 0o044 == 0o044

    def test_refuses_project_root_as_output_dir(self, tmp_path: Path) -> None:
        keep = tmp_path / "serverless.yml"
        keep.write_text("service: demo\n")
        with pytest.raises(OutputDirectoryError):
            write_handlers(PackagingManifest(), [], output_dir=".", project_dir=tmp_path)
        assert keep.exists()

    def test_adds_glob_with_no_handlers(self, tmp_path: Path) -> None:
        manifest = PackagingManifest(include=[])
        write_handlers(manifest, [], project_dir=tmp_path)
        assert manifest.include == [f"{OUT}/**"]

    def test_cleans_up_existing_directory(self, tmp_path: Path) -> None:
        stale = tmp_path / OUT / "unused-file"
        stale.parent.mkdir()
        stale.write_text("some-value")

        write_handlers(PackagingManifest(), [], project_dir=tmp_path)

        assert not stale.exists()
        assert (tmp_path / OUT).is_dir()

    def test_ignores_poorly_formatted_handlers(self, tmp_path: Path) -> None:
        manifest = PackagingManifest()
        result = write_handlers(
            manifest,
            [_handler("my-lambda", RuntimeKind.PYTHON, "mydir-myhandler")],
            project_dir=tmp_path,
        )
        assert not (tmp_path / OUT / "my-lambda.py").exists()
        assert result.skipped == ["my-lambda"]
        assert manifest.include == [f"{OUT}/**"]

    def test_bad_handler_does_not_block_others(self, tmp_path: Path) -> None:
        manifest = PackagingManifest()
        write_handlers(
            manifest,
            [
                _handler("first", RuntimeKind.PYTHON, "a.b"),
                _handler("broken", RuntimeKind.PYTHON, "nodot"),
                _handler("third", RuntimeKind.NODE, "c.d"),
            ],
            project_dir=tmp_path,
        )
        assert manifest.include == [f"{OUT}/first.py", f"{OUT}/third.js", f"{OUT}/**"]

    def test_creates_well_formatted_handlers(self, tmp_path: Path) -> None:
        write_handlers(
            PackagingManifest(),
            [_handler("my-lambda", RuntimeKind.PYTHON, "mydir.myhandler")],
            project_dir=tmp_path,
        )
        written = tmp_path / OUT / "my-lambda.py"
        assert written.read_text() == (
            "from datadog_lambda.wrapper import datadog_lambda_wrapper\n"
            "from mydir import myhandler as myhandler_impl\n"
            "myhandler = datadog_lambda_wrapper(myhandler_impl)"
        )

    def test_uses_typescript_when_handler_file_is_ts(self, tmp_path: Path) -> None:
        (tmp_path / "mylambda.ts").write_text("")
        manifest = PackagingManifest()
        result = write_handlers(
            manifest,
            [_handler("my-lambda", RuntimeKind.NODE, "mylambda.myhandler")],
            project_dir=tmp_path,
        )

        written = tmp_path / OUT / "my-lambda.ts"
        assert written.exists()
        assert written.read_text().startswith("/* tslint:disable */\n/* eslint-disable */\n")
        assert result.written[0].runtime_kind is RuntimeKind.NODE_TS
        assert manifest.include == [f"{OUT}/my-lambda.ts", f"{OUT}/**"]

    def test_node_without_ts_source_writes_js(self, tmp_path: Path) -> None:
        write_handlers(
            PackagingManifest(),
            [_handler("my-lambda", RuntimeKind.NODE, "mylambda.myhandler")],
            project_dir=tmp_path,
        )
        assert (tmp_path / OUT / "my-lambda.js").exists()
        assert not (tmp_path / OUT / "my-lambda.ts").exists()

    def test_result_carries_rewritten_handler(self, tmp_path: Path) -> None:
        result = write_handlers(
            PackagingManifest(),
            [_handler("my-lambda", RuntimeKind.PYTHON, "mydir/func.myhandler")],
            project_dir=tmp_path,
        )
        [written] = result.written
        assert written.handler == f"{OUT}/my-lambda.myhandler"
        assert written.path == f"{OUT}/my-lambda.py"

    def test_idempotent(self, tmp_path: Path) -> None:
        manifest = PackagingManifest()
        handlers = [
            _handler("a", RuntimeKind.PYTHON, "a.handler"),
            _handler("b", RuntimeKind.NODE, "b.handler"),
        ]

        write_handlers(manifest, handlers, project_dir=tmp_path)
        first = sorted(p.name for p in (tmp_path / OUT).iterdir())
        write_handlers(manifest, handlers, project_dir=tmp_path)
        second = sorted(p.name for p in (tmp_path / OUT).iterdir())

        assert first == second == ["a.py", "b.js"]
        assert manifest.include == [f"{OUT}/a.py", f"{OUT}/b.js", f"{OUT}/**"]

    def test_removed_handler_wrapper_disappears(self, tmp_path: Path) -> None:
        write_handlers(
            PackagingManifest(),
            [_handler("gone", RuntimeKind.PYTHON, "a.handler")],
            project_dir=tmp_path,
        )
        write_handlers(PackagingManifest(), [], project_dir=tmp_path)
        assert list((tmp_path / OUT).iterdir()) == []

    def test_write_failure_aborts(self, tmp_path: Path) -> None:
        manifest = PackagingManifest()
        with patch(
            "lambda_wrapgen.codegen.filesystem.LocalFileSystem.write_file",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(OutputDirectoryError, match="disk full"):
                write_handlers(
                    manifest,
                    [_handler("a", RuntimeKind.PYTHON, "a.handler")],
                    project_dir=tmp_path,
                )
        assert manifest.include is None


class TestWriteHandlersInMemory:
    def test_full_pass(self) -> None:
        fs = InMemoryFileSystem(
            files={
                f"{OUT}/unused-file": "some-value",
                "mylambda.ts": "",
            }
        )
        manifest = PackagingManifest()
        write_handlers(
            manifest,
            [
                _handler("py-fn", RuntimeKind.PYTHON, "mydir/func.myhandler"),
                _handler("ts-fn", RuntimeKind.NODE, "mylambda.myhandler"),
            ],
            fs=fs,
        )

        assert not fs.exists(Path(f"{OUT}/unused-file"))
        assert sorted(str(p) for p in fs.list_entries(Path(OUT))) == [
            f"{OUT}/py-fn.py",
            f"{OUT}/ts-fn.ts",
        ]
        assert fs.read_file(f"{OUT}/py-fn.py").startswith(
            "from datadog_lambda.wrapper import datadog_lambda_wrapper"
        )
        assert manifest.include == [f"{OUT}/py-fn.py", f"{OUT}/ts-fn.ts", f"{OUT}/**"]

    def test_wipe_happens_before_writes(self) -> None:
        fs = InMemoryFileSystem(files={f"{OUT}/a.py": "stale"})
        write_handlers(
            PackagingManifest(),
            [_handler("a", RuntimeKind.PYTHON, "a.handler")],
            fs=fs,
        )
        assert fs.read_file(f"{OUT}/a.py") != "stale"


class TestCleanupHandlers:
    def test_removes_directory(self, tmp_path: Path) -> None:
        write_handlers(
            PackagingManifest(),
            [_handler("a", RuntimeKind.PYTHON, "a.handler")],
            project_dir=tmp_path,
        )
        assert cleanup_handlers(project_dir=tmp_path) is True
        assert not (tmp_path / OUT).exists()

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert cleanup_handlers(project_dir=tmp_path) is False
