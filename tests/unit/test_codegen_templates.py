"""Unit tests for lambda_wrapgen.codegen.templates.

Rendered wrappers are compared byte for byte.
"""

from __future__ import annotations

import pytest

from lambda_wrapgen.codegen.exceptions import UnsupportedRuntimeError
from lambda_wrapgen.codegen.handler_parser import parse_handler_reference
from lambda_wrapgen.codegen.templates import get_wrapper_text, render_wrapper
from lambda_wrapgen.models.enums import RuntimeKind
from lambda_wrapgen.models.handler import HandlerDescriptor


def _descriptor(kind: RuntimeKind, handler: str) -> HandlerDescriptor:
    return HandlerDescriptor(name="my-lambda", runtime_kind=kind, handler_reference=handler)


class TestGetWrapperText:
    def test_python_template(self) -> None:
        rendered = get_wrapper_text(_descriptor(RuntimeKind.PYTHON, "mydir/func.myhandler"))
        assert rendered is not None
        assert rendered.entrypoint_method == "myhandler"
        assert rendered.text == (
            "from datadog_lambda.wrapper import datadog_lambda_wrapper\n"
            "from mydir.func import myhandler as myhandler_impl\n"
            "myhandler = datadog_lambda_wrapper(myhandler_impl)"
        )

    def test_node_template(self) -> None:
        rendered = get_wrapper_text(_descriptor(RuntimeKind.NODE, "my.myhandler"))
        assert rendered is not None
        assert rendered.entrypoint_method == "myhandler"
        assert rendered.text == (
            'const { datadog } = require("datadog-lambda-js");\n'
            'const original = require("../my");\n'
            "module.exports.myhandler = datadog(original.myhandler);"
        )

    def test_node_ts_template(self) -> None:
        rendered = get_wrapper_text(_descriptor(RuntimeKind.NODE_TS, "my.myhandler"))
        assert rendered is not None
        assert rendered.entrypoint_method == "myhandler"
        assert rendered.text == (
            "/* tslint:disable */\n"
            "/* eslint-disable */\n"
            'const { datadog } = require("datadog-lambda-js") as any;\n'
            'import * as original from "../my";\n'
            "export const myhandler = datadog(original.myhandler);"
        )

    def test_node_keeps_slash_path(self) -> None:
        rendered = get_wrapper_text(_descriptor(RuntimeKind.NODE, "src/handlers/api.get"))
        assert rendered is not None
        assert 'require("../src/handlers/api")' in rendered.text

    def test_malformed_reference_returns_none(self) -> None:
        assert get_wrapper_text(_descriptor(RuntimeKind.PYTHON, "mydir-myhandler")) is None


class TestRenderWrapper:
    def test_deterministic(self) -> None:
        ref = parse_handler_reference("a/b.c")
        assert ref is not None
        first = render_wrapper(RuntimeKind.PYTHON, ref)
        second = render_wrapper(RuntimeKind.PYTHON, ref)
        assert first == second

    def test_no_trailing_newline(self) -> None:
        ref = parse_handler_reference("a.c")
        assert ref is not None
        for kind in RuntimeKind:
            assert not render_wrapper(kind, ref).text.endswith("\n")

    @pytest.mark.parametrize("kind", ["RUBY", "PYTHON", None])
    def test_unknown_runtime_fails_fast(self, kind: object) -> None:
        ref = parse_handler_reference("a.c")
        assert ref is not None
        with pytest.raises(UnsupportedRuntimeError):
            render_wrapper(kind, ref)  # type: ignore[arg-type]
