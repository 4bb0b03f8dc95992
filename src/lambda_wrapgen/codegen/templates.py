"""Wrapper source templates.

Rendering is a pure function of the runtime kind and the parsed handler
reference. Output is byte-for-byte stable: lines are joined with ``\\n``
and there is no trailing newline.
"""

from __future__ import annotations

from typing import Optional

from lambda_wrapgen.codegen.exceptions import UnsupportedRuntimeError
from lambda_wrapgen.codegen.handler_parser import parse_handler_reference
from lambda_wrapgen.models.enums import RuntimeKind
from lambda_wrapgen.models.handler import (
    HandlerDescriptor,
    ParsedReference,
    RenderedWrapper,
)

PYTHON_WRAPPER_IMPORT = "from datadog_lambda.wrapper import datadog_lambda_wrapper"
NODE_WRAPPER_MODULE = "datadog-lambda-js"
TS_SUPPRESSION_HEADER = ("/* tslint:disable */", "/* eslint-disable */")


def _render_python(ref: ParsedReference) -> list[str]:
    method = ref.method_name
    return [
        PYTHON_WRAPPER_IMPORT,
        f"from {ref.python_module} import {method} as {method}_impl",
        f"{method} = datadog_lambda_wrapper({method}_impl)",
    ]


def _render_node(ref: ParsedReference) -> list[str]:
    method = ref.method_name
    return [
        f'const {{ datadog }} = require("{NODE_WRAPPER_MODULE}");',
        f'const original = require("../{ref.module_path}");',
        f"module.exports.{method} = datadog(original.{method});",
    ]


def _render_node_ts(ref: ParsedReference) -> list[str]:
    method = ref.method_name
    return [
        *TS_SUPPRESSION_HEADER,
        f'const {{ datadog }} = require("{NODE_WRAPPER_MODULE}") as any;',
        f'import * as original from "../{ref.module_path}";',
        f"export const {method} = datadog(original.{method});",
    ]


_RENDERERS = {
    RuntimeKind.PYTHON: _render_python,
    RuntimeKind.NODE: _render_node,
    RuntimeKind.NODE_TS: _render_node_ts,
}


def render_wrapper(kind: RuntimeKind, ref: ParsedReference) -> RenderedWrapper:
    """Render the wrapper source for *ref* in the template for *kind*.

    Raises:
        UnsupportedRuntimeError: If *kind* is not a :class:`RuntimeKind`.
    """
    renderer = _RENDERERS.get(kind) if isinstance(kind, RuntimeKind) else None
    if renderer is None:
        raise UnsupportedRuntimeError(kind)
    return RenderedWrapper(
        text="\n".join(renderer(ref)),
        entrypoint_method=ref.method_name,
    )


def get_wrapper_text(descriptor: HandlerDescriptor) -> Optional[RenderedWrapper]:
    """Parse and render *descriptor*, or return ``None`` if its reference is malformed."""
    ref = parse_handler_reference(descriptor.handler_reference)
    if ref is None:
        return None
    return render_wrapper(descriptor.runtime_kind, ref)
