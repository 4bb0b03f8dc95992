"""Pydantic models describing handlers and the wrappers generated for them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from lambda_wrapgen.models.enums import RuntimeKind


class HandlerDescriptor(BaseModel):
    """One configured function that should be wrapped.

    Attributes:
        name: Function name, used as the wrapper's file name.
        runtime_kind: Runtime the wrapper is rendered for.
        handler_reference: Raw handler string, e.g. ``mydir/func.myhandler``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Function name")
    runtime_kind: RuntimeKind = Field(..., description="Target runtime")
    handler_reference: str = Field(..., description="Raw handler string")


class ParsedReference(BaseModel):
    """A handler string split into module path and method name."""

    model_config = ConfigDict(frozen=True)

    module_path: str = Field(..., min_length=1, description="Module path as written")
    method_name: str = Field(..., min_length=1, description="Exported method name")

    @property
    def python_module(self) -> str:
        """Dotted import path for Python wrappers."""
        return self.module_path.replace("/", ".")


class RenderedWrapper(BaseModel):
    """Source text of a wrapper and the method name it exports."""

    model_config = ConfigDict(frozen=True)

    text: str
    entrypoint_method: str


class WrittenWrapper(BaseModel):
    """Outcome of writing one wrapper during a reconciliation pass.

    Attributes:
        name: The descriptor name the wrapper was generated for.
        runtime_kind: Runtime actually rendered (NODE may become NODE_TS).
        path: Output path relative to the project root, POSIX separators.
        handler: Handler string pointing the function at its wrapper.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    runtime_kind: RuntimeKind
    path: str
    handler: str
