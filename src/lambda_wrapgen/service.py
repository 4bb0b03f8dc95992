"""Adapter between a serverless-style service definition and the generator.

The service definition is the already-parsed ``serverless.yml`` mapping.
This module discovers which functions can be wrapped, reads and stores the
service's packaging section, and points each function at its wrapper once
the wrappers have been written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from lambda_wrapgen.codegen.exceptions import ServiceDefinitionError
from lambda_wrapgen.codegen.reconciler import ReconcileResult
from lambda_wrapgen.models.enums import RuntimeKind
from lambda_wrapgen.models.handler import HandlerDescriptor
from lambda_wrapgen.models.manifest import PackagingManifest

logger = logging.getLogger(__name__)

RUNTIME_FAMILIES: dict[str, RuntimeKind] = {
    "nodejs": RuntimeKind.NODE,
    "python": RuntimeKind.PYTHON,
}


def runtime_kind_for(runtime: Optional[str]) -> Optional[RuntimeKind]:
    """Map a provider runtime string such as ``python3.8`` to a :class:`RuntimeKind`."""
    if not runtime:
        return None
    for prefix, kind in RUNTIME_FAMILIES.items():
        if runtime.startswith(prefix):
            return kind
    return None


def _functions(service: dict[str, Any]) -> dict[str, Any]:
    functions = service.get("functions") or {}
    if not isinstance(functions, dict):
        raise ServiceDefinitionError("functions", "expected a mapping of function names")
    return functions


def find_handlers(
    service: dict[str, Any],
    output_dir: Optional[str] = None,
) -> list[HandlerDescriptor]:
    """Build handler descriptors for every wrappable function in *service*.

    A function's own ``runtime`` wins over ``provider.runtime``. Functions
    without a handler or with a runtime outside the supported families are
    skipped.

    Raises:
        ServiceDefinitionError: If a handler already points into
            *output_dir*. The wipe would delete the wrapper it refers to.
    """
    provider = service.get("provider") or {}
    default_runtime = provider.get("runtime") if isinstance(provider, dict) else None
    wrapped_prefix = f"{output_dir.rstrip('/')}/" if output_dir else None

    descriptors: list[HandlerDescriptor] = []
    for name, definition in _functions(service).items():
        definition = definition or {}
        if not isinstance(definition, dict):
            raise ServiceDefinitionError(f"functions.{name}", "expected a mapping")
        runtime = definition.get("runtime") or default_runtime
        kind = runtime_kind_for(runtime)
        handler = definition.get("handler")

        if kind is None:
            logger.debug("Skipping '%s': unsupported runtime %r", name, runtime)
            continue
        if not handler:
            logger.debug("Skipping '%s': no handler configured", name)
            continue
        if wrapped_prefix and str(handler).startswith(wrapped_prefix):
            raise ServiceDefinitionError(
                f"functions.{name}.handler",
                f"'{handler}' already points at a generated wrapper",
            )

        descriptors.append(
            HandlerDescriptor(name=str(name), runtime_kind=kind, handler_reference=str(handler))
        )
    return descriptors


def get_packaging_manifest(service: dict[str, Any]) -> PackagingManifest:
    """Return the service-level ``package`` section as a manifest."""
    try:
        return PackagingManifest.model_validate(service.get("package") or {})
    except ValidationError as exc:
        raise ServiceDefinitionError("package", str(exc)) from exc


def store_packaging_manifest(service: dict[str, Any], manifest: PackagingManifest) -> None:
    """Write *manifest* back into the service's ``package`` section."""
    service["package"] = manifest.model_dump(exclude_none=True)


def apply_handler_rewrites(service: dict[str, Any], result: ReconcileResult) -> None:
    """Point each wrapped function at its wrapper.

    Sets ``functions.<name>.handler`` to the wrapper entrypoint and adds
    the wrapper file to the function-level ``package.include`` so
    individually packaged functions ship it too.
    """
    functions = _functions(service)
    for written in result.written:
        definition = functions.get(written.name)
        if definition is None:
            continue
        if not isinstance(definition, dict):
            raise ServiceDefinitionError(f"functions.{written.name}", "expected a mapping")

        package = definition.get("package") or {}
        if not isinstance(package, dict):
            raise ServiceDefinitionError(f"functions.{written.name}.package", "expected a mapping")
        include = package.get("include") or []
        if not isinstance(include, list):
            raise ServiceDefinitionError(
                f"functions.{written.name}.package.include", "expected a list"
            )

        definition["handler"] = written.handler
        if written.path not in include:
            include.append(written.path)
        package["include"] = include
        definition["package"] = package


def load_service(path: Path) -> dict[str, Any]:
    """Read a YAML service definition."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ServiceDefinitionError(str(path), str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ServiceDefinitionError(str(path), f"invalid YAML: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ServiceDefinitionError(str(path), "top level must be a mapping")
    return data


def dump_service(service: dict[str, Any], path: Path) -> None:
    """Write *service* back to *path* as YAML, preserving key order."""
    path.write_text(yaml.safe_dump(service, sort_keys=False), encoding="utf-8")
