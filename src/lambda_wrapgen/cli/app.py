"""wrapgen CLI application entry point.

Built with `Typer <https://typer.tiangolo.com/>`_ and
`Rich <https://rich.readthedocs.io/>`_.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from lambda_wrapgen.cli.config import WrapgenConfig, load_config
from lambda_wrapgen.cli.errors import error_handler
from lambda_wrapgen.cli.init_cmd import run_init
from lambda_wrapgen.cli.logging_setup import setup_logging
from lambda_wrapgen.codegen.reconciler import (
    ReconcileResult,
    cleanup_handlers,
    write_handlers,
)
from lambda_wrapgen.service import (
    apply_handler_rewrites,
    dump_service,
    find_handlers,
    get_packaging_manifest,
    load_service,
    store_packaging_manifest,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="wrapgen",
    help="wrapgen – generate Datadog instrumentation wrappers for serverless handlers.",
    add_completion=False,
    no_args_is_help=True,
)

_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from lambda_wrapgen import __version__

        _console.print(f"wrapgen {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) output.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration TOML file.",
    ),
) -> None:
    """Global options for wrapgen."""
    setup_logging("DEBUG" if verbose else "INFO")
    ctx.obj = {"verbose": verbose, "config_path": config}


def _load_app_config(ctx: typer.Context) -> WrapgenConfig:
    """Load config for a sub-command and re-apply its logging settings."""
    obj = ctx.obj or {}
    cfg = load_config(obj.get("config_path"))
    level = "DEBUG" if obj.get("verbose") else cfg.log_level
    setup_logging(level, cfg.log_file)
    return cfg


def _service_location(cfg: WrapgenConfig, service_file: Optional[Path]) -> tuple[Path, Path]:
    """Return the service file and the project root wrappers live under.

    The project root is always the service file's directory, for every command.
    """
    path = service_file or (cfg.project_dir / cfg.service_file)
    return path, path.resolve().parent


def _render_result(result: ReconcileResult) -> None:
    table = Table(title="Generated wrappers")
    table.add_column("Function")
    table.add_column("Runtime")
    table.add_column("Wrapper")
    table.add_column("Handler")
    for written in result.written:
        table.add_row(written.name, written.runtime_kind.value, written.path, written.handler)
    _console.print(table)

    for name in result.skipped:
        _console.print(f"[yellow]Skipped {name}: malformed handler reference[/yellow]")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None,
        help="Project directory. Defaults to current directory.",
    ),
) -> None:
    """Write a default ``.wrapgen/config.toml``."""
    with error_handler(_console):
        config_path = run_init(path)
        _console.print(f"[green]Wrote {config_path}[/green]")


@app.command()
def generate(
    ctx: typer.Context,
    service_file: Optional[Path] = typer.Argument(
        None,
        help="Service definition YAML. Defaults to the configured service_file.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Wrapper directory, relative to the service file.",
    ),
    in_place: bool = typer.Option(
        False,
        "--in-place",
        "-i",
        help="Write rewritten handlers and package.include back to the service file.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the resulting package.include as JSON.",
    ),
) -> None:
    """Regenerate wrappers for every Python and Node function in a service.

    Example::

        wrapgen generate serverless.yml
        wrapgen generate serverless.yml --in-place
    """
    with error_handler(_console):
        cfg = _load_app_config(ctx)
        path, project_root = _service_location(cfg, service_file)
        service = load_service(path)
        target = output_dir or cfg.output_dir

        descriptors = find_handlers(service, output_dir=target)
        manifest = get_packaging_manifest(service)
        result = write_handlers(
            manifest,
            descriptors,
            output_dir=target,
            project_dir=project_root,
        )
        _render_result(result)

        if in_place:
            store_packaging_manifest(service, manifest)
            apply_handler_rewrites(service, result)
            dump_service(service, path)
            _console.print(f"[green]Updated {path}[/green]")

        include = manifest.include or []
        if json_output:
            typer.echo(json.dumps({"include": include}, indent=2))
        else:
            for entry in include:
                typer.echo(entry)


@app.command()
def clean(
    ctx: typer.Context,
    service_file: Optional[Path] = typer.Argument(
        None,
        help="Service definition YAML. Defaults to the configured service_file.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Wrapper directory, relative to the service file.",
    ),
) -> None:
    """Remove the generated wrapper directory.

    The directory is located the same way ``generate`` locates it, next to
    the service file. The service file itself need not exist.
    """
    with error_handler(_console):
        cfg = _load_app_config(ctx)
        _, project_root = _service_location(cfg, service_file)
        target = output_dir or cfg.output_dir
        if cleanup_handlers(output_dir=target, project_dir=project_root):
            _console.print(f"[green]Removed {target}[/green]")
        else:
            _console.print(f"[dim]Nothing to remove at {target}[/dim]")
