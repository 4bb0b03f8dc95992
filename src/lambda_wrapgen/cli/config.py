"""wrapgen configuration management.

Loads configuration from TOML files with environment variable overrides
(``WRAPGEN_`` prefix).  Uses :mod:`tomllib` on Python 3.11+.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from lambda_wrapgen.cli.errors import ConfigError
from lambda_wrapgen.codegen.directory import DEFAULT_OUTPUT_DIR

# ---------------------------------------------------------------------------
# Default paths
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_DIR = ".wrapgen"
DEFAULT_CONFIG_FILE = "config.toml"
DEFAULT_SERVICE_FILE = "serverless.yml"
ENV_PREFIX = "WRAPGEN_"

# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class WrapgenConfig(BaseModel):
    """Application configuration with sensible defaults.

    All fields can be overridden via environment variables with the
    ``WRAPGEN_`` prefix.  For example ``WRAPGEN_OUTPUT_DIR=handlers``.
    """

    project_dir: Path = Field(default_factory=lambda: Path.cwd())
    output_dir: str = DEFAULT_OUTPUT_DIR
    service_file: str = DEFAULT_SERVICE_FILE
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    model_config = {"extra": "ignore"}


# ---------------------------------------------------------------------------
# Loader helpers
# ---------------------------------------------------------------------------


def _apply_env_overrides(data: dict) -> dict:
    """Apply WRAPGEN_ environment variable overrides to *data*."""
    field_names = set(WrapgenConfig.model_fields.keys())
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            field = key[len(ENV_PREFIX):].lower()
            if field in field_names:
                data[field] = value
    return data


def load_config(config_path: Path | None = None, project_dir: Path | None = None) -> WrapgenConfig:
    """Load configuration from a TOML file with env-var overrides.

    Parameters
    ----------
    config_path:
        Explicit path to a TOML file.  When *None*, looks for
        ``<project_dir>/.wrapgen/config.toml``.
    project_dir:
        Project root directory.  Defaults to :func:`Path.cwd`.

    Returns
    -------
    WrapgenConfig
        Parsed and validated configuration.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or a value fails validation.
    """
    project = project_dir or Path.cwd()
    path = config_path or (project / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE)

    data: dict = {}
    if path.exists():
        try:
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    # Flatten nested TOML sections if present
    flat: dict = {}
    for k, v in data.items():
        if isinstance(v, dict):
            flat.update(v)
        else:
            flat[k] = v

    flat.setdefault("project_dir", str(project))

    flat = _apply_env_overrides(flat)
    try:
        return WrapgenConfig(**flat)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def default_config_toml() -> str:
    """Return default configuration as a TOML string."""
    return f"""\
# wrapgen configuration

[general]
output_dir = "{DEFAULT_OUTPUT_DIR}"
service_file = "{DEFAULT_SERVICE_FILE}"
log_level = "INFO"
"""
