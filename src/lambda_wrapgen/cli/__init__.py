"""wrapgen CLI -- command-line interface built with Typer and Rich.

- :data:`app` -- The main Typer application
- :class:`WrapgenConfig` -- Configuration model
- :func:`setup_logging` -- Logging infrastructure
- :class:`CLIError` -- Structured error handling
"""

from lambda_wrapgen.cli.app import app
from lambda_wrapgen.cli.config import WrapgenConfig, load_config
from lambda_wrapgen.cli.errors import CLIError, ConfigError, error_handler
from lambda_wrapgen.cli.logging_setup import setup_logging

__all__ = [
    "CLIError",
    "ConfigError",
    "WrapgenConfig",
    "app",
    "error_handler",
    "load_config",
    "setup_logging",
]
