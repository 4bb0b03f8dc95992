"""Allow ``python -m lambda_wrapgen``."""

from lambda_wrapgen.cli.app import app

if __name__ == "__main__":
    app()
