"""lambda-wrapgen -- instrumentation wrappers for serverless function handlers."""

__version__ = "0.1.0"
