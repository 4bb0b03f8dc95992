"""Enumerations for the wrapper generation data model."""

from enum import Enum


class RuntimeKind(str, Enum):
    """Language runtime a wrapper is generated for."""

    PYTHON = "PYTHON"
    NODE = "NODE"
    NODE_TS = "NODE_TS"
