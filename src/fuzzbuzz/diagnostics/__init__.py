"""Diagnostic system for fuzzbuzz errors.

Provides structured error diagnostics with codes, hints, and run context
(seed, cycle, operation). Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, FailurePhase
from .errors import (
    CallbackError,
    ConfigurationError,
    FuzzError,
    HarnessFailure,
    OperationFailure,
    SeedError,
    SetupFailure,
    ValidateFailure,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CallbackError",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "FailurePhase",
    "FuzzError",
    "HarnessFailure",
    "OperationFailure",
    "OutputFormat",
    "SeedError",
    "SetupFailure",
    "ValidateFailure",
]
