"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "FailurePhase",
]


class FailurePhase(StrEnum):
    """Phase of a fuzz run in which a failure surfaced.

    Inherits from ``StrEnum`` so reports and JSON output receive plain
    strings (``"setup"``, ``"operation"``, ``"validate"``).
    """

    SETUP = "setup"
    OPERATION = "operation"
    VALIDATE = "validate"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Configuration errors (seeds, weights, bounds, counts)
        2000-2999: Run failures (setup, operation, validate, callbacks)
        3000-3999: Command-line runner errors
    """

    # Configuration errors (1000-1999)
    INVALID_SEED = 1001
    INVALID_WEIGHT = 1002
    INVALID_ACTION = 1003
    INVALID_BOUND = 1004
    INVALID_COUNT = 1005
    HARNESS_BUSY = 1006

    # Run failures (2000-2999)
    SETUP_FAILED = 2001
    OPERATION_FAILED = 2002
    VALIDATE_FAILED = 2003
    CALLBACK_ERROR = 2004

    # Command-line runner errors (3000-3999)
    TARGET_INVALID = 3001
    TARGET_NOT_FOUND = 3002
    TARGET_NOT_HARNESS = 3003
    TARGET_FACTORY_FAILED = 3004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        seed: Seed of the run that failed (run failures only)
        cycle: Zero-based operation index at which the failure surfaced
        operation: Name of the failing operation (operation failures only)
        cause: ``"<ExceptionType>: <message>"`` of the underlying error
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    seed: str | None = None
    cycle: int | None = None
    operation: str | None = None
    cause: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[OPERATION_FAILED]: Operation 'faulty' failed at cycle 41
              = seed: 3f1c...
              = cause: AssertionError: counter drifted
              = help: Reproduce with FuzzBuzz(seed=...) and bisect the run

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
