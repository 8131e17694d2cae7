"""fuzzbuzz exception hierarchy with structured diagnostics.

All exceptions accept either a plain message or a Diagnostic object and
keep the Diagnostic for tooling.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, FailurePhase

__all__ = [
    "CallbackError",
    "ConfigurationError",
    "FuzzError",
    "HarnessFailure",
    "OperationFailure",
    "SeedError",
    "SetupFailure",
    "ValidateFailure",
]


class FuzzError(Exception):
    """Base exception for all fuzzbuzz errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FuzzError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(FuzzError, ValueError):
    """Invalid harness configuration or misuse of the public API.

    Raised at registration or call time, never from inside the scheduler:
    bad seeds, non-numeric weights, non-callable actions, non-positive
    bounds and counts, and re-entrant runs on a busy harness.
    """


class SeedError(ConfigurationError):
    """Seed value cannot be turned into a canonical seed."""


class CallbackError(FuzzError):
    """Callback-style hook completed with a non-exception error value.

    Attributes:
        value: The value passed as the first argument of the completion callback
    """

    def __init__(self, message: str | Diagnostic, value: object) -> None:
        super().__init__(message)
        self.value = value


class HarnessFailure(FuzzError):
    """A fuzz run failed.

    The run is terminated at the first failure; nothing is retried or
    continued. The underlying exception is chained as ``__cause__`` and
    kept in ``original``.

    Attributes:
        phase: Run phase that failed
        seed: Seed of the failing run, for reproduction
        cycle: Zero-based operation index at which the failure surfaced
            (None for setup failures)
        original: The exception raised by the hook or operation
    """

    phase: FailurePhase

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        seed: str,
        cycle: int | None = None,
        original: BaseException | None = None,
    ) -> None:
        """Initialize HarnessFailure.

        Args:
            message: Error message string OR Diagnostic object
            seed: Seed of the failing run
            cycle: Zero-based operation index of the failure
            original: Underlying exception
        """
        super().__init__(message)
        self.seed = seed
        self.cycle = cycle
        self.original = original

    @property
    def operations_executed(self) -> int:
        """Number of operations that ran to completion before the failure."""
        if self.cycle is None:
            return 0
        return self.cycle if self.phase is FailurePhase.OPERATION else self.cycle + 1


class SetupFailure(HarnessFailure):
    """Setup hook raised before the first operation."""

    phase = FailurePhase.SETUP


class OperationFailure(HarnessFailure):
    """A scheduled operation raised.

    Attributes:
        operation: Name of the failing operation
    """

    phase = FailurePhase.OPERATION

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        seed: str,
        cycle: int | None = None,
        original: BaseException | None = None,
        operation: str = "",
    ) -> None:
        super().__init__(message, seed=seed, cycle=cycle, original=original)
        self.operation = operation


class ValidateFailure(HarnessFailure):
    """Validate hook raised at a checkpoint."""

    phase = FailurePhase.VALIDATE
