"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode


def _describe(exc: BaseException) -> str:
    """Render an exception as ``Type: message`` (just ``Type`` if empty)."""
    text = str(exc)
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    _REPRO_HINT = "Reproduce with FuzzBuzz(seed=...) and minimize with bisect()"

    # ------------------------------------------------------------------
    # Configuration errors
    # ------------------------------------------------------------------

    @staticmethod
    def invalid_seed(value: object, reason: str) -> Diagnostic:
        """Seed could not be canonicalized.

        Args:
            value: The seed value supplied by the caller
            reason: Why it was rejected

        Returns:
            Diagnostic for INVALID_SEED
        """
        shown = value if isinstance(value, str) else type(value).__name__
        msg = f"Invalid seed {shown!r}: {reason}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_SEED,
            message=msg,
            hint="Pass bytes, or the hex string exposed by FuzzBuzz.seed",
        )

    @staticmethod
    def invalid_weight(weight: object, requirement: str = "a number") -> Diagnostic:
        """Operation weight is not a usable real number.

        Args:
            weight: The rejected weight
            requirement: What the weight failed to be

        Returns:
            Diagnostic for INVALID_WEIGHT
        """
        msg = f"Operation weight must be {requirement}, got {type(weight).__name__}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_WEIGHT,
            message=msg,
            hint="Use a finite int or float; non-positive weights are never selected",
        )

    @staticmethod
    def invalid_action(action: object) -> Diagnostic:
        """Operation or hook is not callable.

        Args:
            action: The rejected object

        Returns:
            Diagnostic for INVALID_ACTION
        """
        msg = f"Expected a callable, got {type(action).__name__}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ACTION,
            message=msg,
            hint="Pass a function, coroutine function, or Callback(fn)",
        )

    @staticmethod
    def invalid_bound(n: object) -> Diagnostic:
        """random_int() called without a positive integer bound.

        Args:
            n: The rejected bound

        Returns:
            Diagnostic for INVALID_BOUND
        """
        msg = f"random_int() bound must be a positive int, got {n!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_BOUND,
            message=msg,
            hint="Pass the exclusive upper bound explicitly, e.g. random_int(len(items))",
        )

    @staticmethod
    def invalid_count(name: str, n: object, minimum: int) -> Diagnostic:
        """Operation count below the accepted minimum.

        Args:
            name: Method that received the count ("run" or "bisect")
            n: The rejected count
            minimum: Smallest accepted value

        Returns:
            Diagnostic for INVALID_COUNT
        """
        msg = f"{name}() count must be an int >= {minimum}, got {n!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_COUNT,
            message=msg,
        )

    @staticmethod
    def harness_busy(requested: str, active: str) -> Diagnostic:
        """run()/bisect() started while another one is in progress.

        Args:
            requested: Method being started
            active: Method already running

        Returns:
            Diagnostic for HARNESS_BUSY
        """
        msg = f"Cannot start {requested}() while {active}() is in progress"
        return Diagnostic(
            code=DiagnosticCode.HARNESS_BUSY,
            message=msg,
            hint="Await the running call first; runs on one harness are strictly serial",
        )

    # ------------------------------------------------------------------
    # Run failures
    # ------------------------------------------------------------------

    @staticmethod
    def setup_failed(seed: str, exc: BaseException) -> Diagnostic:
        """Setup hook raised.

        Args:
            seed: Seed of the run
            exc: Exception raised by the hook

        Returns:
            Diagnostic for SETUP_FAILED
        """
        cause = _describe(exc)
        msg = f"Setup failed: {cause}"
        return Diagnostic(
            code=DiagnosticCode.SETUP_FAILED,
            message=msg,
            hint="Setup runs before every run and every bisect pass",
            seed=seed,
            cause=cause,
        )

    @staticmethod
    def operation_failed(
        seed: str,
        cycle: int,
        operation: str,
        exc: BaseException,
    ) -> Diagnostic:
        """Scheduled operation raised.

        Args:
            seed: Seed of the run
            cycle: Zero-based operation index
            operation: Operation name
            exc: Exception raised by the operation

        Returns:
            Diagnostic for OPERATION_FAILED
        """
        cause = _describe(exc)
        msg = f"Operation '{operation}' failed at cycle {cycle}: {cause}"
        return Diagnostic(
            code=DiagnosticCode.OPERATION_FAILED,
            message=msg,
            hint=ErrorTemplate._REPRO_HINT,
            seed=seed,
            cycle=cycle,
            operation=operation,
            cause=cause,
        )

    @staticmethod
    def validate_failed(seed: str, cycle: int | None, exc: BaseException) -> Diagnostic:
        """Validate hook raised.

        Args:
            seed: Seed of the run
            cycle: Zero-based index of the last operation before the checkpoint
                (None when the run had no operations)
            exc: Exception raised by the hook

        Returns:
            Diagnostic for VALIDATE_FAILED
        """
        cause = _describe(exc)
        if cycle is None:
            msg = f"Validation failed before any operation: {cause}"
        else:
            msg = f"Validation failed after cycle {cycle}: {cause}"
        return Diagnostic(
            code=DiagnosticCode.VALIDATE_FAILED,
            message=msg,
            hint=ErrorTemplate._REPRO_HINT,
            seed=seed,
            cycle=cycle,
            cause=cause,
        )

    @staticmethod
    def callback_error(value: object) -> Diagnostic:
        """Callback-style hook reported a non-exception error.

        Args:
            value: Error value passed to the completion callback

        Returns:
            Diagnostic for CALLBACK_ERROR
        """
        msg = f"Callback completed with error: {value!r}"
        return Diagnostic(
            code=DiagnosticCode.CALLBACK_ERROR,
            message=msg,
            hint="Call done() or done(None) to signal success",
        )

    # ------------------------------------------------------------------
    # Command-line runner
    # ------------------------------------------------------------------

    @staticmethod
    def target_invalid(target: str) -> Diagnostic:
        """Target is not of the form module:attribute.

        Args:
            target: The rejected target string

        Returns:
            Diagnostic for TARGET_INVALID
        """
        msg = f"Invalid target '{target}'"
        return Diagnostic(
            code=DiagnosticCode.TARGET_INVALID,
            message=msg,
            hint="Use module:attribute, e.g. examples.counter_bisect:make_harness",
        )

    @staticmethod
    def target_not_found(target: str, reason: str) -> Diagnostic:
        """Target module or attribute cannot be imported.

        Args:
            target: The target string
            reason: Import error description

        Returns:
            Diagnostic for TARGET_NOT_FOUND
        """
        msg = f"Cannot load target '{target}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.TARGET_NOT_FOUND,
            message=msg,
            hint="Check that the module is importable from the current directory",
        )

    @staticmethod
    def target_not_harness(target: str, received: object) -> Diagnostic:
        """Target factory did not produce a FuzzBuzz.

        Args:
            target: The target string
            received: What the factory returned

        Returns:
            Diagnostic for TARGET_NOT_HARNESS
        """
        msg = f"Target '{target}' returned {type(received).__name__}, expected FuzzBuzz"
        return Diagnostic(
            code=DiagnosticCode.TARGET_NOT_HARNESS,
            message=msg,
            hint="The factory must accept seed=... and return a FuzzBuzz",
        )

    @staticmethod
    def target_factory_failed(target: str, exc: BaseException) -> Diagnostic:
        """Target factory raised instead of building a harness.

        Args:
            target: The target string
            exc: Exception raised by ``factory(seed=...)``

        Returns:
            Diagnostic for TARGET_FACTORY_FAILED
        """
        cause = _describe(exc)
        msg = f"Target '{target}' could not build a harness: {cause}"
        return Diagnostic(
            code=DiagnosticCode.TARGET_FACTORY_FAILED,
            message=msg,
            hint="The factory must accept seed=... and return a FuzzBuzz",
            cause=cause,
        )
