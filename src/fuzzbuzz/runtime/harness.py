"""FuzzBuzz - weighted, seeded operation fuzzing harness.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TypeAlias, TypeVar

from fuzzbuzz.core import DeterministicRandom, Operation, OperationRegistry, normalize
from fuzzbuzz.core.prng import SeedLike
from fuzzbuzz.diagnostics import (
    ConfigurationError,
    ErrorTemplate,
    OperationFailure,
    SetupFailure,
    ValidateFailure,
)

from .bisect import Minimizer
from .run_config import RunConfig

__all__ = ["FuzzBuzz", "RunReport"]

logger = logging.getLogger(__name__)

T = TypeVar("T")
OperationSpec: TypeAlias = tuple[float, Callable[..., object]]


@dataclass(frozen=True, slots=True)
class RunReport:
    """Outcome of a run that completed without failure.

    Attributes:
        seed: Seed the run started from
        cycles: Scheduling cycles performed (the ``n`` passed to run)
        executed: Cycles that selected and executed an operation
        validations: Validate hook invocations
    """

    seed: str
    cycles: int
    executed: int
    validations: int

    @property
    def idle(self) -> int:
        """Cycles that consumed a draw but had nothing to execute."""
        return self.cycles - self.executed


class FuzzBuzz:
    """Seeded fuzzing harness for weighted operations.

    Each run invokes the setup hook, then performs ``n`` scheduling cycles.
    A cycle draws once from the seeded stream to select an operation and
    awaits it to completion before the next draw. The validate hook checks
    invariants once at the end, or after every cycle with ``validate_all``.
    Runs are exactly reproducible from ``seed``.

    Hooks and operations may be plain functions, async functions, or
    ``Callback``-wrapped callback-style functions. Operations reach shared
    state through closures, or through attributes set on the harness.

    Concurrency:
        Strictly serial. Operations are never interleaved, and starting
        ``run``/``bisect`` while another is in progress on the same harness
        raises ConfigurationError.

    Examples:
        >>> fuzz = FuzzBuzz(seed=b"example")
        >>> fuzz.add(10, lambda: state.append(fuzz.random_int(100)))
        >>> fuzz.add(1, lambda: state.clear())
        >>> fuzz.validate(lambda: check(state))
        >>> await fuzz.run(1000)

        >>> replay = FuzzBuzz(seed=fuzz.seed)  # same draws, same operations
    """

    def __init__(
        self,
        *,
        seed: SeedLike = None,
        setup: Callable[..., object] | None = None,
        validate: Callable[..., object] | None = None,
        operations: Iterable[OperationSpec] = (),
    ) -> None:
        """Initialize FuzzBuzz.

        Args:
            seed: Raw seed bytes, or the hex ``seed`` of another harness.
                A secure random seed is generated when omitted.
            setup: Hook invoked before every run and every bisect pass
            validate: Hook that raises when an invariant is broken
            operations: ``(weight, action)`` pairs registered in order

        Raises:
            SeedError: If the seed is malformed
            ConfigurationError: If a hook or operation is not callable
        """
        self._random = DeterministicRandom(seed)
        self._registry = OperationRegistry()
        self._setup = normalize(setup)
        self._validate = normalize(validate)
        self._active: str | None = None

        for weight, action in operations:
            self._registry.add(weight, action)

        logger.debug(
            "FuzzBuzz initialized (seed=%s, operations=%d)", self.seed, len(self._registry)
        )

    @property
    def seed(self) -> str:
        """Canonical seed as hex; ``FuzzBuzz(seed=...)`` reproduces this harness."""
        return self._random.seed

    @property
    def operations(self) -> tuple[Operation, ...]:
        """Registered operations in insertion order (read-only snapshot)."""
        return tuple(self._registry)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def setup(self, hook: Callable[..., object] | None) -> None:
        """Replace the setup hook (None restores the no-op)."""
        self._setup = normalize(hook)

    def validate(self, hook: Callable[..., object] | None) -> None:
        """Replace the validate hook (None restores the no-op)."""
        self._validate = normalize(hook)

    def add(self, weight: float, action: Callable[..., object]) -> Operation:
        """Register an operation after those already registered.

        Returns:
            The registry entry, usable as a handle
        """
        return self._registry.add(weight, action)

    def remove(self, weight: float, action: object) -> bool:
        """Remove the first operation registered as ``add(weight, action)``.

        Returns:
            True if an operation was removed
        """
        return self._registry.remove(weight, action)

    # ------------------------------------------------------------------
    # Randomness for operations
    # ------------------------------------------------------------------

    def random(self) -> float:
        """Draw a float in [0, 1) from the run's stream."""
        return self._random.next()

    def random_int(self, n: int) -> int:
        """Draw an integer in [0, n). Consumes exactly one draw.

        Raises:
            ConfigurationError: If n is not a positive int (no draw is consumed)
        """
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise ConfigurationError(ErrorTemplate.invalid_bound(n))
        return int(self._random.next() * n)

    def pick(self, items: Sequence[T]) -> T | None:
        """Pick a uniformly random element.

        Returns None for an empty sequence without drawing; otherwise
        consumes one draw through ``random_int(len(items))``.
        """
        if not items:
            return None
        return items[self.random_int(len(items))]

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    async def run(
        self,
        n: int,
        *,
        validate_all: bool = False,
        config: RunConfig | None = None,
    ) -> RunReport:
        """Run setup, ``n`` scheduling cycles, and validation.

        The stream is not reset: consecutive runs continue where the
        previous one stopped. Construct a new harness (or bisect) to replay.

        Args:
            n: Number of scheduling cycles
            validate_all: Validate after every cycle
            config: Run options; takes precedence over ``validate_all``

        Returns:
            Summary of the completed run

        Raises:
            SetupFailure: Setup hook raised
            OperationFailure: An operation raised; remaining cycles are skipped
            ValidateFailure: Validate hook raised
            ConfigurationError: Invalid ``n`` or harness already running
        """
        _check_count("run", n, minimum=0)
        if config is None:
            config = RunConfig(validate_all=validate_all)

        with self._exclusive("run"):
            logger.info(
                "Fuzz run: %d cycles over %d operations (seed=%s, validate_all=%s)",
                n,
                len(self._registry),
                self.seed,
                config.validate_all,
            )
            await self._run_setup()

            executed = 0
            validations = 0
            for cycle in range(n):
                if await self._cycle(cycle) is not None:
                    executed += 1
                if config.validate_all:
                    await self._run_validate(cycle)
                    validations += 1

            if not config.validate_all:
                await self._run_validate(n - 1 if n else None)
                validations += 1

        logger.info("Fuzz run passed: %d/%d cycles executed an operation", executed, n)
        return RunReport(seed=self.seed, cycles=n, executed=executed, validations=validations)

    async def bisect(self, n: int) -> int:
        """Find the smallest operation count that still fails.

        Replays the run from this harness's seed (setup included) and
        narrows the failing window with geometrically spaced validations.
        Operation and validate failures during replay are consumed as
        signals; the stream is reset afterwards so the harness can be
        re-run from its seed.

        Args:
            n: Operation count known to fail from this seed

        Returns:
            Minimal failing count ``k`` (1 <= k <= n); ``n`` if the replay
            never failed

        Raises:
            SetupFailure: Setup hook raised during a replay pass
            ConfigurationError: Invalid ``n`` or harness already running
        """
        _check_count("bisect", n, minimum=1)
        with self._exclusive("bisect"):
            return await Minimizer(self).minimize(n)

    # ------------------------------------------------------------------
    # Cycle primitives (shared with the minimizer)
    # ------------------------------------------------------------------

    def _rewind(self) -> None:
        """Reset the stream to its draw-zero state."""
        self._random.reset()

    async def _run_setup(self) -> None:
        try:
            await self._setup()
        except Exception as exc:
            raise SetupFailure(
                ErrorTemplate.setup_failed(self.seed, exc), seed=self.seed, original=exc
            ) from exc

    async def _cycle(self, cycle: int) -> Operation | None:
        """One scheduling cycle: a single draw, then the selected operation."""
        operation = self._registry.select(self._random)
        if operation is None:
            return None
        try:
            await operation.action()
        except Exception as exc:
            raise OperationFailure(
                ErrorTemplate.operation_failed(self.seed, cycle, operation.name, exc),
                seed=self.seed,
                cycle=cycle,
                original=exc,
                operation=operation.name,
            ) from exc
        return operation

    async def _run_validate(self, cycle: int | None) -> None:
        try:
            await self._validate()
        except Exception as exc:
            raise ValidateFailure(
                ErrorTemplate.validate_failed(self.seed, cycle, exc),
                seed=self.seed,
                cycle=cycle,
                original=exc,
            ) from exc

    @contextmanager
    def _exclusive(self, name: str) -> Generator[None]:
        if self._active is not None:
            raise ConfigurationError(ErrorTemplate.harness_busy(name, self._active))
        self._active = name
        try:
            yield
        finally:
            self._active = None

    def __repr__(self) -> str:
        return f"FuzzBuzz(seed={self.seed!r}, operations={len(self._registry)})"


def _check_count(name: str, n: object, *, minimum: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int) or n < minimum:
        raise ConfigurationError(ErrorTemplate.invalid_count(name, n, minimum))
