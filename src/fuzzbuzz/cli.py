"""Command-line runner for fuzzbuzz harnesses.

Loads a harness factory, runs it from a seed, and on failure prints the
diagnostic, the seed needed to reproduce it, and optionally the minimal
failing operation count.

Usage:
    python -m fuzzbuzz examples.counter_bisect:make_harness
    python -m fuzzbuzz examples.counter_bisect:make_harness -n 20000 --bisect
    python -m fuzzbuzz examples.counter_bisect:make_harness --rounds 50 --json
    FUZZBUZZ_SEED=<hex> python -m fuzzbuzz examples.counter_bisect:make_harness

The target is ``module:attribute`` naming a factory called as
``factory(seed=...)`` that returns a FuzzBuzz. The seed passed is the hex
seed from --seed or FUZZBUZZ_SEED, or None for a fresh secure seed.

JSON Output Format (--json):
    {
      "target": "examples.counter_bisect:make_harness",
      "status": "fail",
      "seed": "5df6e0e2...",
      "operations": 20000,
      "rounds": 1,
      "phase": "validate",
      "cycle": 19999,
      "diagnostic": {"code": "VALIDATE_FAILED", ...},
      "minimal_operations": 212,
      "timestamp": "2026-02-04T10:30:00+00:00"
    }

Exit Codes:
    0   No failure
    1   Failure found (seed printed for reproduction)
    2   Error (invalid target, invalid seed, bad arguments)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import json
import logging
import os
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TypeAlias

from fuzzbuzz.constants import DEFAULT_ROUNDS, DEFAULT_RUN_LENGTH, ENV_LOG_LEVEL, ENV_SEED
from fuzzbuzz.diagnostics import (
    ConfigurationError,
    DiagnosticFormatter,
    ErrorTemplate,
    FailurePhase,
    FuzzError,
    HarnessFailure,
    OutputFormat,
)
from fuzzbuzz.runtime import FuzzBuzz, RunConfig

__all__ = ["FuzzResult", "load_target", "main", "output_result", "run_target"]

logger = logging.getLogger(__name__)

HarnessFactory: TypeAlias = Callable[..., object]


@dataclass
class FuzzResult:
    """Result of a command-line fuzzing session."""

    target: str
    operations: int
    passed: bool = True
    seed: str | None = None
    rounds: int = 0
    phase: FailurePhase | None = None
    cycle: int | None = None
    failure: HarnessFailure | None = None
    minimal_operations: int | None = None
    error: str | None = None
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    @property
    def exit_code(self) -> int:
        """0 = pass, 1 = failure found, 2 = error."""
        if self.error:
            return 2
        return 0 if self.passed else 1


def load_target(target: str) -> HarnessFactory:
    """Import ``module:attribute`` and return the attribute.

    Raises:
        ConfigurationError: If the target is malformed or cannot be imported
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(ErrorTemplate.target_invalid(target))

    try:
        obj: object = importlib.import_module(module_name)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except Exception as e:
        reason = f"{type(e).__name__}: {e}"
        raise ConfigurationError(ErrorTemplate.target_not_found(target, reason)) from e

    if not callable(obj):
        raise ConfigurationError(ErrorTemplate.target_not_harness(target, obj))
    return obj


def _build(factory: HarnessFactory, target: str, seed: str | None) -> FuzzBuzz:
    try:
        harness = factory(seed=seed)
    except FuzzError:
        raise
    except Exception as e:
        raise ConfigurationError(ErrorTemplate.target_factory_failed(target, e)) from e
    if not isinstance(harness, FuzzBuzz):
        raise ConfigurationError(ErrorTemplate.target_not_harness(target, harness))
    return harness


async def run_target(
    factory: HarnessFactory,
    target: str,
    *,
    operations: int,
    seed: str | None = None,
    rounds: int = DEFAULT_ROUNDS,
    config: RunConfig | None = None,
    bisect: bool = False,
) -> FuzzResult:
    """Run a harness factory until a round fails or the rounds are used up.

    A fixed seed always means a single round. Each round builds a fresh
    harness so that it starts from draw zero.

    Args:
        factory: Callable returning a FuzzBuzz for ``seed=...``
        target: Target string, for reporting
        operations: Operations per round
        seed: Hex seed to reproduce, or None for fresh seeds
        rounds: Maximum rounds with fresh seeds
        config: Run options
        bisect: Minimize the first failure

    Returns:
        Session result
    """
    result = FuzzResult(target=target, operations=operations)
    if seed is not None:
        rounds = 1

    for _ in range(rounds):
        harness = _build(factory, target, seed)
        result.rounds += 1
        result.seed = harness.seed
        try:
            await harness.run(operations, config=config)
        except HarnessFailure as failure:
            logger.info("Round %d failed (seed=%s)", result.rounds, harness.seed)
            result.passed = False
            result.failure = failure
            result.phase = failure.phase
            result.cycle = failure.cycle
            if bisect and failure.cycle is not None:
                result.minimal_operations = await harness.bisect(failure.cycle + 1)
            return result
    return result


def output_result(result: FuzzResult, use_json: bool, *, color: bool | None = None) -> None:
    """Print the session result.

    Args:
        result: FuzzResult from run_target
        use_json: Output JSON format
        color: ANSI colors in text output (default: when stdout is a terminal)
    """
    diagnostic = result.failure.diagnostic if result.failure else None

    if use_json:
        data: dict[str, object] = {
            "target": result.target,
            "status": "error" if result.error else ("pass" if result.passed else "fail"),
            "seed": result.seed,
            "operations": result.operations,
            "rounds": result.rounds,
            "timestamp": result.timestamp,
        }
        if result.error:
            data["error"] = result.error
        if result.phase is not None:
            data["phase"] = str(result.phase)
        if result.cycle is not None:
            data["cycle"] = result.cycle
        if diagnostic is not None:
            formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
            data["diagnostic"] = json.loads(formatter.format(diagnostic))
        if result.minimal_operations is not None:
            data["minimal_operations"] = result.minimal_operations
        print(json.dumps(data, indent=2))
        return

    if result.error:
        print(f"[ERROR] {result.error}")
        return

    if result.passed:
        print(f"[PASS] {result.rounds} round(s) of {result.operations} operations passed")
        print(f"Last seed: {result.seed}")
        return

    print(f"[FAIL] Failure found in round {result.rounds}")
    print()
    if diagnostic is not None:
        if color is None:
            color = sys.stdout.isatty()
        print(DiagnosticFormatter(color=color).format(diagnostic))
    else:
        print(str(result.failure))
    print()
    print("Reproduce with:")
    print(f"  {ENV_SEED}={result.seed} python -m fuzzbuzz {result.target} -n {result.operations}")
    if result.minimal_operations is not None:
        print(f"Minimal failing run: {result.minimal_operations} operations")


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(ENV_LOG_LEVEL, "WARNING")
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="fuzzbuzz",
        description="Run a seeded fuzz harness and minimize failures.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Run once with a fresh seed:
  python -m fuzzbuzz examples.counter_bisect:make_harness

  # Reproduce a seed and minimize the failure:
  python -m fuzzbuzz examples.counter_bisect:make_harness --seed <hex> --bisect

  # Try 50 fresh seeds, JSON output for automation:
  python -m fuzzbuzz examples.counter_bisect:make_harness --rounds 50 --json

Environment:
  {ENV_SEED}       seed used when --seed is not given
  {ENV_LOG_LEVEL}  logging level (default WARNING; --verbose forces DEBUG)
""",
    )
    parser.add_argument("target", help="Harness factory as module:attribute")
    parser.add_argument(
        "-n",
        "--operations",
        type=int,
        default=DEFAULT_RUN_LENGTH,
        help=f"Operations per run (default: {DEFAULT_RUN_LENGTH})",
    )
    parser.add_argument(
        "--seed",
        default=os.environ.get(ENV_SEED) or None,
        help=f"Hex seed to reproduce (default: ${ENV_SEED} or a fresh seed)",
    )
    parser.add_argument(
        "--rounds",
        type=int,
        default=DEFAULT_ROUNDS,
        help="Fresh-seed rounds to try until one fails (ignored with --seed)",
    )
    parser.add_argument(
        "--validate-all",
        action="store_true",
        help="Validate after every operation",
    )
    parser.add_argument(
        "--bisect",
        action="store_true",
        help="Minimize the failing run to its shortest failing prefix",
    )
    parser.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.operations < 0 or args.rounds < 1:
        parser.error("--operations must be >= 0 and --rounds must be >= 1")

    # Targets are usually importable relative to where the runner is started.
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        factory = load_target(args.target)
        result = asyncio.run(
            run_target(
                factory,
                args.target,
                operations=args.operations,
                seed=args.seed,
                rounds=args.rounds,
                config=RunConfig(validate_all=args.validate_all),
                bisect=args.bisect,
            )
        )
    except FuzzError as e:
        result = FuzzResult(target=args.target, operations=args.operations, error=str(e))

    output_result(result, use_json=args.json)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
