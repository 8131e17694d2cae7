"""Shared constants for fuzzbuzz.

Centralized configuration constants used across the core and runtime
packages. Placing constants here avoids circular imports and provides a
single source of truth.

Constants are grouped by domain:
- Seeds: canonicalization digest and sizes
- Draws: float resolution of the deterministic stream
- Runs: defaults used by the command-line runner
- Environment: variable names read by the command-line runner

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Seeds
    "SEED_DIGEST",
    "SEED_SIZE",
    # Draws
    "DRAW_BITS",
    "DRAW_SCALE",
    "CURSOR_BYTES",
    # Runs
    "DEFAULT_RUN_LENGTH",
    "DEFAULT_ROUNDS",
    # Environment
    "ENV_SEED",
    "ENV_LOG_LEVEL",
]

# ============================================================================
# SEEDS
# ============================================================================
#
# Seed strings must stay portable between releases and between
# implementations. The digest is therefore fixed and versioned with the
# package: changing it invalidates every recorded seed.
#
# ============================================================================

# hashlib algorithm name used to canonicalize byte seeds.
SEED_DIGEST: str = "sha256"

# Canonical seed length in bytes (SHA-256 digest size).
# Also the number of secure random bytes generated when no seed is given.
SEED_SIZE: int = 32

# ============================================================================
# DRAWS
# ============================================================================

# Bits of a draw used for the float mantissa (IEEE 754 double precision).
DRAW_BITS: int = 53

# Divisor mapping a DRAW_BITS integer into [0, 1).
DRAW_SCALE: float = float(1 << DRAW_BITS)

# Width of the big-endian draw cursor appended to the canonical seed.
CURSOR_BYTES: int = 8

# ============================================================================
# RUNS
# ============================================================================

# Operations per run when the command-line runner is not given a count.
DEFAULT_RUN_LENGTH: int = 1000

# Fresh-seed rounds attempted by the command-line runner.
DEFAULT_ROUNDS: int = 1

# ============================================================================
# ENVIRONMENT
# ============================================================================

# Seed used by the command-line runner when --seed is not supplied.
ENV_SEED: str = "FUZZBUZZ_SEED"

# Logging level name used by the command-line runner (e.g. "DEBUG").
ENV_LOG_LEVEL: str = "FUZZBUZZ_LOG_LEVEL"
