"""fuzzbuzz - deterministic fuzz testing with weighted operations.

Registers weighted randomized operations with setup and validate hooks,
executes randomly chosen operations against shared state, and checks
invariants. Every run is reproducible from its seed, and failing runs can
be shrunk to the shortest failing operation prefix by deterministic replay.

Public API:
    FuzzBuzz - Seeded harness: add/remove operations, run, bisect
    RunConfig - Options for FuzzBuzz.run
    RunReport - Summary of a passing run
    Callback - Marker for callback-style (``done(err)``) hooks and operations
    callback_style - Decorator form of Callback
    DeterministicRandom - Seeded, resettable float stream

Exceptions:
    FuzzError - Base exception class
    ConfigurationError - Invalid seed, weight, bound, count, or busy harness
    HarnessFailure - A run failed (SetupFailure, OperationFailure, ValidateFailure)
    CallbackError - Callback-style hook completed with a non-exception error

Submodules:
    fuzzbuzz.core - Random stream, hook normalization, operation registry
    fuzzbuzz.runtime - Harness and minimizer
    fuzzbuzz.diagnostics - Error codes, templates, and formatting
    fuzzbuzz.cli - Command-line runner (``python -m fuzzbuzz``)
"""

from .core import Callback, DeterministicRandom, callback_style
from .diagnostics import (
    CallbackError,
    ConfigurationError,
    FuzzError,
    HarnessFailure,
    OperationFailure,
    SeedError,
    SetupFailure,
    ValidateFailure,
)
from .runtime import FuzzBuzz, RunConfig, RunReport

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("fuzzbuzz")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Callback",
    "CallbackError",
    "ConfigurationError",
    "DeterministicRandom",
    "FuzzBuzz",
    "FuzzError",
    "HarnessFailure",
    "OperationFailure",
    "RunConfig",
    "RunReport",
    "SeedError",
    "SetupFailure",
    "ValidateFailure",
    "__version__",
    "callback_style",
]
