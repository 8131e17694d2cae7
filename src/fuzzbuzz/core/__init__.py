"""Core scheduling primitives.

This package provides the pieces the runtime harness is built from:

    prng <- registry -> hooks

Exports:
    DeterministicRandom: Seeded, resettable stream of floats in [0, 1)
    OperationRegistry: Ordered weighted operations with one-draw selection
    Operation: Registered entry (weight, normalized action, identity)
    Callback: Marker for callback-style hooks and operations
    callback_style: Decorator form of Callback
    normalize: Adapt any supported hook form to a coroutine function

Python 3.13+.
"""

from .hooks import Callback, callback_style, normalize
from .prng import DeterministicRandom, canonicalize_seed
from .registry import Operation, OperationRegistry

__all__ = [
    "Callback",
    "DeterministicRandom",
    "Operation",
    "OperationRegistry",
    "callback_style",
    "canonicalize_seed",
    "normalize",
]
