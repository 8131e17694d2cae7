"""Hypothesis strategies for fuzzbuzz property-based testing.

Usage:
    from tests.strategies import raw_seeds, positive_weights, weight_lists
"""

from .harness import (
    failure_points,
    hex_seeds,
    positive_weights,
    raw_seeds,
    unit_draws,
    weight_lists,
    weights,
)

__all__ = [
    "failure_points",
    "hex_seeds",
    "positive_weights",
    "raw_seeds",
    "unit_draws",
    "weight_lists",
    "weights",
]
