"""fuzzbuzz runtime package.

Provides the FuzzBuzz harness, its run configuration, and the
replay-based failure minimizer. Depends on the core package for
randomness, hooks, and the operation registry.

Python 3.13+.
"""

from .bisect import BisectStats, Minimizer
from .harness import FuzzBuzz, RunReport
from .run_config import RunConfig

__all__ = [
    "BisectStats",
    "FuzzBuzz",
    "Minimizer",
    "RunConfig",
    "RunReport",
]
