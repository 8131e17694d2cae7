"""Failure minimization by deterministic replay.

Given a harness that fails within ``n`` operations from its seed, find the
smallest prefix length that still fails.

Every pass starts over from the seed: rewind the stream, run setup, and
replay operations from index 0. Resuming mid-stream is unsound because
operations draw from the same stream and the number of draws they make is
not known in advance.

Within a pass, indices below the known-good boundary ``start`` are replayed
without validation. From ``start`` on, validation runs at geometrically
spaced checkpoints (1st, 2nd, 4th, 8th, ... operation past ``start``):
each passing checkpoint moves ``start`` past it, the first failing
checkpoint (or raising operation) becomes the new ``end``. The window
``[start, end)`` shrinks every pass until ``start == end``, and ``end`` is
then the index of the first failing operation.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fuzzbuzz.diagnostics import OperationFailure, ValidateFailure

if TYPE_CHECKING:
    from .harness import FuzzBuzz

__all__ = ["BisectStats", "Minimizer"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BisectStats:
    """Work done by a minimization.

    Attributes:
        passes: Replay passes performed
        replayed: Operations replayed across all passes
        validations: Checkpoint validations performed
    """

    passes: int = 0
    replayed: int = 0
    validations: int = 0


class Minimizer:
    """Shrinks a failing run to its minimal failing prefix.

    Use through ``FuzzBuzz.bisect``, which also guards against overlapping
    runs on the same harness.
    """

    __slots__ = ("_harness", "stats")

    def __init__(self, harness: FuzzBuzz) -> None:
        self._harness = harness
        self.stats = BisectStats()

    async def minimize(self, n: int) -> int:
        """Return the minimal failing operation count within ``n``."""
        harness = self._harness
        logger.info("Bisecting %d operations (seed=%s)", n, harness.seed)

        start, end = 0, n
        while start < end:
            self.stats.passes += 1
            logger.debug("Bisect pass %d: window [%d, %d)", self.stats.passes, start, end)
            start, stop = await self._replay(n, start)
            end = min(end, stop)

        harness._rewind()
        logger.info(
            "Bisect found %d operations reproduce the failure (%d passes, %d validations)",
            end + 1,
            self.stats.passes,
            self.stats.validations,
        )
        return end + 1

    async def _replay(self, n: int, start: int) -> tuple[int, int]:
        """Replay one pass from the seed.

        Returns:
            ``(start, stop)``: the advanced known-good boundary and the index
            at which the pass stopped
        """
        harness = self._harness
        harness._rewind()
        await harness._run_setup()

        dist = 1
        ptr = 0
        for i in range(n):
            self.stats.replayed += 1
            try:
                await harness._cycle(i)
            except OperationFailure as failure:
                logger.debug("Operation %s failed at %d", failure.operation, i)
                return start, i

            if i < start:
                continue
            ptr += 1
            if ptr != dist:
                continue

            self.stats.validations += 1
            try:
                await harness._run_validate(i)
            except ValidateFailure:
                logger.debug("Checkpoint after %d failed", i)
                return start, i
            start = i + 1
            dist *= 2

        logger.warning(
            "Replay of %d operations did not fail (seed=%s); result is not a minimal failure",
            n,
            harness.seed,
        )
        return start, n - 1
