"""Weighted operation registry.

Operations are kept in insertion order; order breaks ties during
selection and survives add/remove. Selection always consumes exactly one
draw, even when nothing can be selected, so the number of draws a run
makes depends only on its cycle count and on what the operations draw
themselves. Replay-based minimization relies on this.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from numbers import Real

from fuzzbuzz.diagnostics import ConfigurationError, ErrorTemplate

from .hooks import Hook, hook_name, normalize
from .prng import DeterministicRandom

__all__ = ["Operation", "OperationRegistry"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class Operation:
    """A registered operation.

    Returned by ``OperationRegistry.add`` and usable as an opaque handle.

    Attributes:
        weight: Selection weight; values <= 0 contribute no probability mass
        action: Normalized coroutine function executed when selected
        identity: The callable originally passed to ``add``; removal
            matches on it by identity, never on behavior
    """

    weight: float
    action: Hook = field(repr=False)
    identity: object

    @property
    def mass(self) -> float:
        """Effective selection weight (never negative)."""
        return float(self.weight) if self.weight > 0 else 0.0

    @property
    def name(self) -> str:
        """Name used in logs and diagnostics."""
        return hook_name(self.identity)

    def matches(self, weight: float, action: object) -> bool:
        """True if this entry was registered as ``add(weight, action)``."""
        return self.weight == weight and self.identity is action


class OperationRegistry:
    """Ordered collection of weighted operations.

    Supports list-like introspection:
        - __iter__: Iterate over entries in insertion order
        - __len__: Count registered entries
        - __contains__: Check whether a callable is registered (identity)

    Example:
        >>> registry = OperationRegistry()
        >>> handle = registry.add(10, grow)
        >>> _ = registry.add(1, shrink)
        >>> len(registry), registry.total_weight()
        (2, 11.0)
        >>> registry.remove(10, grow)
        True
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._entries: list[Operation] = []

    def add(self, weight: float, action: Callable[..., object]) -> Operation:
        """Append an operation.

        Args:
            weight: Selection weight (int or float)
            action: Plain function, async function, or Callback

        Returns:
            The new entry

        Raises:
            ConfigurationError: If weight is not a finite real number or action
                is not callable (None included)
        """
        if isinstance(weight, bool) or not isinstance(weight, Real):
            raise ConfigurationError(ErrorTemplate.invalid_weight(weight))
        try:
            finite = math.isfinite(float(weight))
        except OverflowError:
            finite = False
        if not finite:
            raise ConfigurationError(ErrorTemplate.invalid_weight(weight, "finite"))
        # Hooks accept None as a no-op; operations do not.
        if not callable(action):
            raise ConfigurationError(ErrorTemplate.invalid_action(action))
        entry = Operation(weight=weight, action=normalize(action), identity=action)
        self._entries.append(entry)
        if entry.mass == 0:
            logger.debug("Registered operation %s with zero mass (weight=%r)", entry.name, weight)
        else:
            logger.debug("Registered operation %s (weight=%r)", entry.name, weight)
        return entry

    def remove(self, weight: float, action: object) -> bool:
        """Remove the first entry registered as ``add(weight, action)``.

        Returns:
            True if an entry was removed, False if none matched
        """
        for index, entry in enumerate(self._entries):
            if entry.matches(weight, action):
                del self._entries[index]
                logger.debug("Removed operation %s (weight=%r)", entry.name, weight)
                return True
        return False

    def select(self, random: DeterministicRandom) -> Operation | None:
        """Pick an entry with probability proportional to its weight.

        Consumes exactly one draw. The walk subtracts each weight from the
        scaled draw and stops at the first entry that brings it to <= 0.

        Returns:
            The selected entry, or None if no entry has positive weight
        """
        total = self.total_weight()
        remaining = random.next() * total
        chosen: Operation | None = None
        for entry in self._entries:
            mass = entry.mass
            if mass == 0:
                continue
            chosen = entry
            remaining -= mass
            if remaining <= 0:
                return entry
        # Float rounding can leave a sliver of mass after the last entry.
        return chosen

    def total_weight(self) -> float:
        """Sum of effective weights."""
        return sum(entry.mass for entry in self._entries)

    def weights(self) -> tuple[float, ...]:
        """Registered weights in insertion order."""
        return tuple(entry.weight for entry in self._entries)

    def __iter__(self) -> Iterator[Operation]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, action: object) -> bool:
        return any(entry.identity is action for entry in self._entries)
