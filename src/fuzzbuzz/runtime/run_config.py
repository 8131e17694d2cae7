"""Run configuration for FuzzBuzz.run.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["RunConfig"]


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable options for a single run.

    Constructing ``RunConfig()`` with no arguments gives the default
    behavior: validate once, after the last operation.

    Attributes:
        validate_all: Invoke the validate hook after every operation instead
            of once at the end (default: False). Catches a broken invariant
            at the operation that broke it, at the cost of one validation
            per cycle.

    Example:
        >>> report = await fuzz.run(500, config=RunConfig(validate_all=True))
        >>> report.validations
        500
    """

    validate_all: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TypeError: If validate_all is not a bool
        """
        if not isinstance(self.validate_all, bool):
            msg = "validate_all must be a bool"
            raise TypeError(msg)
