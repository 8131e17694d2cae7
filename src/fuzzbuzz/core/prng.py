"""Deterministic, resettable random stream.

Every draw is SHA-256 in counter mode over the canonical seed:

    draw(k) = top DRAW_BITS of sha256(canonical_seed || k as CURSOR_BYTES big-endian)

so the k-th draw depends only on the canonical seed and k. There is no hidden
generator state to replace or copy; reset() simply rewinds the cursor.

Seeds:
    - None: SEED_SIZE bytes from ``secrets``, then canonicalized
    - bytes-like: canonicalized with SEED_DIGEST
    - str: hex encoding of a canonical seed (the value exposed by ``seed``),
      used as-is so that ``DeterministicRandom(r.seed)`` reproduces ``r``

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import hashlib
import secrets
from typing import TypeAlias

from fuzzbuzz.constants import CURSOR_BYTES, DRAW_BITS, DRAW_SCALE, SEED_DIGEST, SEED_SIZE
from fuzzbuzz.diagnostics import ErrorTemplate, SeedError

__all__ = ["DeterministicRandom", "canonicalize_seed"]

SeedLike: TypeAlias = bytes | bytearray | memoryview | str | None


def canonicalize_seed(seed: SeedLike) -> bytes:
    """Turn a caller-supplied seed into canonical seed bytes.

    Args:
        seed: None, raw seed bytes, or the hex text of a canonical seed

    Returns:
        SEED_SIZE canonical seed bytes

    Raises:
        SeedError: If the seed has an unsupported type or is malformed text
    """
    if seed is None:
        return hashlib.new(SEED_DIGEST, secrets.token_bytes(SEED_SIZE)).digest()
    if isinstance(seed, str):
        try:
            canonical = bytes.fromhex(seed)
        except ValueError:
            raise SeedError(ErrorTemplate.invalid_seed(seed, "not a hex string")) from None
        if len(canonical) != SEED_SIZE:
            reason = f"expected {SEED_SIZE * 2} hex digits, got {len(seed)}"
            raise SeedError(ErrorTemplate.invalid_seed(seed, reason))
        return canonical
    if isinstance(seed, (bytes, bytearray, memoryview)):
        return hashlib.new(SEED_DIGEST, bytes(seed)).digest()
    raise SeedError(ErrorTemplate.invalid_seed(seed, "expected bytes, str, or None"))


class DeterministicRandom:
    """Seeded stream of floats in [0, 1) with an explicit cursor.

    Instances never share mutable state: two instances built from the same
    seed produce the same sequence when driven with the same calls.

    Example:
        >>> r = DeterministicRandom(b"example")
        >>> first = [r.next(), r.next()]
        >>> r.reset()
        >>> [r.next(), r.next()] == first
        True
        >>> DeterministicRandom(r.seed).next() == first[0]
        True
    """

    __slots__ = ("_base", "_canonical", "_cursor")

    def __init__(self, seed: SeedLike = None) -> None:
        self._canonical = canonicalize_seed(seed)
        self._base = hashlib.new(SEED_DIGEST, self._canonical)
        self._cursor = 0

    def next(self) -> float:
        """Draw the next float in [0, 1) and advance the cursor."""
        h = self._base.copy()
        h.update(self._cursor.to_bytes(CURSOR_BYTES, "big"))
        self._cursor += 1
        value = int.from_bytes(h.digest()[:8], "big") >> (64 - DRAW_BITS)
        return value / DRAW_SCALE

    __call__ = next

    def reset(self) -> None:
        """Rewind to the draw-zero state of the canonical seed."""
        self._cursor = 0

    @property
    def seed(self) -> str:
        """Canonical seed as lowercase hex; reproduces this stream."""
        return self._canonical.hex()

    @property
    def canonical_seed(self) -> bytes:
        """Canonical seed bytes."""
        return self._canonical

    @property
    def draws(self) -> int:
        """Number of draws since construction or the last reset."""
        return self._cursor

    def __repr__(self) -> str:
        return f"DeterministicRandom(seed={self.seed!r}, draws={self._cursor})"
