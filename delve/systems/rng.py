"""Domain-separated deterministic RNG using xxhash.

Formula: RNG_Value = Hash(Seed, Domain, StreamID, Counter)

Generation draws a long sequence of numbers, so ``RngStream`` walks the
counter forward and exposes the ``randint``/``random`` surface the map
generator consumes. Two streams on different domains never share values.
"""

from __future__ import annotations

import struct
from typing import Protocol

import xxhash

from delve.core.enums import Domain


class RandomSource(Protocol):
    """Anything that can feed the generator: ``RngStream`` or ``random.Random``."""

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, stream_id, counter) with no
    internal mutable state.
    """

    __slots__ = ("_seed",)

    _FLOAT_SCALE = 1.0 / (1 << 53)

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, stream_id: int, counter: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, stream_id, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, stream_id: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        # top 53 bits are exact in a double, so the result stays below 1.0
        return (self._hash(domain, stream_id, counter) >> 11) * self._FLOAT_SCALE

    def next_int(self, domain: Domain, stream_id: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        span = high - low + 1
        return low + ((self._hash(domain, stream_id, counter) * span) >> 64)

    def stream(self, domain: Domain, stream_id: int = 0) -> RngStream:
        return RngStream(self, domain, stream_id)


class RngStream:
    """Sequential view over a DeterministicRNG domain."""

    __slots__ = ("_rng", "_domain", "_stream_id", "_cursor")

    def __init__(self, rng: DeterministicRNG, domain: Domain, stream_id: int = 0) -> None:
        self._rng = rng
        self._domain = domain
        self._stream_id = stream_id
        self._cursor = 0

    @property
    def cursor(self) -> int:
        """Number of values drawn so far."""
        return self._cursor

    def _advance(self) -> int:
        c = self._cursor
        self._cursor += 1
        return c

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in [a, b] inclusive."""
        if a > b:
            raise ValueError(f"empty range [{a}, {b}]")
        return self._rng.next_int(self._domain, self._stream_id, self._advance(), a, b)

    def random(self) -> float:
        """Uniform float in [0.0, 1.0)."""
        return self._rng.next_float(self._domain, self._stream_id, self._advance())
