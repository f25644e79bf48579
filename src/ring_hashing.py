from typing import Protocol

import mmh3

# Salt for the secondary hash used when several nodes share a position.
PRIME = 16777619


class HashFunc(Protocol):
    """Maps a byte sequence to a 64-bit unsigned position on the ring."""

    def __call__(self, data: bytes) -> int: ...


def murmur3_64(data: bytes) -> int:
    """Computes the low 64 bits of MurmurHash3 x64-128 (seed 0)."""
    return mmh3.hash64(data, signed=False)[0]


def inner_repr(value) -> str:
    """Salted representation of a lookup key for collision tiebreaks."""
    return f"{PRIME}:{value}"
