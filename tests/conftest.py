"""Shared fixtures and hash functions for ring tests."""

import pytest

from ring_hashing import PRIME
from ring_logger import Logger


def slot_hash(data: bytes) -> int:
    """
    Predictable hash for collision tests.

    "<node letter><i>" maps to i * 10, so every node shares the same
    positions; "k<n>" maps to n, and the salted form "<PRIME>:k<n>" also
    maps to n.
    """
    text = data.decode()
    prefix = f"{PRIME}:"
    if text.startswith(prefix):
        text = text[len(prefix):]
    if text.startswith("k"):
        return int(text[1:])
    return int(text[1:]) * 10


@pytest.fixture
def keys():
    return [f"entity:{i}" for i in range(10000)]


@pytest.fixture(autouse=True)
def reset_loggers():
    yield
    Logger.close_all()
