"""Shared fixtures for the cryptocore test suite."""

import pytest

from cryptocore.core.hashing import sha256


class DeterministicRandomSource:
    """Reproducible byte stream: SHA-256 of seed || counter, concatenated."""

    def __init__(self, seed: bytes = b"cryptocore-tests"):
        self.seed = seed
        self.counter = 0

    def random_bytes(self, n: int) -> bytes:
        out = bytearray()
        while len(out) < n:
            out += sha256(self.seed + self.counter.to_bytes(8, "big"))
            self.counter += 1
        return bytes(out[:n])


class FixedRandomSource:
    """Returns a fixed byte pattern, truncated/repeated to the requested length."""

    def __init__(self, pattern: bytes):
        self.pattern = pattern

    def random_bytes(self, n: int) -> bytes:
        return (self.pattern * (n // len(self.pattern) + 1))[:n]


@pytest.fixture
def det_source():
    return DeterministicRandomSource()


@pytest.fixture
def zero_iv_source():
    return FixedRandomSource(b"\x00")


@pytest.fixture
def aes_key():
    return bytes(range(32))


@pytest.fixture
def make_det_source():
    """Factory for fresh deterministic sources replaying the same stream."""
    return DeterministicRandomSource
