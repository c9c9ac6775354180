"""Secure random source used for AES keys and CBC IVs.

Callers may inject any object with a ``random_bytes(n)`` method (tests use a
deterministic one); production wiring uses :class:`SystemRandomSource`.
"""
from __future__ import annotations

import os
from typing import Optional, Protocol, runtime_checkable


AES_KEY_SIZE = 32
IV_SIZE = 16


@runtime_checkable
class RandomSource(Protocol):
    def random_bytes(self, n: int) -> bytes:
        ...


class SystemRandomSource:
    """CSPRNG backed by ``os.urandom``. Stateless, safe to share across threads."""

    def random_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        return os.urandom(n)


DEFAULT_SOURCE: RandomSource = SystemRandomSource()


def random_bytes(n: int, source: Optional[RandomSource] = None) -> bytes:
    src = source if source is not None else DEFAULT_SOURCE
    data = src.random_bytes(n)
    if len(data) != n:
        raise RuntimeError(f"random source returned {len(data)} bytes, expected {n}")
    return bytes(data)


def generate_aes_key(source: Optional[RandomSource] = None) -> bytes:
    """Return 32 fresh random bytes for an AES-256 key."""
    return random_bytes(AES_KEY_SIZE, source)


def generate_iv(source: Optional[RandomSource] = None) -> bytes:
    """Return 16 fresh random bytes for a CBC IV."""
    return random_bytes(IV_SIZE, source)
