"""HMAC-SHA256 (RFC 2104) on top of the in-house SHA-256 engine."""
from __future__ import annotations

import hmac

from cryptocore.core.encoding import ByteLike, to_bytes
from cryptocore.core.hashing import BLOCK_SIZE, DIGEST_SIZE, sha256


IPAD = bytes([0x36]) * BLOCK_SIZE
OPAD = bytes([0x5C]) * BLOCK_SIZE


def _normalize_key(key: bytes) -> bytes:
    # keys longer than a block are hashed first, then everything is zero-padded to 64 bytes
    if len(key) > BLOCK_SIZE:
        key = sha256(key)
    return key.ljust(BLOCK_SIZE, b"\x00")


def hmac_sha256(key: ByteLike, message: ByteLike) -> bytes:
    """Return the 32-byte HMAC-SHA256 of ``message`` under ``key``."""
    k = _normalize_key(to_bytes(key))
    inner = sha256(bytes(a ^ b for a, b in zip(k, IPAD)) + to_bytes(message))
    return sha256(bytes(a ^ b for a, b in zip(k, OPAD)) + inner)


def hmac_sha256_hex(key: ByteLike, message: ByteLike) -> str:
    return hmac_sha256(key, message).hex()


def verify_hmac_sha256(key: ByteLike, message: ByteLike, tag: ByteLike) -> bool:
    """Recompute the MAC and compare it to ``tag`` in constant time."""
    tag_b = to_bytes(tag)
    expected = hmac_sha256(key, message)
    if len(tag_b) != DIGEST_SIZE:
        return False
    return hmac.compare_digest(expected, tag_b)
