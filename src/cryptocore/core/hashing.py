"""SHA-256 (FIPS 180-4) implemented over whole inputs.

The running hash state is local to each call: it starts from ``H_INITIAL``,
absorbs one 64-byte block at a time and is serialized big-endian at the end.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from cryptocore.core.encoding import ByteLike, to_bytes


BLOCK_SIZE = 64  # bytes per compression block
DIGEST_SIZE = 32

MASK_32 = 0xFFFFFFFF

# first 32 bits of the fractional parts of the square roots of the first 8 primes
H_INITIAL = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

# first 32 bits of the fractional parts of the cube roots of the first 64 primes
K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5, 0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3, 0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC, 0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7, 0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13, 0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3, 0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5, 0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208, 0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

def _rotr(value: int, amount: int) -> int:
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _small_sigma0(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def _small_sigma1(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def _big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def _ch(x: int, y: int, z: int) -> int:
    return (x & y) ^ (~x & MASK_32 & z)


def _maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def pad_message(data: bytes) -> bytes:
    """Append 0x80, zero fill to 56 mod 64, then the 64-bit big-endian bit length."""
    bit_length = (len(data) * 8) & 0xFFFFFFFFFFFFFFFF
    zeros = (55 - len(data)) % BLOCK_SIZE
    return data + b"\x80" + b"\x00" * zeros + bit_length.to_bytes(8, "big")


def message_schedule(block: bytes) -> List[int]:
    """Expand one 64-byte block into the 64-word schedule."""
    w = [int.from_bytes(block[i:i + 4], "big") for i in range(0, BLOCK_SIZE, 4)]
    for i in range(16, 64):
        w.append((_small_sigma1(w[i - 2]) + w[i - 7] + _small_sigma0(w[i - 15]) + w[i - 16]) & MASK_32)
    return w


def compress(state: Sequence[int], block: bytes) -> List[int]:
    """Run the 64 rounds for one block and fold the result into ``state``."""
    w = message_schedule(block)
    a, b, c, d, e, f, g, h = state

    for i in range(64):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[i] + w[i]) & MASK_32
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32
        h = g
        g = f
        f = e
        e = (d + t1) & MASK_32
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_32

    return [(s + v) & MASK_32 for s, v in zip(state, (a, b, c, d, e, f, g, h))]


def sha256(data: ByteLike) -> bytes:
    """Return the 32-byte SHA-256 digest of ``data``.

    Text is normalized with :func:`cryptocore.core.encoding.to_bytes` first.

    >>> sha256(b"abc").hex()[:16]
    'ba7816bf8f01cfea'
    """
    padded = pad_message(to_bytes(data))
    state = list(H_INITIAL)
    for offset in range(0, len(padded), BLOCK_SIZE):
        state = compress(state, padded[offset:offset + BLOCK_SIZE])
    return b"".join(word.to_bytes(4, "big") for word in state)


def sha256_hex(data: ByteLike) -> str:
    return sha256(data).hex()


def sha256_file(file_path: Path | str) -> bytes:
    # Whole-input digest, so the file is read in one go.
    return sha256(Path(file_path).read_bytes())


def sha256_file_hex(file_path: Path | str) -> str:
    return sha256_file(file_path).hex()
