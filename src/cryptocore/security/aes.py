"""
AES-256 (FIPS 197) with CBC chaining and PKCS#7 padding, in pure Python.

Public API:
- expand_key(key: bytes) -> tuple of 15 round keys (16 bytes each)
- encrypt_block / decrypt_block: single 16-byte block transforms
- pkcs7_pad / pkcs7_unpad
- aes_encrypt(plaintext, key, iv=None, source=None) -> AESResult(ciphertext, iv)
- aes_decrypt(ciphertext, key, iv) -> plaintext bytes

All lookup tables are immutable tuples built at import time. Round keys are
computed per call and never cached.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Tuple

from cryptocore.core.encoding import ByteLike, to_bytes
from cryptocore.core.exceptions import (
    InsufficientDataError,
    InvalidIVLengthError,
    InvalidKeyLengthError,
    InvalidPaddingError,
)
from cryptocore.security.rng import RandomSource, generate_iv

logger = logging.getLogger(__name__)

BLOCK_SIZE = 16
KEY_SIZE = 32
NK = 8    # key length in 32-bit words
NR = 14   # rounds
NB = 4    # block length in 32-bit words

# ---------------------------
# Static tables
# ---------------------------

SBOX = (
    0x63, 0x7C, 0x77, 0x7B, 0xF2, 0x6B, 0x6F, 0xC5, 0x30, 0x01, 0x67, 0x2B, 0xFE, 0xD7, 0xAB, 0x76,
    0xCA, 0x82, 0xC9, 0x7D, 0xFA, 0x59, 0x47, 0xF0, 0xAD, 0xD4, 0xA2, 0xAF, 0x9C, 0xA4, 0x72, 0xC0,
    0xB7, 0xFD, 0x93, 0x26, 0x36, 0x3F, 0xF7, 0xCC, 0x34, 0xA5, 0xE5, 0xF1, 0x71, 0xD8, 0x31, 0x15,
    0x04, 0xC7, 0x23, 0xC3, 0x18, 0x96, 0x05, 0x9A, 0x07, 0x12, 0x80, 0xE2, 0xEB, 0x27, 0xB2, 0x75,
    0x09, 0x83, 0x2C, 0x1A, 0x1B, 0x6E, 0x5A, 0xA0, 0x52, 0x3B, 0xD6, 0xB3, 0x29, 0xE3, 0x2F, 0x84,
    0x53, 0xD1, 0x00, 0xED, 0x20, 0xFC, 0xB1, 0x5B, 0x6A, 0xCB, 0xBE, 0x39, 0x4A, 0x4C, 0x58, 0xCF,
    0xD0, 0xEF, 0xAA, 0xFB, 0x43, 0x4D, 0x33, 0x85, 0x45, 0xF9, 0x02, 0x7F, 0x50, 0x3C, 0x9F, 0xA8,
    0x51, 0xA3, 0x40, 0x8F, 0x92, 0x9D, 0x38, 0xF5, 0xBC, 0xB6, 0xDA, 0x21, 0x10, 0xFF, 0xF3, 0xD2,
    0xCD, 0x0C, 0x13, 0xEC, 0x5F, 0x97, 0x44, 0x17, 0xC4, 0xA7, 0x7E, 0x3D, 0x64, 0x5D, 0x19, 0x73,
    0x60, 0x81, 0x4F, 0xDC, 0x22, 0x2A, 0x90, 0x88, 0x46, 0xEE, 0xB8, 0x14, 0xDE, 0x5E, 0x0B, 0xDB,
    0xE0, 0x32, 0x3A, 0x0A, 0x49, 0x06, 0x24, 0x5C, 0xC2, 0xD3, 0xAC, 0x62, 0x91, 0x95, 0xE4, 0x79,
    0xE7, 0xC8, 0x37, 0x6D, 0x8D, 0xD5, 0x4E, 0xA9, 0x6C, 0x56, 0xF4, 0xEA, 0x65, 0x7A, 0xAE, 0x08,
    0xBA, 0x78, 0x25, 0x2E, 0x1C, 0xA6, 0xB4, 0xC6, 0xE8, 0xDD, 0x74, 0x1F, 0x4B, 0xBD, 0x8B, 0x8A,
    0x70, 0x3E, 0xB5, 0x66, 0x48, 0x03, 0xF6, 0x0E, 0x61, 0x35, 0x57, 0xB9, 0x86, 0xC1, 0x1D, 0x9E,
    0xE1, 0xF8, 0x98, 0x11, 0x69, 0xD9, 0x8E, 0x94, 0x9B, 0x1E, 0x87, 0xE9, 0xCE, 0x55, 0x28, 0xDF,
    0x8C, 0xA1, 0x89, 0x0D, 0xBF, 0xE6, 0x42, 0x68, 0x41, 0x99, 0x2D, 0x0F, 0xB0, 0x54, 0xBB, 0x16,
)

INV_SBOX = tuple(SBOX.index(i) for i in range(256))

# RCON[i] is x^(i-1) in GF(2^8); AES-256 only reaches index 7
RCON = (0x00, 0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40)


def _gf_mul(a: int, b: int) -> int:
    p = 0
    for _ in range(8):
        if b & 1:
            p ^= a
        hi = a & 0x80
        a = (a << 1) & 0xFF
        if hi:
            a ^= 0x1B
        b >>= 1
    return p


MUL2 = tuple(_gf_mul(i, 2) for i in range(256))
MUL3 = tuple(_gf_mul(i, 3) for i in range(256))
MUL9 = tuple(_gf_mul(i, 9) for i in range(256))
MUL11 = tuple(_gf_mul(i, 11) for i in range(256))
MUL13 = tuple(_gf_mul(i, 13) for i in range(256))
MUL14 = tuple(_gf_mul(i, 14) for i in range(256))


class AESResult(NamedTuple):
    ciphertext: bytes
    iv: bytes


# ---------------------------
# Key schedule
# ---------------------------

def _sub_word(w: int) -> int:
    return (
        (SBOX[(w >> 24) & 0xFF] << 24)
        | (SBOX[(w >> 16) & 0xFF] << 16)
        | (SBOX[(w >> 8) & 0xFF] << 8)
        | SBOX[w & 0xFF]
    )


def _rot_word(w: int) -> int:
    return ((w << 8) & 0xFFFFFFFF) | ((w >> 24) & 0xFF)


def _check_key(key: bytes) -> None:
    if len(key) != KEY_SIZE:
        raise InvalidKeyLengthError(f"AES-256 requires a {KEY_SIZE}-byte key, got {len(key)}")


def _check_iv(iv: bytes) -> None:
    if len(iv) != BLOCK_SIZE:
        raise InvalidIVLengthError(f"IV must be {BLOCK_SIZE} bytes, got {len(iv)}")


def expand_key(key: bytes) -> Tuple[bytes, ...]:
    """Expand a 32-byte key into 15 round keys of 16 bytes (60 words)."""
    _check_key(key)
    words = [int.from_bytes(key[4 * i:4 * i + 4], "big") for i in range(NK)]
    for i in range(NK, NB * (NR + 1)):
        temp = words[i - 1]
        if i % NK == 0:
            temp = _sub_word(_rot_word(temp)) ^ (RCON[i // NK] << 24)
        elif i % NK == 4:
            temp = _sub_word(temp)
        words.append(words[i - NK] ^ temp)
    return tuple(
        b"".join(words[4 * r + c].to_bytes(4, "big") for c in range(4))
        for r in range(NR + 1)
    )


# ---------------------------
# Round transforms
# ---------------------------
# state is 16 bytes in column-major order: byte (row r, column c) is state[4*c + r]

def _add_round_key(state: bytearray, round_key: bytes) -> None:
    for i in range(16):
        state[i] ^= round_key[i]


def _sub_bytes(state: bytearray) -> None:
    for i in range(16):
        state[i] = SBOX[state[i]]


def _inv_sub_bytes(state: bytearray) -> None:
    for i in range(16):
        state[i] = INV_SBOX[state[i]]


def _shift_rows(state: bytearray) -> None:
    # row r rotates left by r columns
    s = bytes(state)
    for r in range(1, 4):
        for c in range(4):
            state[4 * c + r] = s[4 * ((c + r) % 4) + r]


def _inv_shift_rows(state: bytearray) -> None:
    s = bytes(state)
    for r in range(1, 4):
        for c in range(4):
            state[4 * ((c + r) % 4) + r] = s[4 * c + r]


def _mix_columns(state: bytearray) -> None:
    for c in range(4):
        i = 4 * c
        a0, a1, a2, a3 = state[i], state[i + 1], state[i + 2], state[i + 3]
        state[i] = MUL2[a0] ^ MUL3[a1] ^ a2 ^ a3
        state[i + 1] = a0 ^ MUL2[a1] ^ MUL3[a2] ^ a3
        state[i + 2] = a0 ^ a1 ^ MUL2[a2] ^ MUL3[a3]
        state[i + 3] = MUL3[a0] ^ a1 ^ a2 ^ MUL2[a3]


def _inv_mix_columns(state: bytearray) -> None:
    for c in range(4):
        i = 4 * c
        a0, a1, a2, a3 = state[i], state[i + 1], state[i + 2], state[i + 3]
        state[i] = MUL14[a0] ^ MUL11[a1] ^ MUL13[a2] ^ MUL9[a3]
        state[i + 1] = MUL9[a0] ^ MUL14[a1] ^ MUL11[a2] ^ MUL13[a3]
        state[i + 2] = MUL13[a0] ^ MUL9[a1] ^ MUL14[a2] ^ MUL11[a3]
        state[i + 3] = MUL11[a0] ^ MUL13[a1] ^ MUL9[a2] ^ MUL14[a3]


def encrypt_block(block: bytes, round_keys: Tuple[bytes, ...]) -> bytes:
    if len(block) != BLOCK_SIZE:
        raise ValueError("block must be 16 bytes")
    state = bytearray(block)
    _add_round_key(state, round_keys[0])
    for rnd in range(1, NR):
        _sub_bytes(state)
        _shift_rows(state)
        _mix_columns(state)
        _add_round_key(state, round_keys[rnd])
    # final round has no MixColumns
    _sub_bytes(state)
    _shift_rows(state)
    _add_round_key(state, round_keys[NR])
    return bytes(state)


def decrypt_block(block: bytes, round_keys: Tuple[bytes, ...]) -> bytes:
    if len(block) != BLOCK_SIZE:
        raise ValueError("block must be 16 bytes")
    state = bytearray(block)
    _add_round_key(state, round_keys[NR])
    for rnd in range(NR - 1, 0, -1):
        _inv_shift_rows(state)
        _inv_sub_bytes(state)
        _add_round_key(state, round_keys[rnd])
        _inv_mix_columns(state)
    _inv_shift_rows(state)
    _inv_sub_bytes(state)
    _add_round_key(state, round_keys[0])
    return bytes(state)


# ---------------------------
# PKCS#7
# ---------------------------

def pkcs7_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Always adds 1..block_size bytes, each equal to the pad length."""
    pad_len = block_size - (len(data) % block_size)
    return data + bytes([pad_len]) * pad_len


def pkcs7_unpad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    """Strip PKCS#7 padding, checking every byte of the final block.

    The check touches all ``block_size`` trailing bytes regardless of the
    claimed length and folds mismatches into one accumulator, so there is a
    single rejection point.
    """
    if not data or len(data) % block_size != 0:
        raise InsufficientDataError("padded data must be a non-empty multiple of the block size")

    pad_len = data[-1]
    # 1 when pad_len == 0, 1 when pad_len > block_size, else 0
    bad = ((pad_len - 1) >> 8) & 1
    bad |= ((block_size - pad_len) >> 8) & 1

    diff = 0
    for i in range(block_size):
        in_pad = ((i - pad_len) >> 8) & 1  # 1 while i < pad_len
        diff |= (data[-1 - i] ^ pad_len) & (-in_pad & 0xFF)

    if bad | diff:
        raise InvalidPaddingError("invalid PKCS#7 padding")
    return data[:-pad_len]


# ---------------------------
# CBC
# ---------------------------

def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def aes_encrypt(
    plaintext: ByteLike,
    key: ByteLike,
    iv: Optional[ByteLike] = None,
    source: Optional[RandomSource] = None,
) -> AESResult:
    """AES-256-CBC encrypt ``plaintext`` after PKCS#7 padding.

    A fresh IV is drawn from ``source`` (or the system CSPRNG) when ``iv`` is
    not given. Returns the ciphertext together with the IV that was used.

    Raises:
        InvalidKeyLengthError: key is not 32 bytes.
        InvalidIVLengthError: an explicit IV is not 16 bytes.
    """
    key_b = to_bytes(key)
    _check_key(key_b)
    iv_b = to_bytes(iv) if iv is not None else generate_iv(source)
    _check_iv(iv_b)

    round_keys = expand_key(key_b)
    pt = pkcs7_pad(to_bytes(plaintext))
    out = bytearray()
    prev = iv_b
    for i in range(0, len(pt), BLOCK_SIZE):
        prev = encrypt_block(_xor(pt[i:i + BLOCK_SIZE], prev), round_keys)
        out += prev
    logger.debug("aes_encrypt: %d plaintext bytes -> %d ciphertext bytes", len(pt), len(out))
    return AESResult(bytes(out), iv_b)


def aes_decrypt(ciphertext: ByteLike, key: ByteLike, iv: ByteLike) -> bytes:
    """AES-256-CBC decrypt and strip PKCS#7 padding.

    Raises:
        InvalidKeyLengthError: key is not 32 bytes.
        InvalidIVLengthError: IV is not 16 bytes.
        InsufficientDataError: ciphertext is empty or not a multiple of 16.
        InvalidPaddingError: padding check failed (usually a wrong key).
    """
    key_b = to_bytes(key)
    _check_key(key_b)
    iv_b = to_bytes(iv)
    _check_iv(iv_b)
    ct = to_bytes(ciphertext)
    if not ct or len(ct) % BLOCK_SIZE != 0:
        raise InsufficientDataError(
            f"ciphertext length must be a non-zero multiple of {BLOCK_SIZE}, got {len(ct)}"
        )

    round_keys = expand_key(key_b)
    out = bytearray()
    prev = iv_b
    for i in range(0, len(ct), BLOCK_SIZE):
        block = ct[i:i + BLOCK_SIZE]
        out += _xor(decrypt_block(block, round_keys), prev)
        prev = block
    logger.debug("aes_decrypt: %d ciphertext bytes", len(ct))
    return pkcs7_unpad(bytes(out))
