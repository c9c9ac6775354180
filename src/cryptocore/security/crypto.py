"""Password-based string encryption.

Envelope layout (base64 of the concatenation):
- 16 bytes: IV
- N bytes: AES-256-CBC ciphertext of the PKCS#7-padded UTF-8 plaintext

The key is a single SHA-256 pass over the password: no salt, no iteration
count, and no MAC over the envelope. Existing envelopes depend on exactly this
format, so the derivation and layout stay as they are until a versioned
format replaces them.
"""
from __future__ import annotations

import logging
from typing import Optional

from cryptocore.core.encoding import (
    ByteLike,
    base64_to_bytes,
    bytes_to_base64,
    bytes_to_string,
    to_bytes,
)
from cryptocore.core.exceptions import InvalidEncodingError
from cryptocore.core.hashing import sha256
from cryptocore.security.aes import BLOCK_SIZE, aes_decrypt, aes_encrypt
from cryptocore.security.rng import RandomSource, generate_iv

logger = logging.getLogger(__name__)

IV_SIZE = BLOCK_SIZE


def derive_key(password: ByteLike) -> bytes:
    """32-byte AES key = SHA-256(password)."""
    return sha256(to_bytes(password))


def encrypt_string(
    plaintext: ByteLike,
    password: ByteLike,
    source: Optional[RandomSource] = None,
) -> str:
    key = derive_key(password)
    iv = generate_iv(source)
    result = aes_encrypt(plaintext, key, iv)
    logger.debug("encrypt_string: %d ciphertext bytes", len(result.ciphertext))
    return bytes_to_base64(result.iv + result.ciphertext)


def decrypt_string(encoded: ByteLike, password: ByteLike) -> str:
    """Reverse :func:`encrypt_string`.

    Raises:
        InvalidEncodingError: not base64, or shorter than an IV once decoded.
        InsufficientDataError: no ciphertext blocks after the IV, or a partial block.
        InvalidPaddingError: padding check failed, typically a wrong password.
    """
    raw = base64_to_bytes(encoded)
    if len(raw) < IV_SIZE:
        raise InvalidEncodingError(f"envelope too short: {len(raw)} bytes, need at least {IV_SIZE}")
    iv, ciphertext = raw[:IV_SIZE], raw[IV_SIZE:]
    plaintext = aes_decrypt(ciphertext, derive_key(password), iv)
    logger.debug("decrypt_string: %d plaintext bytes", len(plaintext))
    return bytes_to_string(plaintext)
