"""Security primitives for cryptocore.

This package provides:
- AES-256 block cipher with CBC chaining and PKCS#7 padding
- HMAC-SHA256 over the in-house SHA-256 engine
- an injectable secure random source for keys and IVs
- password-based string encryption (base64 IV || ciphertext envelope)

SHA-256 and the encoding helpers live in :mod:`cryptocore.core` and are
re-exported here so callers have one import point.
"""

from cryptocore.core.encoding import (
    ByteLike,
    base64_to_bytes,
    bytes_to_base64,
    bytes_to_hex,
    bytes_to_string,
    hex_to_bytes,
    string_to_bytes,
)
from cryptocore.core.hashing import sha256, sha256_hex, sha256_file, sha256_file_hex
from .rng import RandomSource, SystemRandomSource, random_bytes, generate_aes_key, generate_iv
from .aes import AESResult, aes_encrypt, aes_decrypt
from .mac import hmac_sha256, hmac_sha256_hex, verify_hmac_sha256
from .crypto import derive_key, encrypt_string, decrypt_string

__all__ = [
    "ByteLike",
    "base64_to_bytes",
    "bytes_to_base64",
    "bytes_to_hex",
    "bytes_to_string",
    "hex_to_bytes",
    "string_to_bytes",
    "sha256",
    "sha256_hex",
    "sha256_file",
    "sha256_file_hex",
    "RandomSource",
    "SystemRandomSource",
    "random_bytes",
    "generate_aes_key",
    "generate_iv",
    "AESResult",
    "aes_encrypt",
    "aes_decrypt",
    "hmac_sha256",
    "hmac_sha256_hex",
    "verify_hmac_sha256",
    "derive_key",
    "encrypt_string",
    "decrypt_string",
]
