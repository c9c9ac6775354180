"""Byte, text, hex and base64 conversions shared by every primitive.

All primitives accept a "byte-like" value (text or raw bytes) at their public
boundary and normalize it once with :func:`to_bytes`; everything below that
boundary works on ``bytes`` only.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Union

from cryptocore.core.exceptions import InvalidEncodingError


ByteLike = Union[str, bytes, bytearray, memoryview]

# surrogateescape keeps bytes -> text -> bytes lossless for non-UTF-8 input
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def string_to_bytes(text: str) -> bytes:
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


def bytes_to_string(data: ByteLike) -> str:
    return to_bytes(data).decode(TEXT_ENCODING, TEXT_ERRORS)


def to_bytes(data: ByteLike) -> bytes:
    """Normalize a byte-like value to ``bytes``.

    Text is encoded with :func:`string_to_bytes`; bytes, bytearray and
    memoryview are copied into an immutable ``bytes``.
    """
    if isinstance(data, str):
        return string_to_bytes(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected str or bytes-like, got {type(data).__name__}")


def bytes_to_hex(data: ByteLike) -> str:
    """Lowercase hex, two digits per byte."""
    return to_bytes(data).hex()


def hex_to_bytes(text: str) -> bytes:
    """Decode a hex string.

    Raises:
        InvalidEncodingError: odd length or a character outside ``[0-9a-fA-F]``.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    if len(text) % 2 != 0:
        raise InvalidEncodingError(f"hex string has odd length ({len(text)})")
    if not _HEX_RE.fullmatch(text):
        raise InvalidEncodingError("hex string contains non-hex characters")
    return bytes.fromhex(text)


def bytes_to_base64(data: ByteLike) -> str:
    """Standard-alphabet base64 with ``=`` padding."""
    return base64.b64encode(to_bytes(data)).decode("ascii")


def base64_to_bytes(text: ByteLike) -> bytes:
    """Decode standard base64.

    Raises:
        InvalidEncodingError: characters outside the alphabet or bad padding.
    """
    if isinstance(text, str):
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise InvalidEncodingError("base64 input contains non-ASCII characters") from exc
    else:
        raw = to_bytes(text)
    if len(raw) % 4 != 0:
        raise InvalidEncodingError(f"base64 length must be a multiple of 4, got {len(raw)}")
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise InvalidEncodingError(f"invalid base64: {exc}") from exc
