"""Unit tests for byte / text / hex / base64 conversions."""

import base64
import os

import pytest

from cryptocore.core import encoding
from cryptocore.core.exceptions import InvalidEncodingError


# ==============================================================================
# Text <-> bytes
# ==============================================================================

def test_string_to_bytes_ascii():
    assert encoding.string_to_bytes("abc") == b"abc"


def test_string_to_bytes_is_utf8():
    assert encoding.string_to_bytes("café") == b"caf\xc3\xa9"


def test_bytes_to_string_roundtrip_text():
    text = "héllo 世界 \U0001F600"
    assert encoding.bytes_to_string(encoding.string_to_bytes(text)) == text


def test_bytes_to_string_is_lossless_for_invalid_utf8():
    """Arbitrary bytes map to text and back without loss."""
    data = bytes(range(256))
    text = encoding.bytes_to_string(data)
    assert encoding.string_to_bytes(text) == data


def test_string_to_bytes_rejects_non_str():
    with pytest.raises(TypeError):
        encoding.string_to_bytes(b"bytes")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("abc", b"abc"),
        (b"abc", b"abc"),
        (bytearray(b"abc"), b"abc"),
        (memoryview(b"abc"), b"abc"),
    ],
)
def test_to_bytes_accepts_byte_like(value, expected):
    out = encoding.to_bytes(value)
    assert out == expected
    assert type(out) is bytes


def test_to_bytes_rejects_other_types():
    with pytest.raises(TypeError, match="expected str or bytes-like"):
        encoding.to_bytes(123)


# ==============================================================================
# Hex
# ==============================================================================

def test_bytes_to_hex_lowercase():
    assert encoding.bytes_to_hex(b"\x00\xab\xff") == "00abff"


def test_hex_to_bytes_accepts_mixed_case():
    assert encoding.hex_to_bytes("00AbfF") == b"\x00\xab\xff"


def test_hex_to_bytes_empty():
    assert encoding.hex_to_bytes("") == b""


def test_hex_to_bytes_odd_length():
    with pytest.raises(InvalidEncodingError, match="odd length"):
        encoding.hex_to_bytes("abc")


@pytest.mark.parametrize("bad", ["zz", "0g", "ab cd", "12\n", "0x12"])
def test_hex_to_bytes_non_hex(bad):
    with pytest.raises(InvalidEncodingError):
        encoding.hex_to_bytes(bad)


def test_hex_identity_random():
    for n in (0, 1, 15, 16, 17, 255):
        data = os.urandom(n)
        assert encoding.hex_to_bytes(encoding.bytes_to_hex(data)) == data


# ==============================================================================
# Base64
# ==============================================================================

def test_bytes_to_base64_matches_stdlib():
    data = b"any carnal pleas"
    assert encoding.bytes_to_base64(data) == base64.b64encode(data).decode()


def test_base64_to_bytes_accepts_bytes_input():
    assert encoding.base64_to_bytes(b"YWJj") == b"abc"


@pytest.mark.parametrize("bad", ["YWJ", "YW=j", "YWJj!", "YW Jj", "Y===", "éééé", "YWJj==", "YWI=="])
def test_base64_to_bytes_rejects_malformed(bad):
    with pytest.raises(InvalidEncodingError):
        encoding.base64_to_bytes(bad)


def test_base64_identity_random():
    for n in (0, 1, 2, 3, 4, 31, 32, 33, 1000):
        data = os.urandom(n)
        assert encoding.base64_to_bytes(encoding.bytes_to_base64(data)) == data
