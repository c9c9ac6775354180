"""Unit tests for the result/error pair helpers."""

import pytest

from cryptocore.core.exceptions import CryptoCoreError, InvalidEncodingError, InvalidPaddingError
from cryptocore.core.result import Result, capture
from cryptocore.core.encoding import hex_to_bytes


def test_capture_success():
    res = capture(hex_to_bytes, "abcd")
    assert res.ok
    assert res.value == b"\xab\xcd"
    assert res.error is None
    assert res.error_name is None
    assert res.unwrap() == b"\xab\xcd"


def test_capture_crypto_error():
    res = capture(hex_to_bytes, "abc")
    assert not res.ok
    assert res.value is None
    assert isinstance(res.error, InvalidEncodingError)
    assert res.error_name == "InvalidEncodingError"
    with pytest.raises(InvalidEncodingError):
        res.unwrap()


def test_capture_passes_kwargs():
    def f(a, b=0):
        return a + b

    assert capture(f, 1, b=2).value == 3


def test_capture_does_not_swallow_programming_errors():
    with pytest.raises(TypeError):
        capture(hex_to_bytes, 123)


def test_error_hierarchy():
    assert issubclass(InvalidPaddingError, CryptoCoreError)
    assert Result(error=InvalidPaddingError("x")).error_name == "InvalidPaddingError"
