"""Unit tests for the secure random source."""

from unittest.mock import patch

import pytest

from cryptocore.security import rng


def test_system_source_lengths():
    src = rng.SystemRandomSource()
    for n in (0, 1, 16, 32, 100):
        assert len(src.random_bytes(n)) == n


def test_system_source_rejects_negative():
    with pytest.raises(ValueError):
        rng.SystemRandomSource().random_bytes(-1)


def test_system_source_uses_os_urandom():
    with patch("cryptocore.security.rng.os.urandom", return_value=b"\x07" * 4) as mock:
        assert rng.SystemRandomSource().random_bytes(4) == b"\x07" * 4
    mock.assert_called_once_with(4)


def test_system_source_satisfies_protocol():
    assert isinstance(rng.SystemRandomSource(), rng.RandomSource)


def test_generate_aes_key_and_iv_sizes():
    assert len(rng.generate_aes_key()) == 32
    assert len(rng.generate_iv()) == 16


def test_outputs_differ_between_calls():
    assert rng.generate_aes_key() != rng.generate_aes_key()
    assert rng.generate_iv() != rng.generate_iv()


def test_injected_source_is_reproducible(det_source, make_det_source):
    first = rng.generate_aes_key(det_source)
    replay = rng.generate_aes_key(make_det_source())
    assert first == replay
    assert rng.generate_iv(det_source) != first[:16]


def test_short_source_output_is_an_error():
    class Broken:
        def random_bytes(self, n):
            return b"\x00"

    with pytest.raises(RuntimeError, match="expected 16"):
        rng.random_bytes(16, Broken())
