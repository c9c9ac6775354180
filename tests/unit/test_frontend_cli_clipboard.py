"""Unit tests for the clipboard helper."""

from unittest.mock import patch

from cryptocore.frontend.cli.clipboard import copy_to_clipboard


def test_copy_to_clipboard_delegates_to_pyperclip():
    with patch("cryptocore.frontend.cli.clipboard.pyperclip.copy") as copy:
        copy_to_clipboard("envelope")
    copy.assert_called_once_with("envelope")
