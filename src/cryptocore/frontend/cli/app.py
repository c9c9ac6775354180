"""Minimal Textual app for password-based string encryption.

Start here with `python -m cryptocore.frontend.cli.app`
"""

from __future__ import annotations

import logging
from typing import Optional

import pyperclip
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Input, Label, Static

from cryptocore.core.result import Result, capture
from cryptocore.frontend.cli.clipboard import copy_to_clipboard
from cryptocore.frontend.cli.context import AppContext, build_context
from cryptocore.frontend.cli.logging_config import configure_logging
from cryptocore.security.crypto import decrypt_string, encrypt_string

logger = logging.getLogger(__name__)


def describe_error(result: Result) -> str:
    # Human-readable status line for a failed operation.
    hints = {
        "InvalidPaddingError": "wrong password or corrupted data",
        "InvalidEncodingError": "input is not a valid envelope",
        "InsufficientDataError": "envelope holds no complete ciphertext",
    }
    hint = hints.get(result.error_name or "", "")
    return f"{result.error_name}: {hint}" if hint else f"{result.error_name}: {result.error}"


class CryptoCoreApp(App):
    """Encrypt or decrypt a line of text with a password."""

    TITLE = "cryptocore"

    CSS = """
    #main { padding: 1 2; border: heavy $surface; }
    .title { padding: 0 0 1 0; text-style: bold; }
    .section-label { color: $text-muted; }
    #buttons { height: auto; padding: 1 0; }
    #output { padding: 1; border: round $surface; min-height: 3; }
    #status { padding: 0 1; height: 2; color: $text-muted; }
    """

    BINDINGS = [
        # function keys: Input claims most ctrl+letter combos
        ("f2", "encrypt", "Encrypt"),
        ("f3", "decrypt", "Decrypt"),
        ("f4", "copy", "Copy"),
    ]

    def __init__(self, ctx: AppContext | None = None):
        self.ctx = ctx or build_context()
        super().__init__()
        self.password_input: Input | None = None
        self.text_input: Input | None = None
        self.output_box: Static | None = None
        self.status_line: Static | None = None
        self.output_text: str = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="main"):
            yield Static("AES-256-CBC text encryption", classes="title")
            yield Label("Password", classes="section-label")
            self.password_input = Input(placeholder="password", password=True, id="password")
            yield self.password_input
            yield Label("Plaintext or envelope", classes="section-label")
            self.text_input = Input(placeholder="text to encrypt / base64 to decrypt", id="input")
            yield self.text_input
            with Horizontal(id="buttons"):
                yield Button("Encrypt", id="encrypt", variant="primary")
                yield Button("Decrypt", id="decrypt")
                yield Button("Copy", id="copy")
            self.output_box = Static("", id="output", markup=False)
            yield self.output_box
            self.status_line = Static("", id="status", markup=False)
            yield self.status_line
        yield Footer()

    def on_mount(self) -> None:
        if self.ctx.password and self.password_input is not None:
            self.password_input.value = self.ctx.password
        if self.text_input is not None:
            self.set_focus(self.text_input)

    def _set_status(self, text: str) -> None:
        if self.status_line is not None:
            self.status_line.update(text)

    def _set_output(self, text: str) -> None:
        self.output_text = text
        if self.output_box is not None:
            self.output_box.update(text)

    def _inputs(self) -> Optional[tuple[str, str]]:
        assert self.password_input is not None and self.text_input is not None
        password = self.password_input.value
        if not password:
            self._set_status("Enter a password first")
            return None
        return self.text_input.value, password

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "encrypt":
            self.action_encrypt()
        elif event.button.id == "decrypt":
            self.action_decrypt()
        elif event.button.id == "copy":
            self.action_copy()

    def action_encrypt(self) -> None:
        values = self._inputs()
        if values is None:
            return
        text, password = values
        res = capture(encrypt_string, text, password, source=self.ctx.source)
        if not res.ok:
            self._set_status(describe_error(res))
            return
        self._set_output(res.value)
        self._set_status("Encrypted")

    def action_decrypt(self) -> None:
        values = self._inputs()
        if values is None:
            return
        text, password = values
        res = capture(decrypt_string, text.strip(), password)
        if not res.ok:
            self._set_output("")
            self._set_status(describe_error(res))
            return
        self._set_output(res.value)
        self._set_status("Decrypted")

    def action_copy(self) -> None:
        if not self.output_text:
            self._set_status("Nothing to copy")
            return
        try:
            copy_to_clipboard(self.output_text)
        except pyperclip.PyperclipException as exc:
            logger.warning("clipboard copy failed: %s", exc)
            self._set_status(f"Copy failed: {exc}")
            return
        self._set_status("Copied to clipboard")


def main() -> None:  # pragma: no cover
    ctx = build_context()
    configure_logging(ctx.log_level)
    CryptoCoreApp(ctx).run()


if __name__ == "__main__":  # pragma: no cover
    main()
