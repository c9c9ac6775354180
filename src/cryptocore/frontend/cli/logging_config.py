"""Lightweight logging setup for the CLI and TUI."""

import logging
import sys


def configure_logging(level: int | str = logging.WARNING) -> None:
    # Configure root logger once; stderr keeps stdout clean for command output.
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
