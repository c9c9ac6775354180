"""Small helper to build runtime configuration for the CLI and TUI."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Mapping, Optional

from cryptocore.security.rng import RandomSource, SystemRandomSource


ENV_PASSWORD = "CRYPTOCORE_PASSWORD"
ENV_LOG_LEVEL = "CRYPTOCORE_LOG_LEVEL"
ENV_KEYRING_SERVICE = "CRYPTOCORE_KEYRING_SERVICE"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_KEYRING_SERVICE = "cryptocore"


@dataclass
class AppContext:
    """Container for runtime objects the frontends need."""

    password: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    keyring_service: str = DEFAULT_KEYRING_SERVICE
    source: RandomSource = field(default_factory=SystemRandomSource)


def build_context(
    env: Optional[Mapping[str, str]] = None,
    source: Optional[RandomSource] = None,
) -> AppContext:
    """
    Build an AppContext from environment variables.

    - ``CRYPTOCORE_PASSWORD`` supplies a default password so scripts do not
      have to pass ``--password`` on the command line.
    - ``CRYPTOCORE_LOG_LEVEL`` sets the logging level (default WARNING).
    - ``CRYPTOCORE_KEYRING_SERVICE`` names the keyring service used by
      ``keygen --store``.
    """
    env = os.environ if env is None else env
    return AppContext(
        password=env.get(ENV_PASSWORD) or None,
        log_level=(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
        keyring_service=env.get(ENV_KEYRING_SERVICE) or DEFAULT_KEYRING_SERVICE,
        source=source if source is not None else SystemRandomSource(),
    )
