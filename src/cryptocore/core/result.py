"""Explicit success/error outcomes for fallible operations.

Primitives raise typed :class:`CryptoCoreError` subclasses. Callers that want a
value/error pair instead of a ``try`` block run the operation through
:func:`capture` and check :attr:`Result.ok` before touching :attr:`Result.value`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from cryptocore.core.exceptions import CryptoCoreError


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[CryptoCoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_name(self) -> Optional[str]:
        """Class name of the error, e.g. ``"InvalidPaddingError"``."""
        return type(self.error).__name__ if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, re-raising the captured error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def capture(fn: Callable[..., T], *args, **kwargs) -> Result[T]:
    """Call ``fn`` and wrap its outcome.

    Only :class:`CryptoCoreError` is captured; programming errors such as
    ``TypeError`` still propagate.
    """
    try:
        return Result(value=fn(*args, **kwargs))
    except CryptoCoreError as exc:
        return Result(error=exc)
