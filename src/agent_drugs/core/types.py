"""Core types for agent-drugs.

This module provides:
- Result[T, E]: success-or-failure value used for expected domain outcomes
- Clock: the injectable "now" source used by every time-dependent operation
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import cast


@dataclass(frozen=True, slots=True)
class Result[T, E]:
    """Either an Ok value or an Err value.

    Expected outcomes that a caller may branch on (an unknown modifier name,
    an unknown tool) travel as Err results. Exceptions are kept for failures
    that no caller can meaningfully recover from, such as a malformed request
    or a broken database.

    Usage:
        found: Result[ModifierDefinition, ModifierNotFoundError] = Result.ok(defn)
        if found.is_ok:
            apply(found.value)
        else:
            report(found.error)
    """

    _value: T | None
    _error: E | None
    _is_ok: bool

    @classmethod
    def ok(cls, value: T) -> Result[T, E]:
        """Wrap a success value."""
        return cls(_value=value, _error=None, _is_ok=True)

    @classmethod
    def err(cls, error: E) -> Result[T, E]:
        """Wrap a failure value."""
        return cls(_value=None, _error=error, _is_ok=False)

    @property
    def is_ok(self) -> bool:
        """Return True for an Ok result."""
        return self._is_ok

    @property
    def is_err(self) -> bool:
        """Return True for an Err result."""
        return not self._is_ok

    def __repr__(self) -> str:
        if self._is_ok:
            return f"Ok({self._value!r})"
        return f"Err({self._error!r})"

    @property
    def value(self) -> T:
        """Return the Ok value.

        Raises:
            ValueError: If the result is Err.
        """
        if not self._is_ok:
            msg = "Cannot access value on Err result"
            raise ValueError(msg)
        return cast(T, self._value)

    @property
    def error(self) -> E:
        """Return the Err value.

        Raises:
            ValueError: If the result is Ok.
        """
        if self._is_ok:
            msg = "Cannot access error on Ok result"
            raise ValueError(msg)
        return cast(E, self._error)


Clock = Callable[[], datetime]
"""Callable returning the current time as a timezone-aware UTC datetime."""


def utc_now() -> datetime:
    """Return the current wall-clock time in UTC."""
    return datetime.now(UTC)
