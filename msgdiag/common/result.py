"""Success-or-failure envelope for steps that must never raise to their caller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a step: either a value or the exception that stopped it."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, value: Optional[T]) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: Exception) -> 'Result[T]':
        return cls(error=error)

    @classmethod
    def capture(cls, func: Callable[..., T], *args, **kwargs) -> 'Result[T]':
        """Run ``func`` and wrap its return value or the exception it raised."""
        try:
            return cls.ok(func(*args, **kwargs))
        except Exception as exc:
            return cls.failure(exc)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: Optional[T]) -> Optional[T]:
        if self.error is not None:
            return default
        return self.value
