"""Tagged success/failure and presence/absence values.

``Result`` and ``Maybe`` are returned instead of raising or handing back
``None``. Contents are read through ``case_of`` (one handler per tag),
``get_or_else`` or a ``match`` statement on the variant classes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
R = TypeVar("R")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Return a new ``Ok`` holding ``fn(value)``."""

        return Ok(fn(self.value))

    def case_of(self, *, ok: Callable[[T], R], err: Callable[[Any], R]) -> R:
        return ok(self.value)

    def get_or_else(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying ``error``."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        """Pass the error through; ``fn`` is never called."""

        return self

    def case_of(self, *, ok: Callable[[Any], R], err: Callable[[E], R]) -> R:
        return err(self.error)

    def get_or_else(self, default: U) -> U:
        return default


@dataclass(frozen=True)
class Just(Generic[T]):
    """Present value."""

    value: T

    def map(self, fn: Callable[[T], U]) -> Just[U]:
        return Just(fn(self.value))

    def case_of(self, *, just: Callable[[T], R], nothing: Callable[[], R]) -> R:
        return just(self.value)

    def get_or_else(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Nothing:
    """Absent value. All instances compare equal."""

    def map(self, fn: Callable[[Any], Any]) -> Nothing:
        return self

    def case_of(self, *, just: Callable[[Any], R], nothing: Callable[[], R]) -> R:
        return nothing()

    def get_or_else(self, default: U) -> U:
        return default


Result = Union[Err[E], Ok[T]]
Maybe = Union[Just[T], Nothing]


def from_nullable(value: T | None) -> Maybe[T]:
    """Wrap ``value`` in ``Just`` unless it is ``None``."""

    if value is None:
        return Nothing()
    return Just(value)
