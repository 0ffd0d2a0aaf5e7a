"""Structural interfaces describing common container capabilities."""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class Filterable(Protocol[T]):
    """A container that can keep only the elements matching a predicate."""

    def filter(self, predicate: Callable[[T], bool]) -> T:
        """Return the elements for which predicate is true."""
        ...


class Foldable(Protocol[T, R]):
    """A container that can be mapped and folded from either side."""

    def map(self, f: Callable[[T], R]) -> R:
        """Apply f to the contents."""
        ...

    def fold_left(self, f: Callable[[T], R]) -> R:
        """Fold the contents from the left."""
        ...

    def fold_right(self, f: Callable[[T], R]) -> R:
        """Fold the contents from the right."""
        ...


class Monadic(Protocol[T]):
    """A container supporting side effects, mapping and flat-mapping."""

    def for_each(self, f: Callable[[T], Any]) -> None:
        """Call f for the contents."""
        ...

    def map(self, f: Callable[[T], T]) -> T:
        """Apply f to the contents."""
        ...

    def flat_map(self, f: Callable[[T], Monadic[T]]) -> T:
        """Apply f to the contents and flatten the result."""
        ...


class Monoid(Protocol[T]):
    """A type with an associative combination and an identity element."""