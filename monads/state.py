"""A state computation: a function from a state to a result and a new state."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

S = TypeVar("S")
A = TypeVar("A")


class State(Generic[S, A]):
    """Wraps a function ``state -> (result, new_state)``."""

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[S], tuple[A, S]]) -> None:
        self._run = run

    def __repr__(self) -> str:
        return f"State({self._run!r})"

    def run(self, state: S) -> tuple[A, S]:
        """Execute the computation from the given state."""
        return self._run(state)

    def get(self) -> State[S, S]:
        """Return a computation whose result is the current state."""
        return State(lambda current: (current, current))

    def modify(self, f: Callable[[S], S]) -> State[S, A]:
        """Return a computation that replaces the state with f(state)."""
        return State(lambda current: (None, f(current)))

    def put(self, state: S) -> State[S, A]:
        """Return a computation that sets the state to the given value."""
        return State(lambda _current: (None, state))


def new_state(f: Callable[[S], tuple[A, S]]) -> State[S, A]:
    """Build a State from a function returning (result, new_state)."""
    return State(f)


def return_state(x: A) -> State[S, A]:
    """Build a State yielding x and leaving the state unchanged."""
    return State(lambda current: (x, current))