"""The working/finalized value container."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from finalizable.errors import FinalizedValueError


class State(IntEnum):
    """Tag of a Finalizable. Declaration order is the sort order."""

    WORKING = 0
    FINALIZED = 1


@dataclass(frozen=True, order=True, repr=False)
class Finalizable[T]:
    """A value that is either still working or permanently finalized.

    Transformations apply to working values and return finalized values
    untouched, so a chain of steps can run over either state without checks
    at each call site. Once finalized, no operation here produces a working
    container again or changes the payload.

    ``map`` and ``and_then`` are typed ``T -> T``: the finalized branch hands
    back the original payload, so the payload type may only change while the
    container is known to be working.
    """

    state: State
    value: T

    def __post_init__(self) -> None:
        object.__setattr__(self, "state", State(self.state))

    @classmethod
    def of_working(cls, value: T) -> Finalizable[T]:
        return cls(State.WORKING, value)

    @classmethod
    def of_finalized(cls, value: T) -> Finalizable[T]:
        return cls(State.FINALIZED, value)

    def __repr__(self) -> str:
        label = "Working" if self.state is State.WORKING else "Finalized"
        return f"{label}({self.value!r})"

    def __iter__(self) -> Iterator[T]:
        yield self.value

    def is_working(self) -> bool:
        return self.state is State.WORKING

    def is_finalized(self) -> bool:
        return self.state is State.FINALIZED

    def into_inner(self) -> T:
        """Unwrap the payload regardless of state."""
        return self.value

    def as_ref(self) -> T:
        """Return the payload without consuming the container."""
        return self.value

    def map(self, op: Callable[[T], T]) -> Finalizable[T]:
        """Apply ``op`` to a working payload; finalized values pass through."""
        if self.state is State.WORKING:
            return Finalizable(State.WORKING, op(self.value))
        return self

    def and_then(self, op: Callable[[T], Finalizable[T]]) -> Finalizable[T]:
        """Chain a step that decides the next state itself."""
        if self.state is State.WORKING:
            return op(self.value)
        return self

    def finalize(self) -> Finalizable[T]:
        """Seal the current payload. Idempotent."""
        if self.state is State.FINALIZED:
            return self
        return Finalizable(State.FINALIZED, self.value)

    def and_then_finalized(self, op: Callable[[T], T]) -> Finalizable[T]:
        """Apply ``op`` one last time, then seal the result."""
        return self.map(op).finalize()

    def apply_or_finalize(
        self,
        op: Callable[[T], T],
        should_finalize: Callable[[T], bool],
    ) -> Finalizable[T]:
        """Apply ``op`` and seal the new payload when ``should_finalize`` accepts it."""
        if self.state is State.FINALIZED:
            return self
        updated = op(self.value)
        if should_finalize(updated):
            return Finalizable(State.FINALIZED, updated)
        return Finalizable(State.WORKING, updated)

    def set(self, value: T) -> Finalizable[T]:
        """Replace a working payload; finalized values keep theirs."""
        if self.state is State.WORKING:
            return Finalizable(State.WORKING, value)
        return self

    def and_(self, other: Finalizable[T]) -> Finalizable[T]:
        """Return ``other`` while working, otherwise this finalized container."""
        if self.state is State.WORKING:
            return other
        return self

    def combine(self, other: Finalizable[T], op: Callable[[T, T], T]) -> Finalizable[T]:
        """Merge two containers.

        Both working: ``Working(op(self.value, other.value))``. Otherwise the first
        finalized operand is returned as-is and ``op`` is not called.
        """
        if self.state is State.FINALIZED:
            return self
        if other.state is State.FINALIZED:
            return other
        return Finalizable(State.WORKING, op(self.value, other.value))

    def working_or_none(self) -> T | None:
        return self.value if self.state is State.WORKING else None

    def finalized_or_none(self) -> T | None:
        return self.value if self.state is State.FINALIZED else None

    def finalized_or(self, default: T) -> T:
        """Return the finalized payload, or ``default`` while still working."""
        if self.state is State.FINALIZED:
            return self.value
        return default

    def finalized_or_else(self, op: Callable[[T], T]) -> T:
        """Return the finalized payload, or ``op`` applied to the working one."""
        if self.state is State.FINALIZED:
            return self.value
        return op(self.value)

    def expect_working(self, msg: str) -> T:
        """Return the working payload or raise ``FinalizedValueError(msg)``."""
        if self.state is State.FINALIZED:
            raise FinalizedValueError(msg)
        return self.value

    def copy(self) -> Finalizable[T]:
        return Finalizable(self.state, copy.copy(self.value))

    def deepcopy(self, memo: dict[int, Any] | None = None) -> Finalizable[T]:
        return Finalizable(self.state, copy.deepcopy(self.value, memo))


def working[T](value: T) -> Finalizable[T]:
    return Finalizable(State.WORKING, value)


def finalized[T](value: T) -> Finalizable[T]:
    return Finalizable(State.FINALIZED, value)
