"""Early-return integration for Finalizable.

A finalized container decomposes to ``Break`` and a working one to
``Continue``. Inside a function decorated with ``@short_circuit``,
``advance(x)`` unwraps a working payload or leaves the function at once,
making the finalized payload the function's ``Finalized`` result::

    @short_circuit
    def price(order):
        base = advance(lookup(order))
        return base * 2

The adapter never transforms payloads; it only translates between the two
states and Python control flow.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from finalizable.core import Finalizable, State, finalized, working


@dataclass(frozen=True)
class Continue[T]:
    """Keep evaluating with ``value``."""

    value: T


@dataclass(frozen=True)
class Break[T]:
    """Stop the enclosing chain, producing ``value``."""

    value: T


type ControlFlow[T] = Continue[T] | Break[T]


class EarlyExit(BaseException):
    """Carries a finalized payload out of a ``@short_circuit`` function.

    Derives from BaseException so ``except Exception`` blocks between
    ``advance`` and the decorated boundary let it through.
    """

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.value = value


def branch[T](container: Finalizable[T]) -> ControlFlow[T]:
    """Decompose a container into its control-flow outcome."""
    if container.state is State.WORKING:
        return Continue(container.value)
    return Break(container.value)


def from_output[T](value: T) -> Finalizable[T]:
    return working(value)


def from_residual[T](residual: Break[T]) -> Finalizable[T]:
    return finalized(residual.value)


def recompose[T](flow: ControlFlow[T]) -> Finalizable[T]:
    """Inverse of ``branch``."""
    match flow:
        case Continue(value=value):
            return from_output(value)
        case Break():
            return from_residual(flow)
    raise TypeError(f"expected Continue or Break, got {type(flow).__name__}")


def advance[T](container: Finalizable[T]) -> T:
    """Return a working payload, or exit the enclosing ``@short_circuit`` function."""
    match branch(container):
        case Continue(value=value):
            return value
        case Break(value=value):
            raise EarlyExit(value)
    raise AssertionError("unreachable")


def _wrap_output(result: Any) -> Finalizable[Any]:
    if isinstance(result, Finalizable):
        return result
    return from_output(result)


def _on_exit(func: Callable[..., Any], exit_: EarlyExit) -> Finalizable[Any]:
    logger.debug("shortcircuit.break function={} value={!r}", func.__qualname__, exit_.value)
    return from_residual(Break(exit_.value))


def short_circuit(func: Callable[..., Any]) -> Callable[..., Any]:
    """Make ``func`` return a Finalizable and honour ``advance`` early exits.

    A plain return value ``r`` becomes ``Working(r)``; a returned Finalizable
    is passed through as-is. Coroutine functions are supported.
    """
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Finalizable[Any]:
            try:
                result = await func(*args, **kwargs)
            except EarlyExit as exit_:
                return _on_exit(func, exit_)
            return _wrap_output(result)

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Finalizable[Any]:
        try:
            result = func(*args, **kwargs)
        except EarlyExit as exit_:
            return _on_exit(func, exit_)
        return _wrap_output(result)

    return wrapper
