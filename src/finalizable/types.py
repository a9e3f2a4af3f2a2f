"""Callable aliases shared by the pipeline and adapter modules."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from finalizable.core import Finalizable

type Step[T] = Callable[[T], Finalizable[T]]
type AsyncStep[T] = Callable[[T], Awaitable[Finalizable[T]] | Finalizable[T]]
