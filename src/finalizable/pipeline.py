"""Run ordered steps over a Finalizable until one of them finalizes it."""

from __future__ import annotations

import inspect
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from finalizable.core import Finalizable, working
from finalizable.errors import StepContractError
from finalizable.types import AsyncStep, Step


@dataclass(frozen=True)
class NamedStep[T]:
    """One pipeline step and the name it is logged under."""

    name: str
    func: AsyncStep[T]


@dataclass(frozen=True)
class PipelineResult[T]:
    """Outcome of one pipeline run."""

    value: Finalizable[T]
    finalized_by: str | None = None
    executed: list[str] = field(default_factory=list)


class Pipeline[T]:
    """An immutable, ordered chain of steps.

    Each step receives the working payload and returns the next container.
    Steps after the one that finalizes the value are skipped. A value that
    is already finalized on entry runs no steps at all.
    """

    def __init__(self, name: str = "pipeline", steps: Iterable[NamedStep[T]] = ()) -> None:
        self.name = name
        self._steps: tuple[NamedStep[T], ...] = tuple(steps)

    @property
    def steps(self) -> tuple[NamedStep[T], ...]:
        return self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def then(self, step: AsyncStep[T], *, name: str | None = None) -> Pipeline[T]:
        """Return a new pipeline with ``step`` appended."""
        step_name = name or getattr(step, "__name__", repr(step))
        return Pipeline(self.name, (*self._steps, NamedStep(step_name, step)))

    def run(self, initial: T | Finalizable[T]) -> PipelineResult[T]:
        """Run all steps synchronously."""

        current = _as_container(initial)
        executed: list[str] = []
        if current.is_finalized():
            self._log_skipped(0)
            return self._finish(current, None, executed)
        for index, step in enumerate(self._steps):
            current = self._invoke_sync(step, current)
            executed.append(step.name)
            if current.is_finalized():
                self._log_skipped(index + 1)
                return self._finish(current, step.name, executed)
        return self._finish(current, None, executed)

    async def run_async(self, initial: T | Finalizable[T]) -> PipelineResult[T]:
        """Run all steps, awaiting the ones that return awaitables."""

        current = _as_container(initial)
        executed: list[str] = []
        if current.is_finalized():
            self._log_skipped(0)
            return self._finish(current, None, executed)
        for index, step in enumerate(self._steps):
            current = await self._invoke_async(step, current)
            executed.append(step.name)
            if current.is_finalized():
                self._log_skipped(index + 1)
                return self._finish(current, step.name, executed)
        return self._finish(current, None, executed)

    def _invoke_sync(self, step: NamedStep[T], current: Finalizable[T]) -> Finalizable[T]:
        try:
            value: Any = current.and_then(step.func)  # type: ignore[arg-type]
        except Exception:
            logger.opt(exception=True).debug("pipeline.step_failed pipeline={} step={}", self.name, step.name)
            raise
        if inspect.isawaitable(value):
            if inspect.iscoroutine(value):
                value.close()
            raise StepContractError(step.name, value)
        return self._checked(step, value)

    async def _invoke_async(self, step: NamedStep[T], current: Finalizable[T]) -> Finalizable[T]:
        try:
            value: Any = current.and_then(step.func)  # type: ignore[arg-type]
            if inspect.isawaitable(value):
                value = await value
        except Exception:
            logger.opt(exception=True).debug("pipeline.step_failed pipeline={} step={}", self.name, step.name)
            raise
        return self._checked(step, value)

    def _checked(self, step: NamedStep[T], value: Any) -> Finalizable[T]:
        if not isinstance(value, Finalizable):
            raise StepContractError(step.name, value)
        logger.debug("pipeline.step pipeline={} step={} result={!r}", self.name, step.name, value)
        return value

    def _log_skipped(self, index: int) -> None:
        skipped = [step.name for step in self._steps[index:]]
        if not skipped:
            return
        logger.debug("pipeline.steps_skipped pipeline={} steps={}", self.name, skipped)

    def _finish(self, value: Finalizable[T], finalized_by: str | None, executed: list[str]) -> PipelineResult[T]:
        logger.debug(
            "pipeline.done pipeline={} finalized={} finalized_by={} executed={}",
            self.name,
            value.is_finalized(),
            finalized_by,
            len(executed),
        )
        return PipelineResult(value=value, finalized_by=finalized_by, executed=executed)


def _as_container(initial: Any) -> Finalizable[Any]:
    if isinstance(initial, Finalizable):
        return initial
    return working(initial)


def pipeline[T](*steps: Step[T], name: str = "pipeline") -> Pipeline[T]:
    """Build a pipeline from bare step callables."""
    built: Pipeline[T] = Pipeline(name)
    for step in steps:
        built = built.then(step)
    return built
