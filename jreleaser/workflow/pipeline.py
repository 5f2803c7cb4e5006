"""Ordered, fail-fast step runner.

A pipeline runs its steps one after the other on the calling thread. The
first step returning ``Err`` stops the run: later steps are never invoked
and completed steps are not rolled back. Exactly one summary line with the
elapsed time is logged at the end, whatever the outcome, and the failing
step's error is returned to the caller unchanged.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Err, Ok, Result
from jreleaser.steps.base import Step

__all__ = ["Pipeline", "PipelineState", "RunOutcome"]


class PipelineState(Enum):
    PENDING = auto()
    RUNNING = auto()
    SUCCEEDED = auto()
    FAILED = auto()

    @property
    def is_terminated(self) -> bool:
        return self in (PipelineState.SUCCEEDED, PipelineState.FAILED)


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Summary of one run; only ever reported through the logger."""

    succeeded: bool
    duration_seconds: float
    failure: StepError | None = None

    def summary(self) -> str:
        verb = "succeeded" if self.succeeded else "failed"
        return f"JReleaser {verb} after {self.duration_seconds:.3f}s"


class Pipeline:
    """A fixed sequence of steps bound to one execution context.

    The context is borrowed for the run; the step sequence is frozen at
    construction. A pipeline can be executed once.
    """

    def __init__(
        self,
        context: ExecutionContext,
        steps: Sequence[Step],
        *,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._context = context
        self._steps: tuple[Step, ...] = tuple(steps)
        self._clock = clock
        self._state = PipelineState.PENDING

    @property
    def context(self) -> ExecutionContext:
        return self._context

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @property
    def step_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self._steps)

    @property
    def state(self) -> PipelineState:
        return self._state

    def execute(self) -> Result[None, StepError]:
        """Run every step in order, stopping at the first failure.

        Returns:
            Ok(None) when all steps succeed, otherwise the Err returned by
            the failing step.

        Raises:
            RuntimeError: if the pipeline has already been executed.
        """
        if self._state is not PipelineState.PENDING:
            raise RuntimeError(f"pipeline already executed (state: {self._state.name.lower()})")

        logger = self._context.logger
        self._state = PipelineState.RUNNING
        start = self._clock()
        logger.info(f"dryrun set to {str(self._context.dry_run).lower()}")

        failure: Err[StepError] | None = None
        for step in self._steps:
            result = step.invoke(self._context)
            if isinstance(result, Err):
                failure = result
                break

        duration = max(0.0, self._clock() - start)
        outcome = RunOutcome(
            succeeded=failure is None,
            duration_seconds=duration,
            failure=failure.error if failure is not None else None,
        )

        if failure is None:
            self._state = PipelineState.SUCCEEDED
            logger.success(outcome.summary())
            return Ok(None)

        self._state = PipelineState.FAILED
        logger.error(outcome.summary())
        return failure
