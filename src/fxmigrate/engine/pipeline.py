import time
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from fxmigrate.common import bus
from fxmigrate.needle import L
from .context import MigrationContext
from .middleware import Middleware, NextFunction, run_middlewares
from .steps import DEFAULT_STEPS, MigrationStep


@dataclass
class StepInvocation:
    name: str
    step: MigrationStep
    context: MigrationContext


def step_name(step: MigrationStep) -> str:
    return getattr(step, "__name__", step.__class__.__name__)


def trace_step(invocation: StepInvocation, next: NextFunction) -> Any:
    bus.debug(L.migration.step.start, step=invocation.name)
    started = time.perf_counter()
    result = next()
    bus.debug(
        L.migration.step.done,
        step=invocation.name,
        elapsed=time.perf_counter() - started,
    )
    return result


def _invoke(invocation: StepInvocation) -> Any:
    return invocation.step(invocation.context)


class StepPipeline:
    def __init__(
        self,
        steps: Optional[Sequence[MigrationStep]] = None,
        middlewares: Optional[Sequence[Middleware]] = None,
    ):
        self.steps: List[MigrationStep] = list(
            DEFAULT_STEPS if steps is None else steps
        )
        self.middlewares: List[Middleware] = list(
            [trace_step] if middlewares is None else middlewares
        )

    def append(self, step: MigrationStep) -> "StepPipeline":
        self.steps.append(step)
        return self

    def run(self, context: MigrationContext) -> None:
        # Strictly sequential; the first exception aborts the remaining steps.
        for step in self.steps:
            invocation = StepInvocation(step_name(step), step, context)
            run_middlewares(self.middlewares, invocation, _invoke)
