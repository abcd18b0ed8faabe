"""Pipeline — an immutable chain of dependent steps.

Each step is a plain function receiving a tuple with the resolved outputs of
every earlier step, in order, and returning one of:

- a CacheableFetch, resolved from cache or the network
- a nested Pipeline, run recursively
- any other value, kept as-is

Steps run strictly one after another, since a later step may depend on any
earlier output (not just its immediate predecessor). run() returns the
resolved output of the last step; earlier outputs only exist to feed later
steps.

Usage:
    pipeline = (
        Pipeline()
        .add(lambda _: events_fetch)
        .add(lambda out: build_results_fetch(out[0]))
        .add(lambda out: combine(out[0], out[1]))
    )
    result = await pipeline.run()
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Union

from sportsday.pipeline.fetch import CacheableFetch
from sportsday.pipeline.request import SheetCredentials

logger = logging.getLogger(__name__)

StepResult = Union[CacheableFetch, "Pipeline", Any]
Step = Callable[[tuple[Any, ...]], StepResult]


@dataclass(frozen=True)
class Pipeline:
    """Immutable, chainable sequence of steps.

    Attributes:
        steps: Declared steps, in order
        always_prefer_cache: Resolve this pipeline's fetches from cache even
            when the enclosing run was asked for fresh data. Useful for data
            that never changes during the day, like the events list. Only
            read by an enclosing pipeline; run() itself follows allow_cache.
        credentials: Opaque credentials carried along for step builders
    """

    steps: tuple[Step, ...] = ()
    always_prefer_cache: bool = False
    credentials: SheetCredentials | None = None

    def add(self, step: Step) -> "Pipeline":
        """Return a new pipeline with step appended.

        The receiver is left unchanged, so a partial pipeline can be
        extended in several directions.
        """
        if not callable(step):
            raise TypeError(f"Pipeline step must be callable, got {type(step).__name__}")
        return replace(self, steps=self.steps + (step,))

    def prefer_cache(self, value: bool = True) -> "Pipeline":
        """Return a copy with always_prefer_cache set."""
        return replace(self, always_prefer_cache=value)

    async def run(self, allow_cache: bool = True) -> Any:
        """Execute all steps in order and return the last step's output.

        Args:
            allow_cache: Resolve fetches through the cache. If False every
                fetch goes to the network and overwrites its cache entry,
                except inside nested pipelines marked always_prefer_cache.

        Returns:
            The resolved output of the final step, or None if the pipeline
            has no steps.

        Raises:
            Whatever a step, parser or transport raises. The run is aborted
            at the first failure and no partial result is returned.
        """
        values: list[Any] = []
        for index, step in enumerate(self.steps):
            result = step(tuple(values))
            match result:
                case CacheableFetch():
                    if allow_cache:
                        value = await result.get()
                    else:
                        logger.debug("Cache bypass for %s", result.request.range)
                        value = await result.live()
                case Pipeline():
                    value = await result.run(allow_cache or result.always_prefer_cache)
                case _:
                    value = result
            logger.debug("Step %d/%d resolved", index + 1, len(self.steps))
            values.append(value)

        return values[-1] if values else None
