"""Pipeline orchestrator: applies named operators to an image in order."""

from __future__ import annotations

import logging
import time
from collections.abc import Generator, Iterable
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from imagetools.engine.registry import OperatorRegistry, get_registry
from imagetools.grid import Grid, as_grid, normalise

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Controls how failures and the final image are handled."""

    # Skip the remaining steps after the first failure
    stop_on_error: bool = False
    # Range-normalise the final image
    normalise_output: bool = False


@dataclass
class Step:
    op: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class PipelineContext:
    """State flowing through a pipeline run."""

    image: Grid
    # Labels of completed steps, in order ("3:erode")
    completed: list[str] = field(default_factory=list)
    # Step label -> error message
    errors: dict[str, str] = field(default_factory=dict)
    # Step label -> milliseconds
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.errors


def parse_steps(raw: Iterable[Step | dict[str, Any]]) -> list[Step]:
    """Accept Step objects or {"op": ..., "params": {...}} dicts."""
    steps: list[Step] = []
    for item in raw:
        if isinstance(item, Step):
            steps.append(item)
        else:
            steps.append(Step(op=item["op"], params=dict(item.get("params") or {})))
    return steps


class Pipeline:
    """Runs a sequence of registered operators over one image."""

    def __init__(
        self,
        registry: OperatorRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, image: ArrayLike, steps: Iterable[Step | dict[str, Any]]) -> PipelineContext:
        """Run every step; a failing step leaves the image as it was."""
        ctx = PipelineContext(image=as_grid(image))
        for _ in self.run_streaming(ctx, steps):
            pass
        return ctx

    def run_streaming(
        self,
        ctx: PipelineContext,
        steps: Iterable[Step | dict[str, Any]],
    ) -> Generator[dict[str, Any], None, None]:
        """Run the steps, yielding a progress dict after each one.

        ``ctx`` is updated in place, so once the generator is exhausted it
        holds the same result ``run()`` returns.
        """
        ordered = parse_steps(steps)
        total = len(ordered)
        start = time.perf_counter()
        logger.info("Pipeline: %d steps queued on %dx%d image", total, ctx.image.shape[1], ctx.image.shape[0])

        for i, step in enumerate(ordered):
            label = f"{i}:{step.op}"
            t0 = time.perf_counter()
            status = "ok"
            error = ""
            try:
                spec = self.registry.get(step.op)
                result = spec.fn(ctx.image, **step.params)
                ctx.image = np.asarray(result, dtype=np.float32)
                ctx.completed.append(label)
            except Exception as e:
                ctx.errors[label] = str(e)
                status = "error"
                error = str(e)
                logger.warning("  %s FAILED: %s", label, e)

            elapsed_ms = round((time.perf_counter() - t0) * 1000, 1)
            ctx.timings[label] = elapsed_ms
            logger.debug("  %s finished in %.1fms", label, elapsed_ms)

            yield {
                "step": label,
                "op": step.op,
                "index": i,
                "total": total,
                "elapsed_ms": elapsed_ms,
                "status": status,
                "error": error,
            }

            if status == "error" and self.config.stop_on_error:
                logger.info("Pipeline stopped after %s", label)
                break

        if self.config.normalise_output:
            ctx.image = normalise(ctx.image)

        logger.info(
            "Pipeline complete: %d/%d steps in %.0fms",
            len(ctx.completed),
            total,
            (time.perf_counter() - start) * 1000,
        )


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory for a pipeline over the default registry, with operators loaded."""
    import imagetools.engine.operators  # noqa: F401

    return Pipeline(config=config)
