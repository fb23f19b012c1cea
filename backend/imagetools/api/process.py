"""POST /api/process runs an operator pipeline over an uploaded image."""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from imagetools.api.decoding import decode_or_422
from imagetools.engine.operators import check_kernel_size
from imagetools.engine.pipeline import Pipeline, PipelineConfig, PipelineContext, Step, create_pipeline
from imagetools.image_io import encode_png_base64
from imagetools.models.requests import ProcessRequest
from imagetools.models.responses import ProcessResponse

router = APIRouter()


def _run(pipeline: Pipeline, image: str, steps: list[Step]) -> tuple[PipelineContext, str]:
    """Decode, run and re-encode off the event loop."""
    ctx = pipeline.run(decode_or_422(image), steps)
    return ctx, encode_png_base64(ctx.image)


@router.post("/process", response_model=ProcessResponse)
async def process(req: ProcessRequest) -> ProcessResponse:
    start = time.perf_counter()

    pipeline = create_pipeline(
        PipelineConfig(stop_on_error=req.stop_on_error, normalise_output=req.normalise_output)
    )
    unknown = [s.op for s in req.steps if s.op not in pipeline.registry]
    if unknown:
        raise HTTPException(status_code=404, detail=f"Unknown operators: {', '.join(unknown)}")

    for i, s in enumerate(req.steps):
        if "size" in s.params:
            try:
                check_kernel_size(s.params["size"])
            except ValueError as e:
                raise HTTPException(status_code=422, detail=f"{i}:{s.op}: {e}") from e

    steps = [Step(op=s.op, params=s.params) for s in req.steps]
    ctx, encoded = await run_in_threadpool(_run, pipeline, req.image, steps)

    height, width = ctx.image.shape
    return ProcessResponse(
        image=encoded,
        width=width,
        height=height,
        steps_completed=ctx.completed,
        errors=ctx.errors,
        timings_ms=ctx.timings,
        processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
    )
