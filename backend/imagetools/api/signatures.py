"""POST /api/signature and /api/signature/distance."""

from __future__ import annotations

import time

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from imagetools.api.decoding import decode_or_422
from imagetools.engine.signatures import Signature, compare_images, signature_difference, signature_vector
from imagetools.grid import dimensions
from imagetools.models.requests import DistanceRequest, SignatureRequest
from imagetools.models.responses import DistanceResponse, SignatureResponse

router = APIRouter()


def _signature(image: str) -> tuple[Signature, int, int]:
    grid = decode_or_422(image)
    width, height = dimensions(grid)
    return signature_vector(grid), width, height


def _compare(image_a: str, image_b: str) -> float:
    return compare_images(decode_or_422(image_a), decode_or_422(image_b))


@router.post("/signature", response_model=SignatureResponse)
async def signature(req: SignatureRequest) -> SignatureResponse:
    start = time.perf_counter()
    vector, width, height = await run_in_threadpool(_signature, req.image)
    return SignatureResponse(
        signature=vector.tolist(),
        width=width,
        height=height,
        processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
    )


@router.post("/signature/distance", response_model=DistanceResponse)
async def distance(req: DistanceRequest) -> DistanceResponse:
    start = time.perf_counter()
    if req.signature_a is not None and req.signature_b is not None:
        value = await run_in_threadpool(signature_difference, req.signature_a, req.signature_b)
    else:
        value = await run_in_threadpool(_compare, req.image_a or "", req.image_b or "")
    return DistanceResponse(
        distance=value,
        processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
    )
