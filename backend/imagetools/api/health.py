"""Health check + operator listing."""

from __future__ import annotations

from fastapi import APIRouter

from imagetools import __version__
from imagetools.engine.registry import get_registry
from imagetools.models.responses import HealthResponse, OperatorInfo

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        operators_registered=get_registry().count,
    )


@router.get("/operators", response_model=list[OperatorInfo])
async def operators() -> list[OperatorInfo]:
    return [
        OperatorInfo(
            id=spec.id,
            category=spec.category.name.lower(),
            description=spec.description,
            params=spec.params,
        )
        for spec in get_registry().all()
    ]
