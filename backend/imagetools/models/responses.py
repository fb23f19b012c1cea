"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    operators_registered: int = 0


class OperatorInfo(BaseModel):
    id: str
    category: str
    description: str = ""
    params: dict[str, object] = Field(default_factory=dict)


class SignatureResponse(BaseModel):
    signature: list[int]
    width: int
    height: int
    processing_time_ms: float = 0.0


class DistanceResponse(BaseModel):
    distance: float
    processing_time_ms: float = 0.0


class ProcessResponse(BaseModel):
    image: str = Field(..., description="Base64-encoded PNG")
    width: int
    height: int
    steps_completed: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    timings_ms: dict[str, float] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
