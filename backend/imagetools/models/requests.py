"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class SignatureRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image (any Pillow format, or a data: URL)")


class DistanceRequest(BaseModel):
    image_a: str | None = Field(default=None, description="Base64-encoded first image")
    image_b: str | None = Field(default=None, description="Base64-encoded second image")
    signature_a: list[int] | None = Field(default=None, description="Precomputed first signature")
    signature_b: list[int] | None = Field(default=None, description="Precomputed second signature")

    @model_validator(mode="after")
    def _one_pair(self) -> "DistanceRequest":
        has_images = self.image_a is not None and self.image_b is not None
        has_signatures = self.signature_a is not None and self.signature_b is not None
        if has_images == has_signatures:
            raise ValueError("Provide either image_a and image_b, or signature_a and signature_b")
        return self


class StepModel(BaseModel):
    op: str = Field(..., description="Registered operator id")
    params: dict[str, Any] = Field(default_factory=dict, description="Operator keyword arguments")


class ProcessRequest(BaseModel):
    image: str = Field(..., description="Base64-encoded image")
    steps: list[StepModel] = Field(..., description="Operators to apply, in order")
    stop_on_error: bool = Field(default=False, description="Skip remaining steps after a failure")
    normalise_output: bool = Field(default=False, description="Range-normalise the final image")
