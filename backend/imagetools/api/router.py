"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from imagetools.api import health, process, signatures

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(signatures.router)
api_router.include_router(process.router)
