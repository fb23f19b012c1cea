"""FastAPI app factory."""

from __future__ import annotations

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from imagetools import __version__
from imagetools.config import settings
from imagetools.logging_setup import configure_logging

load_dotenv()

configure_logging(settings)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ImageTools",
        description="Parallel float-grid image processing and region signatures",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import the operator module so @operator decorators fire
    import imagetools.engine.operators  # noqa: F401

    from imagetools.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
