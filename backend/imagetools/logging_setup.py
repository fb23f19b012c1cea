"""Root logger wiring shared by the API app factory and the CLI."""

from __future__ import annotations

import logging

from imagetools.config import Settings, settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(config: Settings | None = None) -> None:
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.imagetools_log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
