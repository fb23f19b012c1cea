"""Library and service configuration from environment variables."""

from __future__ import annotations

import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    imagetools_env: str = "development"
    imagetools_log_level: str = "info"

    # Parallelism
    imagetools_max_workers: int = 0  # 0 = one worker per CPU
    imagetools_parallel_min_pixels: int = 65_536  # 256x256; smaller grids run inline

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # API upload guard: 4096x4096
    max_image_pixels: int = 16_777_216

    # Largest kernel or structuring element size accepted by named operators
    max_kernel_size: int = 101

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def worker_count(self) -> int:
        if self.imagetools_max_workers > 0:
            return self.imagetools_max_workers
        return max(1, os.cpu_count() or 1)


settings = Settings()
