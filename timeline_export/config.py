"""Runtime configuration for the timeline exporter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoragePaths:
    """Collection of filesystem paths used by the application."""

    uploads: Path
    outputs: Path

    def ensure(self) -> None:
        """Ensure the backing directories exist."""
        self.uploads.mkdir(parents=True, exist_ok=True)
        self.outputs.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AppConfig:
    """High level runtime configuration values."""

    max_archive_size_mb: int = 512
    allowed_archive_extensions: tuple[str, ...] = ("zip",)
    output_stem: str = "timeline"

    @property
    def max_upload_bytes(self) -> int:
        """Maximum upload payload in bytes."""
        return self.max_archive_size_mb * 1024 * 1024


@dataclass(frozen=True)
class QueueConfig:
    """Configuration for the Redis-backed task queue."""

    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "timeline-export"
    default_timeout: int = 60 * 30  # seconds


APP_CONFIG = AppConfig(
    max_archive_size_mb=int(
        os.environ.get("TIMELINE_EXPORT_MAX_ARCHIVE_MB", AppConfig.max_archive_size_mb)
    ),
)
STORAGE_PATHS = StoragePaths(
    uploads=Path(os.environ.get("TIMELINE_EXPORT_UPLOADS", "uploads")),
    outputs=Path(os.environ.get("TIMELINE_EXPORT_OUTPUTS", "outputs")),
)
QUEUE_CONFIG = QueueConfig(
    redis_url=os.environ.get("TIMELINE_EXPORT_REDIS_URL", QueueConfig.redis_url),
    queue_name=os.environ.get("TIMELINE_EXPORT_QUEUE", QueueConfig.queue_name),
    default_timeout=int(
        os.environ.get("TIMELINE_EXPORT_QUEUE_TIMEOUT", QueueConfig.default_timeout)
    ),
)

STORAGE_PATHS.ensure()
