"""Top-level package for the Takeout timeline exporter."""

from .api.app_factory import create_app
from .pipelines.job_pipeline import JobPipeline
from .services import ArchiveParser, FormatExporter, parse_archive

__all__ = ["create_app", "JobPipeline", "ArchiveParser", "FormatExporter", "parse_archive"]
