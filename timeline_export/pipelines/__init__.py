"""Pipeline exports."""

from .job_pipeline import JobPipeline

__all__ = ["JobPipeline"]
