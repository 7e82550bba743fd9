"""Pipeline orchestration for one job alert run."""

from .models import PipelineRunResult, PipelineStage
from .runner import JobAlertPipeline

__all__ = ["JobAlertPipeline", "PipelineRunResult", "PipelineStage"]
