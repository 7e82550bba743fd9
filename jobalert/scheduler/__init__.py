"""Periodic execution of the pipeline."""

from .service import SchedulerService

__all__ = ["SchedulerService"]
