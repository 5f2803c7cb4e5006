"""Workflow execution: the pipeline runner and the named workflows."""

from .pipeline import Pipeline, PipelineState, RunOutcome
from .workflows import WORKFLOWS, create

__all__ = [
    "Pipeline",
    "PipelineState",
    "RunOutcome",
    "WORKFLOWS",
    "create",
]
