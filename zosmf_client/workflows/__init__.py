"""Workflow layer package for starting and waiting on z/OSMF workflows."""

from .service import (
    WORKFLOW_OUTCOME_COMPLETE,
    WORKFLOW_OUTCOME_FAILED,
    WORKFLOW_OUTCOME_STARTED,
    WorkflowService,
    workflow_require_key,
)

__all__ = [
    "WORKFLOW_OUTCOME_COMPLETE",
    "WORKFLOW_OUTCOME_FAILED",
    "WORKFLOW_OUTCOME_STARTED",
    "WorkflowService",
    "workflow_require_key",
]
