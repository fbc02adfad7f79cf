"""The skin workflow: resolve, sync, verify, merge and rebuild a released site."""

from __future__ import annotations

from .context import WorkflowContext
from .skin import StageOutcome, WorkflowResult, run_skin_workflow

__all__ = ["StageOutcome", "WorkflowContext", "WorkflowResult", "run_skin_workflow"]
