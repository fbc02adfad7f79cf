"""Collaborators of one skin run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from site_skinner.core.protocols import (
    ArtifactRepository,
    BuildInvoker,
    DescriptorCodec,
    ProjectModelProvider,
    ScmManager,
)

__all__ = ["StageTracker", "WorkflowContext"]


@dataclass
class WorkflowContext:
    """Everything the workflow talks to, created once per run."""

    project_builder: ProjectModelProvider
    repository: ArtifactRepository
    scm_manager: ScmManager
    codec: DescriptorCodec
    invoker: BuildInvoker


class StageTracker(Protocol):
    def add(self, key: str, label: str) -> None: ...

    def start(self, key: str, detail: str = "") -> None: ...

    def complete(self, key: str, detail: str = "") -> None: ...

    def error(self, key: str, detail: str = "") -> None: ...

    def skip(self, key: str, detail: str = "") -> None: ...
