"""Contracts for the external collaborators of the skin workflow.

Each protocol has one concrete implementation in this package (POM reader,
Maven repository client, git provider, ``site.xml`` codec, ``mvn``
invoker). Tests substitute in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from site_skinner.scm.types import ScmFileSet, ScmRepository, ScmResult

if TYPE_CHECKING:
    from site_skinner.core.models import ArtifactIdentity, ProjectModel, ReleaseCandidate
    from site_skinner.site.descriptor import SiteDescriptor
    from site_skinner.versioning.version import ArtifactVersion

__all__ = [
    "ProjectModelProvider",
    "ArtifactRepository",
    "ScmProvider",
    "ScmManager",
    "DescriptorCodec",
    "InvocationResult",
    "BuildInvoker",
]


class ProjectModelProvider(Protocol):
    def build(self, pom_file: Path) -> "ProjectModel":
        """Read a project descriptor from disk."""
        ...

    def build_from_repository(self, candidate: "ReleaseCandidate") -> "ProjectModel":
        """Read the published project descriptor of a resolved candidate."""
        ...


class ArtifactRepository(Protocol):
    def retrieve_available_versions(self, identity: "ArtifactIdentity") -> list["ArtifactVersion"]:
        ...

    def resolve(self, candidate: "ReleaseCandidate") -> Path:
        """Return the local file, downloading it only when missing."""
        ...

    def force_resolve(self, candidate: "ReleaseCandidate") -> Path:
        """Fetch the artifact again; the local file is rewritten only when it changed."""
        ...


class ScmProvider(Protocol):
    def checkout(
        self, repository: ScmRepository, fileset: ScmFileSet, revision: str | None = None
    ) -> ScmResult:
        ...

    def update(
        self, repository: ScmRepository, fileset: ScmFileSet, revision: str | None = None
    ) -> ScmResult:
        ...


class ScmManager(Protocol):
    def make_repository(self, connection: str) -> ScmRepository:
        ...

    def get_provider(self, repository: ScmRepository) -> ScmProvider:
        ...


class DescriptorCodec(Protocol):
    def read(self, path: Path, encoding: str) -> "SiteDescriptor":
        ...

    def write(self, path: Path, descriptor: "SiteDescriptor", encoding: str) -> None:
        ...


@dataclass
class InvocationResult:
    exit_code: int
    execution_error: str | None = None


class BuildInvoker(Protocol):
    def invoke(self, goals: list[str], build_file: Path) -> InvocationResult:
        ...

    def tool_version(self) -> "ArtifactVersion | None":
        """Version of the build tool that runs the downstream build."""
        ...
