"""Sequence the skin workflow and report the outcome of every stage.

Stages run in order and the first :class:`~site_skinner.errors.SkinnerError`
stops the run::

    resolve-version -> sync-sources -> build-released-model
      -> verify-compatibility -> resolve-release-date -> apply-skin
      -> invoke-build

``apply-skin`` loads, merges and writes one descriptor per locale. Locales
written before a failing one stay on disk.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from site_skinner.core.config import SkinOptions
from site_skinner.core.constants import DEFAULT_PUBLISH_DATE_FORMAT, DEFAULT_WORKING_DIRECTORY
from site_skinner.core.models import ProjectModel, ReleaseCandidate
from site_skinner.errors import (
    ArtifactResolutionFailure,
    DescriptorIOFailure,
    DownstreamBuildFailure,
    MissingDescriptor,
    MissingScmConnection,
    MissingSkin,
    SkinnerError,
)
from site_skinner.release.date import ReleaseDateResolver, publish_date_node
from site_skinner.scm.executor import SourceSync, get_connection
from site_skinner.scm.types import SyncTarget
from site_skinner.site.descriptor import SiteDescriptor
from site_skinner.site.locales import available_locales, descriptor_path, site_directory
from site_skinner.site.merger import merge_descriptors
from site_skinner.versioning.resolver import VersionResolver, default_constraint
from site_skinner.workflow.compat import verify_tooling_compatibility
from site_skinner.workflow.context import StageTracker, WorkflowContext

__all__ = ["STAGES", "StageOutcome", "WorkflowResult", "run_skin_workflow"]

logger = logging.getLogger(__name__)

STAGES = (
    ("resolve-version", "Resolve released version"),
    ("sync-sources", "Sync released sources"),
    ("build-released-model", "Read released project"),
    ("verify-compatibility", "Check site plugin compatibility"),
    ("resolve-release-date", "Determine release date"),
    ("apply-skin", "Apply current skin"),
    ("invoke-build", "Run site build"),
)

# SCM tag of a project that was never released from a tag.
_UNTAGGED = "HEAD"


@dataclass
class StageOutcome:
    key: str
    success: bool
    detail: str = ""


@dataclass
class WorkflowResult:
    """What a skin run did, and where it stopped if it failed."""

    success: bool
    failed_stage: str | None = None
    error: SkinnerError | None = None
    released_version: str | None = None
    written_descriptors: list[Path] = field(default_factory=list)
    stages: list[StageOutcome] = field(default_factory=list)


class _SkinRun:
    def __init__(
        self,
        context: WorkflowContext,
        current_project: ProjectModel,
        options: SkinOptions,
        tracker: StageTracker | None,
    ):
        self.context = context
        self.current = current_project
        self.options = options
        self.tracker = tracker
        self.candidate: ReleaseCandidate | None = None
        self.released: ProjectModel | None = None
        self.release_date: datetime | None = None
        self.written: list[Path] = []
        self.outcomes: list[StageOutcome] = []

    @property
    def working_directory(self) -> Path:
        basedir = self.current.basedir or Path.cwd()
        directory = self.options.working_directory or Path(DEFAULT_WORKING_DIRECTORY)
        return directory if directory.is_absolute() else basedir / directory

    def execute(self) -> WorkflowResult:
        stages: dict[str, Callable[[], str]] = {
            "resolve-version": self.resolve_version,
            "sync-sources": self.sync_sources,
            "build-released-model": self.build_released_model,
            "verify-compatibility": self.verify_compatibility,
            "resolve-release-date": self.resolve_release_date,
            "apply-skin": self.apply_skin,
            "invoke-build": self.invoke_build,
        }
        if self.tracker is not None:
            for key, label in STAGES:
                self.tracker.add(key, label)

        for key, _label in STAGES:
            if self.tracker is not None:
                self.tracker.start(key)
            try:
                detail = stages[key]()
            except SkinnerError as exc:
                logger.debug("Stage %s failed", key, exc_info=True)
                self.outcomes.append(StageOutcome(key, False, str(exc)))
                if self.tracker is not None:
                    self.tracker.error(key, str(exc))
                    self._skip_remaining(key)
                return self._result(success=False, failed_stage=key, error=exc)
            self.outcomes.append(StageOutcome(key, True, detail))
            if self.tracker is not None:
                self.tracker.complete(key, detail)
        return self._result(success=True)

    def _skip_remaining(self, failed_key: str) -> None:
        keys = [key for key, _label in STAGES]
        for key in keys[keys.index(failed_key) + 1 :]:
            self.tracker.skip(key)

    def _result(self, success: bool, failed_stage: str | None = None, error: SkinnerError | None = None) -> WorkflowResult:
        version = self.candidate.version if self.candidate is not None else None
        return WorkflowResult(
            success=success,
            failed_stage=failed_stage,
            error=error,
            released_version=str(version) if version is not None else None,
            written_descriptors=list(self.written),
            stages=list(self.outcomes),
        )

    def resolve_version(self) -> str:
        constraint = self.options.released_version or default_constraint(self.current.version)
        self.candidate = VersionResolver(self.context.repository).resolve(constraint, self.current.identity)
        return str(self.candidate.version) if self.candidate.version is not None else "none found"

    def sync_sources(self) -> str:
        if self.candidate is None or self.candidate.version is None:
            raise MissingScmConnection(
                f"No released version of {self.current.group_id}:{self.current.artifact_id} found, "
                "there is no SCM connection to check out."
            )
        published = self.context.project_builder.build_from_repository(self.candidate)
        revision = published.scm_tag if published.scm_tag and published.scm_tag != _UNTAGGED else None
        target = SyncTarget(
            directory=self.working_directory,
            connection=get_connection(published),
            includes=self.options.includes,
            excludes=self.options.excludes,
            revision=revision,
        )
        report = SourceSync(self.context.scm_manager).sync(target, force_fresh=self.options.force_checkout)
        return f"{report.action.value} {report.directory}"

    def build_released_model(self) -> str:
        self.released = self.context.project_builder.build(self.working_directory / "pom.xml")
        return f"{self.released.group_id}:{self.released.artifact_id}:{self.released.version}"

    def verify_compatibility(self) -> str:
        tool_version = self.context.invoker.tool_version()
        verify_tooling_compatibility(self.released, tool_version)
        return f"Maven {tool_version}" if tool_version is not None else "Maven version unknown"

    def resolve_release_date(self) -> str:
        started = time.time()
        artifact_file = self.context.repository.force_resolve(self.candidate)
        self.candidate.file = artifact_file
        try:
            self.release_date = ReleaseDateResolver().resolve_date(artifact_file, started)
        except OSError as exc:
            raise ArtifactResolutionFailure(f"Unable to read {artifact_file}: {exc}") from exc
        return self.release_date.strftime("%Y-%m-%d %H:%M")

    def apply_skin(self) -> str:
        current_site = site_directory(self.current)
        released_site = site_directory(self.released)
        locales = available_locales(self.released)
        for locale in locales:
            self._apply_locale(locale, current_site, released_site)
        return ", ".join(locales)

    def _apply_locale(self, locale: str, current_site: Path, released_site: Path) -> None:
        codec = self.context.codec
        current_path = descriptor_path(current_site, locale)
        if not current_path.exists():
            raise MissingDescriptor(current_path, locale)
        current = codec.read(current_path, self.options.input_encoding)
        if current.skin is None:
            raise MissingSkin(current_path)

        released_path = descriptor_path(released_site, locale)
        if released_path.exists():
            released = codec.read(released_path, self.options.input_encoding)
        else:
            logger.info("No site descriptor in the released sources, creating %s", released_path)
            released = SiteDescriptor()

        pattern = current.publish_date.effective_format if current.publish_date else DEFAULT_PUBLISH_DATE_FORMAT
        try:
            stamp = publish_date_node(self.release_date, pattern)
        except ValueError as exc:
            raise DescriptorIOFailure(f"Invalid publish date format '{pattern}' in {current_path}: {exc}") from exc

        merged = merge_descriptors(current, released, self.options.merge_body, stamp)
        codec.write(released_path, merged, self.options.output_encoding)
        self.written.append(released_path)
        logger.info("Applied skin %s to %s", merged.skin, released_path)

    def invoke_build(self) -> str:
        goal = "site-deploy" if self.options.site_deploy else "site"
        result = self.context.invoker.invoke([goal], self.released.build_file)
        if result.exit_code != 0:
            raise DownstreamBuildFailure(
                result.execution_error or f"Site build exited with code {result.exit_code}",
                exit_code=result.exit_code,
            )
        return goal


def run_skin_workflow(
    context: WorkflowContext,
    current_project: ProjectModel,
    options: SkinOptions,
    tracker: StageTracker | None = None,
) -> WorkflowResult:
    """Re-skin the prior release of ``current_project``.

    Never raises for workflow failures; inspect ``WorkflowResult.success``,
    ``failed_stage`` and ``error`` instead.
    """
    return _SkinRun(context, current_project, options, tracker).execute()
