"""Checkout or update the released project's working copy."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from site_skinner.core.models import ProjectModel
from site_skinner.core.protocols import ScmManager
from site_skinner.errors import MissingScmConnection, SyncFailure
from site_skinner.scm.types import ScmFileSet, ScmResult, SyncAction, SyncReport, SyncTarget

__all__ = ["SourceSync", "get_connection"]

logger = logging.getLogger(__name__)


def get_connection(project: ProjectModel) -> str:
    """Return the read-only SCM connection, falling back to the developer one."""
    if project.scm_connection:
        return project.scm_connection
    if project.scm_developer_connection:
        return project.scm_developer_connection
    raise MissingScmConnection(
        f"SCM Connection is not set in the pom.xml of {project.group_id}:{project.artifact_id}:{project.version}."
    )


class SourceSync:
    """Decide between checkout and update and run it through the SCM manager.

    A target directory that did not exist yet is checked out; an existing one
    is updated in place. With ``force_fresh`` an existing directory is deleted
    first, which turns the update into a fresh checkout.
    """

    def __init__(self, manager: ScmManager):
        self.manager = manager

    def sync(self, target: SyncTarget, force_fresh: bool = False) -> SyncReport:
        directory = Path(target.directory)
        try:
            if force_fresh and directory.exists():
                logger.info("Removing %s before a fresh checkout", directory)
                shutil.rmtree(directory)
            created = self._create_directory(directory)
        except OSError as exc:
            raise SyncFailure(f"checkout failed: unable to prepare {directory}: {exc}") from exc

        if created:
            logger.info("Performing checkout to %s", directory)
            result = self._execute(SyncAction.CHECKOUT, target, directory)
            return SyncReport(action=SyncAction.CHECKOUT, directory=directory, result=result)

        logger.info("Performing update to %s", directory)
        result = self._execute(SyncAction.UPDATE, target, directory)
        return SyncReport(action=SyncAction.UPDATE, directory=directory, result=result)

    @staticmethod
    def _create_directory(directory: Path) -> bool:
        try:
            directory.mkdir(parents=True)
        except FileExistsError:
            return False
        return True

    def _execute(self, action: SyncAction, target: SyncTarget, directory: Path) -> ScmResult:
        try:
            repository = self.manager.make_repository(target.connection)
            provider = self.manager.get_provider(repository)
            fileset = ScmFileSet(directory, target.includes, target.excludes)
            if action is SyncAction.CHECKOUT:
                result = provider.checkout(repository, fileset, target.revision)
            else:
                result = provider.update(repository, fileset, target.revision)
        except Exception as exc:
            raise SyncFailure(f"{action.value} failed: {exc}") from exc

        if not self._check_result(result):
            raise SyncFailure(f"{action.value} failed with provider message: {result.provider_message or ''}")
        return result

    @staticmethod
    def _check_result(result: ScmResult) -> bool:
        if result.success:
            return True
        logger.warning("Provider message:")
        logger.warning(result.provider_message or "")
        logger.warning("Command output:")
        logger.warning(result.command_output or "")
        if result.command_line:
            logger.warning("Command line: %s", result.command_line)
        return False
