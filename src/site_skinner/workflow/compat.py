"""Guard against site plugin versions the installed Maven cannot run."""

from __future__ import annotations

import logging

from site_skinner.core.constants import SITE_PLUGIN_KEY
from site_skinner.core.models import ProjectModel
from site_skinner.errors import ToolingIncompatibility
from site_skinner.versioning.range import VersionRange
from site_skinner.versioning.version import ArtifactVersion

__all__ = ["verify_tooling_compatibility"]

logger = logging.getLogger(__name__)

SITE_PLUGIN_2X = VersionRange.from_spec("(,3.0-alpha-1)")
SITE_PLUGIN_3X = VersionRange.from_spec("[3.0-alpha-1,3.0)")
MAVEN_3X = VersionRange.from_spec("[3.0,)")
MAVEN_2X = VersionRange.from_spec("(,3.0)")


def verify_tooling_compatibility(project: ProjectModel, tool_version: ArtifactVersion | None) -> None:
    """Raise :class:`ToolingIncompatibility` when the site plugin cannot run.

    A project without a site plugin version always passes. An unknown tool
    version skips the check with a warning.
    """
    plugin_version = project.plugin_version(SITE_PLUGIN_KEY)
    if plugin_version is None:
        logger.debug("No maven-site-plugin version declared, skipping compatibility check")
        return
    if tool_version is None:
        logger.warning(
            "Unable to determine the Maven version, maven-site-plugin:%s may not run", plugin_version
        )
        return

    if SITE_PLUGIN_2X.contains(plugin_version) and MAVEN_3X.contains(tool_version):
        raise ToolingIncompatibility(f"maven-site-plugin:{plugin_version} can only be executed with Maven 2.x")
    if SITE_PLUGIN_3X.contains(plugin_version) and MAVEN_2X.contains(tool_version):
        raise ToolingIncompatibility(f"maven-site-plugin:{plugin_version} can only be executed with Maven 3.x+")
    logger.debug("maven-site-plugin:%s runs with Maven %s", plugin_version, tool_version)
