"""Project and artifact models shared by the workflow collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from site_skinner.core.constants import SITE_PLUGIN_KEY
from site_skinner.core.tree import XmlNode
from site_skinner.versioning.range import VersionRange
from site_skinner.versioning.version import ArtifactVersion

__all__ = ["ArtifactIdentity", "ReleaseCandidate", "Plugin", "ProjectModel"]

# Packaging types whose file extension differs from the packaging name.
PACKAGING_EXTENSIONS = {
    "maven-plugin": "jar",
    "maven-archetype": "jar",
    "ejb": "jar",
    "bundle": "jar",
    "eclipse-plugin": "jar",
}


@dataclass(frozen=True)
class ArtifactIdentity:
    """groupId/artifactId/packaging triple of a published artifact."""

    group_id: str
    artifact_id: str
    packaging: str = "jar"

    @property
    def extension(self) -> str:
        return PACKAGING_EXTENSIONS.get(self.packaging, self.packaging)

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.packaging}"


@dataclass
class ReleaseCandidate:
    """The prior release selected for re-skinning.

    ``version`` stays ``None`` when no published version satisfies the range;
    ``file`` is only set once the artifact has been resolved locally.
    """

    identity: ArtifactIdentity
    version_range: VersionRange
    version: ArtifactVersion | None = None
    file: Path | None = None

    @property
    def coordinates(self) -> str:
        version = str(self.version) if self.version is not None else str(self.version_range)
        return f"{self.identity.group_id}:{self.identity.artifact_id}:{version}"


@dataclass
class Plugin:
    """A build plugin declaration with its raw configuration block."""

    group_id: str
    artifact_id: str
    version: str | None = None
    configuration: XmlNode | None = None

    @property
    def key(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass
class ProjectModel:
    """The subset of a project descriptor the skin workflow reads."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    name: str | None = None
    scm_connection: str | None = None
    scm_developer_connection: str | None = None
    scm_tag: str | None = None
    build_file: Path | None = None
    plugins: dict[str, Plugin] = field(default_factory=dict)
    managed_plugins: dict[str, Plugin] = field(default_factory=dict)

    @property
    def basedir(self) -> Path | None:
        return self.build_file.parent if self.build_file is not None else None

    @property
    def identity(self) -> ArtifactIdentity:
        return ArtifactIdentity(self.group_id, self.artifact_id, self.packaging)

    def plugin(self, key: str) -> Plugin | None:
        """Look up a plugin in build/plugins, then build/pluginManagement."""
        return self.plugins.get(key) or self.managed_plugins.get(key)

    def plugin_configuration(self, key: str) -> XmlNode | None:
        plugin = self.plugin(key)
        return plugin.configuration if plugin is not None else None

    def plugin_version(self, key: str) -> ArtifactVersion | None:
        plugin = self.plugin(key)
        if plugin is None or not plugin.version:
            return None
        return ArtifactVersion(plugin.version)

    @property
    def declared_locales(self) -> str | None:
        configuration = self.plugin_configuration(SITE_PLUGIN_KEY)
        if configuration is None:
            return None
        return configuration.child_value("locales")
