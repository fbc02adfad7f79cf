"""Read the parts of a ``pom.xml`` the skin workflow needs.

Only what is declared in the file itself is seen: the parent contributes its
groupId and version, nothing else is inherited. ``${...}`` references to
project coordinates, ``basedir`` and ``<properties>`` are interpolated;
unknown references are left as written.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from site_skinner.core.models import ArtifactIdentity, Plugin, ProjectModel, ReleaseCandidate
from site_skinner.core.protocols import ArtifactRepository
from site_skinner.core.tree import XmlNode
from site_skinner.errors import ArtifactResolutionFailure, ProjectModelFailure

__all__ = ["PomProjectModelProvider", "read_project_model"]

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_GROUP = "org.apache.maven.plugins"

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")


def _interpolate(text: str | None, properties: dict[str, str]) -> str | None:
    if text is None or "${" not in text:
        return text
    return _PLACEHOLDER_RE.sub(lambda match: properties.get(match.group(1), match.group(0)), text)


def _interpolate_tree(node: XmlNode, properties: dict[str, str]) -> None:
    node.value = _interpolate(node.value, properties)
    for key, value in node.attributes.items():
        node.attributes[key] = _interpolate(value, properties) or value
    for child in node.children:
        _interpolate_tree(child, properties)


def _properties(root: XmlNode, basedir: Path | None) -> dict[str, str]:
    parent = root.child("parent")
    parent_group = parent.child_value("groupId") if parent is not None else None
    parent_version = parent.child_value("version") if parent is not None else None
    group_id = root.child_value("groupId") or parent_group
    version = root.child_value("version") or parent_version

    properties: dict[str, str] = {}
    declared = root.child("properties")
    if declared is not None:
        for node in declared.children:
            properties[node.name] = (node.value or "").strip()

    coordinates = {
        "groupId": group_id,
        "artifactId": root.child_value("artifactId"),
        "version": version,
        "packaging": root.child_value("packaging", "jar"),
        "name": root.child_value("name"),
        "parent.groupId": parent_group,
        "parent.version": parent_version,
    }
    for key, value in coordinates.items():
        if value is not None:
            properties[f"project.{key}"] = value
            properties[f"pom.{key}"] = value
    if basedir is not None:
        properties["basedir"] = str(basedir)
        properties["project.basedir"] = str(basedir)
    return properties


def _plugins(container: XmlNode | None) -> dict[str, Plugin]:
    plugins: dict[str, Plugin] = {}
    if container is None:
        return plugins
    for node in container.children_named("plugin"):
        artifact_id = node.child_value("artifactId")
        if not artifact_id:
            continue
        plugin = Plugin(
            group_id=node.child_value("groupId") or DEFAULT_PLUGIN_GROUP,
            artifact_id=artifact_id,
            version=node.child_value("version"),
            configuration=node.child("configuration"),
        )
        plugins[plugin.key] = plugin
    return plugins


def read_project_model(root: XmlNode, build_file: Path | None = None) -> ProjectModel:
    """Build a :class:`ProjectModel` from a parsed ``<project>`` tree."""
    basedir = build_file.parent if build_file is not None else None
    root = root.copy()
    _interpolate_tree(root, _properties(root, basedir))

    parent = root.child("parent")
    group_id = root.child_value("groupId") or (parent.child_value("groupId") if parent is not None else None)
    version = root.child_value("version") or (parent.child_value("version") if parent is not None else None)
    artifact_id = root.child_value("artifactId")
    if not group_id or not artifact_id or not version:
        raise ProjectModelFailure(
            f"Incomplete project coordinates in {build_file or 'project descriptor'}: "
            f"groupId={group_id}, artifactId={artifact_id}, version={version}"
        )

    scm = root.child("scm")
    build = root.child("build")
    management = build.child("pluginManagement") if build is not None else None
    return ProjectModel(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        packaging=root.child_value("packaging", "jar") or "jar",
        name=root.child_value("name"),
        scm_connection=scm.child_value("connection") if scm is not None else None,
        scm_developer_connection=scm.child_value("developerConnection") if scm is not None else None,
        scm_tag=scm.child_value("tag") if scm is not None else None,
        build_file=build_file,
        plugins=_plugins(build.child("plugins") if build is not None else None),
        managed_plugins=_plugins(management.child("plugins") if management is not None else None),
    )


class PomProjectModelProvider:
    """Project models from ``pom.xml`` files on disk or in a repository."""

    def __init__(self, repository: ArtifactRepository | None = None):
        self.repository = repository

    def build(self, pom_file: Path) -> ProjectModel:
        pom_file = Path(pom_file).resolve()
        try:
            element = ET.parse(pom_file).getroot()
        except (OSError, ET.ParseError) as exc:
            raise ProjectModelFailure(f"Unable to read project descriptor {pom_file}: {exc}") from exc
        logger.debug("Reading project model from %s", pom_file)
        return read_project_model(XmlNode.from_element(element), pom_file)

    def build_from_repository(self, candidate: ReleaseCandidate) -> ProjectModel:
        """Read the published POM of ``candidate``; it has no basedir."""
        if self.repository is None:
            raise ProjectModelFailure("No artifact repository configured to read published project descriptors")
        pom_candidate = ReleaseCandidate(
            identity=ArtifactIdentity(candidate.identity.group_id, candidate.identity.artifact_id, "pom"),
            version_range=candidate.version_range,
            version=candidate.version,
        )
        try:
            pom_file = self.repository.resolve(pom_candidate)
        except ArtifactResolutionFailure as exc:
            raise ProjectModelFailure(f"Unable to fetch project descriptor of {candidate.coordinates}: {exc}") from exc
        try:
            element = ET.parse(pom_file).getroot()
        except (OSError, ET.ParseError) as exc:
            raise ProjectModelFailure(f"Unable to read project descriptor {pom_file}: {exc}") from exc
        return read_project_model(XmlNode.from_element(element))
