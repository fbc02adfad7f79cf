"""Maven 2 layout repository client with a local cache directory."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

import httpx

from site_skinner.core.models import ArtifactIdentity, ReleaseCandidate
from site_skinner.core.tree import XmlNode
from site_skinner.errors import ArtifactResolutionFailure, MetadataRetrievalFailure
from site_skinner.versioning.version import ArtifactVersion

__all__ = ["DEFAULT_REMOTE_REPOSITORY", "MavenRepository", "default_local_repository"]

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_REPOSITORY = "https://repo.maven.apache.org/maven2"
METADATA_FILE = "maven-metadata.xml"
LOCAL_METADATA_FILE = "maven-metadata-local.xml"


def default_local_repository() -> Path:
    return Path.home() / ".m2" / "repository"


def _parse_versions(content: bytes | str, source: str) -> list[str]:
    try:
        root = XmlNode.from_element(ET.fromstring(content))
    except ET.ParseError as exc:
        raise MetadataRetrievalFailure(f"Unable to parse repository metadata {source}: {exc}") from exc
    versioning = root.child("versioning")
    versions = versioning.child("versions") if versioning is not None else None
    if versions is None:
        return []
    return [node.value.strip() for node in versions.children_named("version") if node.value and node.value.strip()]


class MavenRepository:
    """List, download and cache artifacts from Maven 2 layout repositories.

    Remote repositories are tried in order; a 404 moves on to the next one.
    Downloads land in ``local_repository`` using the same layout.
    """

    def __init__(
        self,
        local_repository: Path | None = None,
        remote_repositories: list[str] | None = None,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        self.local_repository = Path(local_repository) if local_repository else default_local_repository()
        self.remote_repositories = [
            url.rstrip("/") for url in (remote_repositories or [DEFAULT_REMOTE_REPOSITORY])
        ]
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "MavenRepository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _artifact_directory(identity: ArtifactIdentity) -> str:
        return f"{identity.group_id.replace('.', '/')}/{identity.artifact_id}"

    def artifact_path(self, candidate: ReleaseCandidate) -> str:
        """Repository-relative path of the candidate's file."""
        if candidate.version is None:
            raise ArtifactResolutionFailure(f"Unable to resolve {candidate.coordinates}: no version selected")
        identity = candidate.identity
        version = str(candidate.version)
        return (
            f"{self._artifact_directory(identity)}/{version}/"
            f"{identity.artifact_id}-{version}.{identity.extension}"
        )

    def local_file(self, candidate: ReleaseCandidate) -> Path:
        return self.local_repository / self.artifact_path(candidate)

    def retrieve_available_versions(self, identity: ArtifactIdentity) -> list[ArtifactVersion]:
        """Union of the versions listed by the local and remote metadata files."""
        directory = self._artifact_directory(identity)
        found: list[str] = []

        local_metadata = self.local_repository / directory / LOCAL_METADATA_FILE
        if local_metadata.is_file():
            try:
                found.extend(_parse_versions(local_metadata.read_bytes(), str(local_metadata)))
            except OSError as exc:
                raise MetadataRetrievalFailure(f"Unable to read {local_metadata}: {exc}") from exc

        for remote in self.remote_repositories:
            url = f"{remote}/{directory}/{METADATA_FILE}"
            logger.debug("Fetching %s", url)
            try:
                response = self.client.get(url)
            except httpx.HTTPError as exc:
                raise MetadataRetrievalFailure(f"Unable to retrieve {url}: {exc}") from exc
            if response.status_code == 404:
                logger.debug("No metadata for %s in %s", identity, remote)
                continue
            if not response.is_success:
                raise MetadataRetrievalFailure(f"Repository returned {response.status_code} for {url}")
            found.extend(_parse_versions(response.content, url))

        unique = list(dict.fromkeys(found))
        return [ArtifactVersion(version) for version in unique]

    def _download(self, relative_path: str) -> bytes:
        for remote in self.remote_repositories:
            url = f"{remote}/{relative_path}"
            logger.debug("Downloading %s", url)
            try:
                response = self.client.get(url)
            except httpx.HTTPError as exc:
                raise ArtifactResolutionFailure(f"Unable to download {url}: {exc}") from exc
            if response.status_code == 404:
                continue
            if not response.is_success:
                raise ArtifactResolutionFailure(f"Repository returned {response.status_code} for {url}")
            return response.content
        raise ArtifactResolutionFailure(
            f"Could not find {relative_path} in {', '.join(self.remote_repositories)}"
        )

    def _store(self, target: Path, content: bytes) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as exc:
            raise ArtifactResolutionFailure(f"Unable to store {target}: {exc}") from exc

    def resolve(self, candidate: ReleaseCandidate) -> Path:
        target = self.local_file(candidate)
        if target.is_file():
            return target
        self._store(target, self._download(self.artifact_path(candidate)))
        logger.info("Downloaded %s", candidate.coordinates)
        return target

    def force_resolve(self, candidate: ReleaseCandidate) -> Path:
        """Download again; an unchanged local file keeps its modification time."""
        target = self.local_file(candidate)
        content = self._download(self.artifact_path(candidate))
        try:
            unchanged = target.is_file() and target.read_bytes() == content
        except OSError:
            unchanged = False
        if unchanged:
            logger.debug("%s is up to date", target)
        else:
            self._store(target, content)
        return target
