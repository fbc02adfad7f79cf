"""Select the prior release that receives the new skin."""

from __future__ import annotations

import logging

from site_skinner.core.constants import SNAPSHOT_QUALIFIER
from site_skinner.core.models import ArtifactIdentity, ReleaseCandidate
from site_skinner.core.protocols import ArtifactRepository
from site_skinner.versioning.range import VersionRange
from site_skinner.versioning.version import ArtifactVersion

__all__ = ["VersionResolver", "default_constraint", "filter_snapshots"]

logger = logging.getLogger(__name__)


def default_constraint(current_version: str) -> str:
    """Every version strictly below the current project version."""
    return f"(,{current_version})"


def filter_snapshots(versions: list[ArtifactVersion]) -> list[ArtifactVersion]:
    """Drop versions whose qualifier is exactly ``SNAPSHOT``.

    Other pre-release spellings (``alpha-SNAPSHOT``, ``rc1``...) are kept.
    """
    return [version for version in versions if version.qualifier != SNAPSHOT_QUALIFIER]


class VersionResolver:
    """Resolve a version constraint against the published versions of an artifact."""

    def __init__(self, repository: ArtifactRepository):
        self.repository = repository

    def resolve(self, constraint: str, identity: ArtifactIdentity) -> ReleaseCandidate:
        """Return a candidate whose ``version`` is the best match, or ``None``.

        Raises:
            InvalidConstraint: the constraint is malformed or over-constrained.
            MetadataRetrievalFailure: published versions could not be listed.
        """
        version_range = VersionRange.from_spec(constraint)
        candidate = ReleaseCandidate(identity=identity, version_range=version_range)

        if version_range.is_selected_version_known():
            candidate.version = version_range.recommended_version
        else:
            logger.debug("Searching for versions in range: %s", version_range)
            available = self.repository.retrieve_available_versions(identity)
            candidate.version = version_range.match_version(filter_snapshots(available))

        if candidate.version is None:
            logger.info("Unable to find a previous version of the project in the repository")
        else:
            logger.debug("Previous version: %s", candidate.version)
        return candidate
