"""Maven version parsing, ordering and range matching."""

from __future__ import annotations

from .version import ArtifactVersion
from .range import Restriction, VersionRange

__all__ = ["ArtifactVersion", "Restriction", "VersionRange"]
