"""Maven collaborators: POM reader, repository client and ``mvn`` invoker."""

from __future__ import annotations

from .invoker import MavenInvoker
from .pom import PomProjectModelProvider
from .repository import DEFAULT_REMOTE_REPOSITORY, MavenRepository

__all__ = ["DEFAULT_REMOTE_REPOSITORY", "MavenInvoker", "MavenRepository", "PomProjectModelProvider"]
