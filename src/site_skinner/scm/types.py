"""Value types exchanged with source-control providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

__all__ = ["SyncAction", "ScmRepository", "ScmFileSet", "ScmResult", "SyncTarget", "SyncReport"]


class SyncAction(str, Enum):
    """Which operation brought the working copy up to date."""

    CHECKOUT = "checkout"
    UPDATE = "update"


@dataclass(frozen=True)
class ScmRepository:
    """A connection string split into provider type and provider-specific URL."""

    provider: str
    url: str
    connection: str


def _split_patterns(patterns: str | None) -> list[str]:
    if not patterns:
        return []
    return [pattern.strip() for pattern in patterns.split(",") if pattern.strip()]


@dataclass(frozen=True)
class ScmFileSet:
    """Working copy directory with optional comma separated include/exclude globs."""

    basedir: Path
    includes: str | None = None
    excludes: str | None = None

    @property
    def include_patterns(self) -> list[str]:
        return _split_patterns(self.includes)

    @property
    def exclude_patterns(self) -> list[str]:
        return _split_patterns(self.excludes)

    @property
    def is_filtered(self) -> bool:
        return bool(self.include_patterns or self.exclude_patterns)


@dataclass
class ScmResult:
    """Outcome reported by a provider; only ``success`` decides the verdict."""

    success: bool
    provider_message: str | None = None
    command_output: str | None = None
    command_line: str | None = None


@dataclass(frozen=True)
class SyncTarget:
    """Where and from what connection the released sources are synchronised."""

    directory: Path
    connection: str
    includes: str | None = None
    excludes: str | None = None
    revision: str | None = None


@dataclass
class SyncReport:
    action: SyncAction
    directory: Path
    result: ScmResult = field(default_factory=lambda: ScmResult(success=True))
