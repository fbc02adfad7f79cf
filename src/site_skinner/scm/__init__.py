"""
Source-control access for the released working copy.

Usage:
    from site_skinner.scm.executor import SourceSync
    from site_skinner.scm.manager import DefaultScmManager

Connection strings follow the ``scm:<provider>:<provider url>`` convention,
for example ``scm:git:https://github.com/acme/widget.git``.
"""

from __future__ import annotations

from .types import (
    ScmFileSet,
    ScmRepository,
    ScmResult,
    SyncAction,
    SyncReport,
    SyncTarget,
)

__all__ = [
    "ScmFileSet",
    "ScmRepository",
    "ScmResult",
    "SyncAction",
    "SyncReport",
    "SyncTarget",
]
