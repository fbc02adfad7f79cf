"""Selecting the prior release from published versions."""

from __future__ import annotations

import logging

import pytest

from site_skinner.core.models import ArtifactIdentity
from site_skinner.errors import InvalidConstraint, MetadataRetrievalFailure
from site_skinner.versioning.resolver import VersionResolver, default_constraint, filter_snapshots
from site_skinner.versioning.version import ArtifactVersion
from tests.support import FakeRepository

IDENTITY = ArtifactIdentity("org.example", "widget")


def test_default_constraint_excludes_current_version() -> None:
    assert default_constraint("1.3") == "(,1.3)"


def test_snapshot_filter_is_narrow() -> None:
    versions = [ArtifactVersion(v) for v in ("1.0", "1.1-SNAPSHOT", "1.2-alpha-SNAPSHOT", "1.3-rc1")]
    assert [str(v) for v in filter_snapshots(versions)] == ["1.0", "1.2-alpha-SNAPSHOT", "1.3-rc1"]


def test_resolves_highest_release_below_current() -> None:
    repository = FakeRepository(versions=["1.0", "1.1", "1.2-SNAPSHOT", "1.3"])

    candidate = VersionResolver(repository).resolve("(,1.3)", IDENTITY)

    assert candidate.version == ArtifactVersion("1.1")
    assert candidate.identity == IDENTITY
    assert repository.lookups == [IDENTITY]


def test_recommended_version_skips_lookup() -> None:
    repository = FakeRepository(versions=["1.0"])

    candidate = VersionResolver(repository).resolve("1.2", IDENTITY)

    assert str(candidate.version) == "1.2"
    assert repository.lookups == []


def test_no_match_is_not_fatal(caplog: pytest.LogCaptureFixture) -> None:
    repository = FakeRepository(versions=["2.0"])

    with caplog.at_level(logging.INFO):
        candidate = VersionResolver(repository).resolve("(,1.0)", IDENTITY)

    assert candidate.version is None
    assert "Unable to find a previous version of the project in the repository" in caplog.text


def test_invalid_constraint_fails_before_lookup() -> None:
    repository = FakeRepository(versions=["1.0"])

    with pytest.raises(InvalidConstraint):
        VersionResolver(repository).resolve("[2.0,1.0]", IDENTITY)

    assert repository.lookups == []


def test_metadata_failure_propagates() -> None:
    repository = FakeRepository(fail_metadata=True)

    with pytest.raises(MetadataRetrievalFailure):
        VersionResolver(repository).resolve("(,1.3)", IDENTITY)
