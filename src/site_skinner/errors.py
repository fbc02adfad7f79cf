"""Exception hierarchy for the skin workflow.

Every stage raises a subclass of :class:`SkinnerError`. The workflow turns
them into a failed :class:`~site_skinner.workflow.skin.WorkflowResult`, the
CLI renders the message and exits non-zero.
"""

from __future__ import annotations


class SkinnerError(Exception):
    """Base exception for skin workflow failures."""

    code = "SKINNER_ERROR"


class InvalidConstraint(SkinnerError):
    """The released-version constraint cannot be parsed or satisfied."""

    code = "INVALID_CONSTRAINT"


class MetadataRetrievalFailure(SkinnerError):
    """Published versions of the artifact could not be listed."""

    code = "METADATA_RETRIEVAL_FAILED"


class ArtifactResolutionFailure(SkinnerError):
    """An artifact or its POM could not be downloaded."""

    code = "ARTIFACT_RESOLUTION_FAILED"


class ProjectModelFailure(SkinnerError):
    """A project descriptor (pom.xml) is missing or malformed."""

    code = "PROJECT_MODEL_FAILED"


class SyncFailure(SkinnerError):
    """Checkout or update of the working copy failed."""

    code = "SYNC_FAILED"


class MissingScmConnection(SkinnerError):
    """The released project declares no usable SCM connection."""

    code = "MISSING_SCM_CONNECTION"


class ToolingIncompatibility(SkinnerError):
    """The released site plugin cannot run with the installed build tool."""

    code = "TOOLING_INCOMPATIBLE"


class MissingDescriptor(SkinnerError):
    """The current project has no site descriptor for a locale."""

    code = "MISSING_DESCRIPTOR"

    def __init__(self, path: object, locale: str | None = None):
        self.path = path
        self.locale = locale
        super().__init__(
            f"No 'site.xml' defined at {path}, can't apply a new skin on the old site."
        )


class MissingSkin(SkinnerError):
    """The current site descriptor does not declare a skin."""

    code = "MISSING_SKIN"

    def __init__(self, path: object = None):
        self.path = path
        location = f" ({path})" if path is not None else ""
        super().__init__(
            f"No skin defined in the current 'site.xml'{location}, "
            "can't apply a new skin on the old site."
        )


class DescriptorIOFailure(SkinnerError):
    """A site descriptor could not be read, parsed or written."""

    code = "DESCRIPTOR_IO_FAILED"


class DownstreamBuildFailure(SkinnerError):
    """The downstream site build exited with a non-zero status."""

    code = "DOWNSTREAM_BUILD_FAILED"

    def __init__(self, message: str, exit_code: int | None = None):
        self.exit_code = exit_code
        super().__init__(message)


__all__ = [
    "SkinnerError",
    "InvalidConstraint",
    "MetadataRetrievalFailure",
    "ArtifactResolutionFailure",
    "ProjectModelFailure",
    "SyncFailure",
    "MissingScmConnection",
    "ToolingIncompatibility",
    "MissingDescriptor",
    "MissingSkin",
    "DescriptorIOFailure",
    "DownstreamBuildFailure",
]
