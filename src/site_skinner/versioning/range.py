"""Maven version range specifications.

Supported forms::

    1.0          recommended version (soft requirement)
    [1.0]        exactly 1.0
    (,1.0)       x < 1.0
    [1.0,2.0)    1.0 <= x < 2.0
    (,1.0],[1.2,)  x <= 1.0 or x >= 1.2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from site_skinner.errors import InvalidConstraint
from site_skinner.versioning.version import ArtifactVersion

__all__ = ["Restriction", "VersionRange"]


@dataclass(frozen=True)
class Restriction:
    """One bracketed interval of a range; ``None`` bounds are unbounded."""

    lower_bound: ArtifactVersion | None = None
    lower_inclusive: bool = False
    upper_bound: ArtifactVersion | None = None
    upper_inclusive: bool = False

    def contains(self, version: ArtifactVersion) -> bool:
        if self.lower_bound is not None:
            comparison = self.lower_bound.compare(version)
            if comparison == 0 and not self.lower_inclusive:
                return False
            if comparison > 0:
                return False
        if self.upper_bound is not None:
            comparison = self.upper_bound.compare(version)
            if comparison == 0 and not self.upper_inclusive:
                return False
            if comparison < 0:
                return False
        return True

    def __str__(self) -> str:
        if (
            self.lower_bound is not None
            and self.lower_bound == self.upper_bound
            and self.lower_inclusive
            and self.upper_inclusive
        ):
            return f"[{self.lower_bound}]"
        lower = str(self.lower_bound) if self.lower_bound is not None else ""
        upper = str(self.upper_bound) if self.upper_bound is not None else ""
        return (
            ("[" if self.lower_inclusive else "(")
            + f"{lower},{upper}"
            + ("]" if self.upper_inclusive else ")")
        )


EVERYTHING = Restriction()


def _parse_restriction(spec: str) -> Restriction:
    lower_inclusive = spec.startswith("[")
    upper_inclusive = spec.endswith("]")
    process = spec[1:-1].strip()

    if "," not in process:
        if not (lower_inclusive and upper_inclusive):
            raise InvalidConstraint(f"Single version must be surrounded by []: {spec}")
        version = ArtifactVersion(process)
        return Restriction(version, True, version, True)

    lower_text, _, upper_text = process.partition(",")
    lower_text = lower_text.strip()
    upper_text = upper_text.strip()
    if lower_text == upper_text:
        raise InvalidConstraint(f"Range cannot have identical boundaries: {spec}")

    lower = ArtifactVersion(lower_text) if lower_text else None
    upper = ArtifactVersion(upper_text) if upper_text else None
    if lower is not None and upper is not None and upper < lower:
        raise InvalidConstraint(f"Range defies version ordering: {spec}")
    return Restriction(lower, lower_inclusive, upper, upper_inclusive)


@dataclass(frozen=True)
class VersionRange:
    """A parsed version specification."""

    spec: str
    restrictions: tuple[Restriction, ...] = field(default_factory=tuple)
    recommended_version: ArtifactVersion | None = None

    @classmethod
    def from_spec(cls, spec: str) -> "VersionRange":
        """Parse ``spec``, raising :class:`InvalidConstraint` when malformed."""
        if spec is None or not spec.strip():
            raise InvalidConstraint("Invalid comparison version: empty version specification")

        process = spec.strip()
        restrictions: list[Restriction] = []
        upper_bound: ArtifactVersion | None = None

        while process.startswith(("[", "(")):
            closers = [i for i in (process.find("]"), process.find(")")) if i >= 0]
            if not closers:
                raise InvalidConstraint(f"Invalid comparison version: unbounded range: {spec}")
            index = min(closers)
            restriction = _parse_restriction(process[: index + 1])

            if upper_bound is not None:
                if restriction.lower_bound is None or restriction.lower_bound < upper_bound:
                    raise InvalidConstraint(f"Invalid comparison version: ranges overlap: {spec}")
            restrictions.append(restriction)
            upper_bound = restriction.upper_bound

            process = process[index + 1 :].strip()
            if process.startswith(","):
                process = process[1:].strip()

        if process:
            if restrictions:
                raise InvalidConstraint(
                    f"Invalid comparison version: only fully-qualified sets allowed in multiple set scenario: {spec}"
                )
            return cls(spec=spec, restrictions=(EVERYTHING,), recommended_version=ArtifactVersion(process))

        return cls(spec=spec, restrictions=tuple(restrictions))

    def is_selected_version_known(self) -> bool:
        """Whether the range already names its version without a lookup."""
        if self.recommended_version is not None:
            return True
        if not self.restrictions:
            raise InvalidConstraint(f"Invalid comparison version: the range {self.spec} has no valid ranges")
        return False

    def contains(self, version: ArtifactVersion) -> bool:
        return any(restriction.contains(version) for restriction in self.restrictions)

    def match_version(self, versions: Iterable[ArtifactVersion]) -> ArtifactVersion | None:
        """Return the highest of ``versions`` contained in this range."""
        matched: ArtifactVersion | None = None
        for version in versions:
            if self.contains(version) and (matched is None or matched < version):
                matched = version
        return matched

    def __str__(self) -> str:
        if self.recommended_version is not None:
            return str(self.recommended_version)
        return ",".join(str(restriction) for restriction in self.restrictions)
