"""
Artifact version model for trainkeeper.

Artifact versions are the versions a project publishes for its own
artifacts: a numeric version plus a qualifier, e.g. ``1.4.5.RELEASE``,
``2.0.0.M1`` or ``2.0.1.BUILD-SNAPSHOT``. The newer dash spelling
(``2.0.0-M1``) is accepted too and preserved when rendering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

from trainkeeper.constants import (
    ARTIFACT_VERSION_PATTERN,
    MILESTONE_SUFFIX_PATTERN,
    RELEASE_SUFFIX,
    SNAPSHOT_SUFFIX,
)
from trainkeeper.exceptions import InvalidVersionSuffixError, ParseError
from trainkeeper.models.iteration import Iteration
from trainkeeper.models.version import NumericVersion

_ARTIFACT_VERSION = re.compile(ARTIFACT_VERSION_PATTERN)
_MILESTONE_SUFFIX = re.compile(MILESTONE_SUFFIX_PATTERN)


@total_ordering
@dataclass(frozen=True)
class ArtifactVersion:
    """A published artifact version.

    Attributes:
        version: Numeric part of the version.
        suffix: Qualifier; one of ``RELEASE``, ``M<n>``, ``RC<n>`` or
            ``BUILD-SNAPSHOT``.
        separator: ``"."`` or ``"-"`` between version and qualifier. Only
            affects rendering, not equality or ordering.
    """

    version: NumericVersion
    suffix: str = RELEASE_SUFFIX
    separator: str = field(default=".", compare=False)

    def __post_init__(self) -> None:
        if self.suffix not in (RELEASE_SUFFIX, SNAPSHOT_SUFFIX) and (
            _MILESTONE_SUFFIX.fullmatch(self.suffix) is None
        ):
            raise InvalidVersionSuffixError(
                f"Invalid version suffix: {self.suffix}",
                text=self.suffix,
            )
        if self.separator not in (".", "-"):
            raise ParseError(
                f"Invalid version separator {self.separator!r}",
                text=self.separator,
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, source: str) -> "ArtifactVersion":
        """Parse ``1.2.3.RELEASE`` or ``1.2.3-M1`` style versions.

        The qualifier is the token after the last ``.`` or ``-`` that starts
        a recognized qualifier, so ``1.0.0.BUILD-SNAPSHOT`` keeps its
        two-word qualifier intact.

        Raises:
            InvalidVersionSuffixError: The qualifier is missing or unknown.
            ParseError: The numeric part is malformed.
        """
        if not source or not source.strip():
            raise ParseError("Version source must not be empty", text=source)

        match = _ARTIFACT_VERSION.fullmatch(source.strip())
        if match is None:
            raise InvalidVersionSuffixError(
                f"Invalid version suffix: {source}",
                text=source,
            )

        return cls(
            NumericVersion.parse(match.group("version")),
            match.group("suffix"),
            match.group("separator"),
        )

    @classmethod
    def of(cls, version: NumericVersion) -> "ArtifactVersion":
        """Create the release artifact version for ``version``."""
        return cls(version, RELEASE_SUFFIX)

    @classmethod
    def from_iteration(
        cls,
        version: NumericVersion,
        iteration: Iteration,
    ) -> "ArtifactVersion":
        """Project a train iteration onto an artifact version.

        ``GA`` yields ``RELEASE``; ``SR<n>`` yields ``RELEASE`` with the
        bugfix set to ``n``; milestones and release candidates use the
        iteration name as qualifier.

        Example:
            >>> str(ArtifactVersion.from_iteration(NumericVersion(1, 4), Iteration.parse("SR2")))
            '1.4.2.RELEASE'
        """
        if iteration.is_ga():
            return cls(version, RELEASE_SUFFIX)

        if iteration.is_service_release():
            return cls(version.with_bugfix(iteration.bugfix_value), RELEASE_SUFFIX)

        if iteration.is_snapshot():
            return cls(version, SNAPSHOT_SUFFIX)

        return cls(version, iteration.name)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_release_version(self) -> bool:
        return self.suffix == RELEASE_SUFFIX

    def is_milestone_version(self) -> bool:
        """Return True for milestone and release candidate qualifiers."""
        return _MILESTONE_SUFFIX.fullmatch(self.suffix) is not None

    def is_snapshot_version(self) -> bool:
        return self.suffix == SNAPSHOT_SUFFIX

    # ------------------------------------------------------------------
    # Derived versions
    # ------------------------------------------------------------------

    def get_release_version(self) -> "ArtifactVersion":
        return ArtifactVersion(self.version, RELEASE_SUFFIX, self.separator)

    def get_snapshot_version(self) -> "ArtifactVersion":
        return ArtifactVersion(self.version, SNAPSHOT_SUFFIX, self.separator)

    def get_next_development_version(self) -> "ArtifactVersion":
        """Return the snapshot version development continues on.

        Releases move to the next bugfix snapshot, snapshots stay as they
        are, and milestones become the snapshot of the same version.
        """
        if self.is_snapshot_version():
            return self

        if self.is_release_version():
            return ArtifactVersion(
                self.version.next_bugfix(), SNAPSHOT_SUFFIX, self.separator
            )

        return self.get_snapshot_version()

    def get_next_bugfix_version(self) -> "ArtifactVersion":
        """Return the next bugfix snapshot of a release, else its snapshot."""
        if self.is_release_version():
            return ArtifactVersion(
                self.version.next_bugfix(), SNAPSHOT_SUFFIX, self.separator
            )

        return self if self.is_snapshot_version() else self.get_snapshot_version()

    # ------------------------------------------------------------------
    # Comparison & rendering
    # ------------------------------------------------------------------

    def __lt__(self, other: "ArtifactVersion") -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        # Numeric first so 1.9.0 sorts before 1.10.0.
        return (self.version, self.suffix) < (other.version, other.suffix)

    def __str__(self) -> str:
        return f"{self.version.to_major_minor_bugfix()}{self.separator}{self.suffix}"

    def to_short_string(self) -> str:
        """Render the plain version, omitting trailing zero components."""
        return str(self.version)
