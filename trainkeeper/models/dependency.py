"""
Dependency coordinate model for trainkeeper.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from trainkeeper.exceptions import InvalidCoordinatesError


@dataclass(frozen=True, order=True)
class Dependency:
    """A tracked third-party dependency.

    Dependencies order by display name, then coordinates.

    Attributes:
        name: Display name, e.g. ``"Jackson"``.
        group_id: Maven group id.
        artifact_id: Maven artifact id.
        exclusions: Identifier prefixes never offered as upgrades.
    """

    name: str
    group_id: str
    artifact_id: str
    exclusions: Tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def of(cls, name: str, coordinates: str) -> "Dependency":
        """Create a dependency from ``groupId:artifactId`` coordinates.

        Raises:
            InvalidCoordinatesError: Empty name or malformed coordinates.
        """
        if not name or not name.strip():
            raise InvalidCoordinatesError(
                "Name must not be empty", coordinates=coordinates
            )

        group_id, sep, artifact_id = (coordinates or "").partition(":")
        if not sep or not group_id or not artifact_id or ":" in artifact_id:
            raise InvalidCoordinatesError(
                "GroupId/ArtifactId must be in the format of org.group:artifact-id",
                coordinates=coordinates,
            )

        return cls(name, group_id, artifact_id)

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def exclude_version_starting_with(self, prefix: str) -> "Dependency":
        """Return a copy that also skips identifiers starting with ``prefix``."""
        return Dependency(
            self.name,
            self.group_id,
            self.artifact_id,
            self.exclusions + (prefix,),
        )

    def should_include(self, identifier: str) -> bool:
        return not any(identifier.startswith(prefix) for prefix in self.exclusions)

    def __str__(self) -> str:
        return self.coordinates
