"""
Upgrade proposal data models for trainkeeper.

An :class:`UpgradeProposal` captures the outcome of resolving one
dependency: where it is, what is available and which version should be
used. :class:`UpgradeProposals` collects proposals per
:class:`~trainkeeper.models.dependency.Dependency` and renders them as
table rows or as the properties descriptor exchanged with the release
orchestration, which can be parsed back with
:meth:`UpgradeProposals.from_properties`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)

from trainkeeper.constants import (
    PROPERTY_DEPENDENCY_PATTERN,
    PROPERTY_ITERATION,
    PROPERTY_TRAIN,
)
from trainkeeper.exceptions import PropertiesVerificationError
from trainkeeper.models.dependency import Dependency
from trainkeeper.models.dependency_version import (
    AnyDependencyVersion,
    DependencyVersion,
)
from trainkeeper.models.iteration import Iteration

_DEPENDENCY_KEY = re.compile(PROPERTY_DEPENDENCY_PATTERN)


@dataclass(frozen=True)
class UpgradeProposal:
    """Resolution outcome for a single dependency.

    Attributes:
        current: Version currently in use.
        latest_minor: Newest acceptable version on the current minor line.
        latest: Newest acceptable version overall.
        proposal: The version to upgrade to.
        newer_versions: Every available version newer than ``current``,
            ascending and unfiltered.
    """

    current: AnyDependencyVersion
    latest_minor: AnyDependencyVersion
    latest: AnyDependencyVersion
    proposal: AnyDependencyVersion
    newer_versions: Tuple[AnyDependencyVersion, ...] = ()

    def is_upgrade_available(self) -> bool:
        return self.current.identifier != self.proposal.identifier

    def get_new_versions(
        self,
        include_all: bool = False,
        include_date: bool = False,
    ) -> str:
        """Summarize the versions worth looking at.

        Args:
            include_all: List every newer version instead of just the
                latest minor and latest versions.
            include_date: Append the publication date to each listed
                version that carries one (only with ``include_all``).

        Returns:
            Comma-separated version identifiers.
        """
        if include_all:
            return ", ".join(
                _describe(version, include_date) for version in self.newer_versions
            )

        if str(self.latest_minor) == str(self.latest):
            return str(self.latest)

        return f"{self.latest_minor}, {self.latest}"

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "current": self.current.identifier,
            "latest_minor": self.latest_minor.identifier,
            "latest": self.latest.identifier,
            "proposal": self.proposal.identifier,
            "newer_versions": [v.identifier for v in self.newer_versions],
            "upgrade_available": self.is_upgrade_available(),
        }

    def __str__(self) -> str:
        return self.proposal.identifier


def _describe(version: AnyDependencyVersion, include_date: bool) -> str:
    if include_date and version.created_at is not None:
        return f"{version.identifier} ({version.created_at.date().isoformat()})"
    return version.identifier


class UpgradeProposals:
    """Upgrade proposals keyed by dependency.

    Args:
        proposals: Mapping of dependency to its proposal. Iteration order
            is preserved.
    """

    __slots__ = ("_proposals",)

    def __init__(self, proposals: Mapping[Dependency, UpgradeProposal]) -> None:
        self._proposals: Dict[Dependency, UpgradeProposal] = dict(proposals)

    @classmethod
    def empty(cls) -> "UpgradeProposals":
        return cls({})

    def merge_with(self, other: "UpgradeProposals") -> "UpgradeProposals":
        """Combine two proposal sets; ``other`` wins on duplicates.

        The result is ordered by dependency.
        """
        merged = dict(self._proposals)
        merged.update(other._proposals)
        return UpgradeProposals(dict(sorted(merged.items(), key=lambda item: item[0])))

    def get(self, dependency: Dependency) -> Optional[UpgradeProposal]:
        return self._proposals.get(dependency)

    def items(self) -> Iterable[Tuple[Dependency, UpgradeProposal]]:
        return self._proposals.items()

    def upgradable(self) -> List[Tuple[Dependency, UpgradeProposal]]:
        """Return the entries whose proposal differs from the current version."""
        return [
            (dependency, proposal)
            for dependency, proposal in self._proposals.items()
            if proposal.is_upgrade_available()
        ]

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._proposals)

    def __len__(self) -> int:
        return len(self._proposals)

    def __contains__(self, dependency: object) -> bool:
        return dependency in self._proposals

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpgradeProposals):
            return NotImplemented
        return self._proposals == other._proposals

    __hash__ = None  # type: ignore[assignment]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_rows(self, include_all: bool = False) -> List[Dict[str, str]]:
        """Build display rows (Dependency, Current, Available, Proposed).

        Args:
            include_all: Include dependencies without an available upgrade
                and list every newer version.
        """
        return [
            {
                "Dependency": dependency.name,
                "Current": str(proposal.current),
                "Available": proposal.get_new_versions(include_all),
                "Proposed": str(proposal),
            }
            for dependency, proposal in self._proposals.items()
            if include_all or proposal.is_upgrade_available()
        ]

    def as_properties(self, train: str, iteration: Iteration) -> str:
        """Render the upgrade descriptor in Java properties syntax.

        Only dependencies with an available upgrade are written. The
        header records train and iteration so
        :meth:`from_properties` can verify the descriptor belongs to the
        release it is applied to.
        """
        lines = [
            f"{PROPERTY_TRAIN}={train}",
            f"{PROPERTY_ITERATION}={iteration.name}",
        ]

        for dependency, proposal in self.upgradable():
            lines.append("")
            lines.append(
                f"# {dependency.name} - Available versions: "
                f"{proposal.get_new_versions(True, True)}"
            )
            lines.append(
                f"dependency[{dependency.group_id}\\:{dependency.artifact_id}]={proposal}"
            )

        return "\n".join(lines) + "\n"

    @staticmethod
    def from_properties(
        text: str,
        train: str,
        iteration: Iteration,
        known_dependencies: Iterable[Dependency],
    ) -> Dict[Dependency, AnyDependencyVersion]:
        """Parse a descriptor written by :meth:`as_properties`.

        Args:
            text: Properties text.
            train: Train the descriptor must belong to.
            iteration: Iteration the descriptor must belong to.
            known_dependencies: Dependencies keys may refer to.

        Returns:
            The selected version per dependency, in descriptor order.

        Raises:
            PropertiesVerificationError: Train or iteration mismatch, an
                unexpected key, or a key naming an unknown dependency.
            UnparseableVersionError: A value is not a dependency version.
        """
        properties = _parse_properties(text)

        reported_train = properties.pop(PROPERTY_TRAIN, "")
        reported_iteration = properties.pop(PROPERTY_ITERATION, "")
        if reported_train != train or reported_iteration != iteration.name:
            raise PropertiesVerificationError(
                "Verification failed: Dependency upgrade descriptor reports "
                f"{reported_train} {reported_iteration}"
            )

        by_coordinates = {d.coordinates: d for d in known_dependencies}
        result: Dict[Dependency, AnyDependencyVersion] = {}

        for key, value in properties.items():
            match = _DEPENDENCY_KEY.fullmatch(key)
            if match is None:
                raise PropertiesVerificationError(f"Unexpected key: {key}", key=key)

            dependency = by_coordinates.get(f"{match.group(1)}:{match.group(2)}")
            if dependency is None:
                raise PropertiesVerificationError(
                    f"No such dependency: {match.group(2)}", key=key
                )

            result[dependency] = DependencyVersion.parse(value)

        return result


# ---------------------------------------------------------------------------
# Properties syntax helpers
# ---------------------------------------------------------------------------


def _parse_properties(text: str) -> Dict[str, str]:
    """Parse the subset of Java properties syntax the descriptor uses."""
    properties: Dict[str, str] = {}

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue

        key, value = _split_property(line)
        properties[_unescape(key.strip())] = _unescape(value.strip())

    return properties


def _split_property(line: str) -> Tuple[str, str]:
    """Split at the first unescaped ``=`` or ``:``."""
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in "=:":
            return line[:index], line[index + 1 :]
    return line, ""


def _unescape(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value)
