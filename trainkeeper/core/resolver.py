"""Dependency upgrade resolution for trainkeeper.

Given the iteration a release train is about to ship, the version a
dependency is currently on and the versions published upstream, the
resolver decides which version the dependency should move to.

Two rules derive from the iteration:

1. **Pre-release candidates**: milestone iterations (``M<n>``) may pick up
   versions with a modifier (``-M1``, ``-RC2``, ``-SNAPSHOT``, ...). Every
   other iteration, release candidates included, only considers final
   releases.
2. **Minor line restriction**: public iterations (``GA`` and ``SR<n>``)
   stay on the current minor line so a service release never introduces a
   minor upgrade; preview iterations take the newest candidate.

Typical usage::

    proposal = resolve_upgrade_proposal(SR1, current, sorted(available))
    print(proposal.proposal)

All functions are pure: they only read their arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, Mapping, Sequence, Tuple, Union

from trainkeeper.models.dependency import Dependency
from trainkeeper.models.dependency_version import (
    AnyDependencyVersion,
    DependencyVersion,
)
from trainkeeper.models.iteration import Iteration
from trainkeeper.models.proposal import UpgradeProposal, UpgradeProposals
from trainkeeper.utils.logger import get_logger

logger = get_logger("core.resolver")

VersionInput = Union[str, AnyDependencyVersion]


@dataclass(frozen=True)
class UpgradePolicy:
    """Rules governing which upgrades are acceptable.

    Attributes:
        prerelease_allowed: Versions carrying a modifier may be proposed.
        restrict_to_minor_version: Only upgrades within the current minor
            line (or train) may be proposed.
    """

    prerelease_allowed: bool
    restrict_to_minor_version: bool

    LATEST_STABLE: ClassVar["UpgradePolicy"]

    @classmethod
    def from_iteration(cls, phase: Iteration) -> "UpgradePolicy":
        """Derive the policy for releasing ``phase``."""
        return cls(
            prerelease_allowed=phase.is_milestone(),
            restrict_to_minor_version=phase.is_public(),
        )


UpgradePolicy.LATEST_STABLE = UpgradePolicy(
    prerelease_allowed=False,
    restrict_to_minor_version=False,
)


def is_same_line(candidate: AnyDependencyVersion, current: AnyDependencyVersion) -> bool:
    """Return True if ``candidate`` is on the same minor line as ``current``.

    Train versions share a line when they belong to the same train; numeric
    versions when major and minor match. A train version never shares a
    line with a numeric one.
    """
    if candidate.train_name is not None or current.train_name is not None:
        return candidate.train_name == current.train_name

    return (
        candidate.version.major == current.version.major
        and candidate.version.minor == current.version.minor
    )


def resolve_with_policy(
    policy: UpgradePolicy,
    current: AnyDependencyVersion,
    available: Sequence[AnyDependencyVersion],
) -> UpgradeProposal:
    """Resolve an upgrade proposal under an explicit policy.

    Args:
        policy: Upgrade rules to apply.
        current: Version currently in use.
        available: Published versions, sorted ascending. The order is
            kept as given.

    Returns:
        The proposal. Without any acceptable candidate every field falls
        back to ``current`` and ``newer_versions`` is empty.
    """
    candidates = [
        version
        for version in available
        if policy.prerelease_allowed or version.is_final_release()
    ]

    latest = max(candidates, default=current)
    latest_minor = max(
        (version for version in candidates if is_same_line(version, current)),
        default=current,
    )
    proposal = latest_minor if policy.restrict_to_minor_version else latest
    newer_versions = tuple(version for version in available if version.is_newer(current))

    logger.debug(
        "Resolved %s: latest_minor=%s latest=%s proposal=%s (%d newer, %d candidates)",
        current,
        latest_minor,
        latest,
        proposal,
        len(newer_versions),
        len(candidates),
    )

    return UpgradeProposal(
        current=current,
        latest_minor=latest_minor,
        latest=latest,
        proposal=proposal,
        newer_versions=newer_versions,
    )


def resolve_upgrade_proposal(
    phase: Iteration,
    current: AnyDependencyVersion,
    available: Sequence[AnyDependencyVersion],
) -> UpgradeProposal:
    """Resolve the upgrade proposal for releasing ``phase``.

    Args:
        phase: Iteration being released.
        current: Version currently in use.
        available: Published versions, sorted ascending.

    Returns:
        The upgrade proposal.

    Example:
        >>> versions = [DependencyVersion.parse(v) for v in ("5.7.0", "5.7.1", "5.8.0")]
        >>> str(resolve_upgrade_proposal(Iteration.parse("SR1"), versions[0], versions))
        '5.7.1'
    """
    return resolve_with_policy(UpgradePolicy.from_iteration(phase), current, available)


def propose_upgrade(
    dependency: Dependency,
    phase: Iteration,
    current: VersionInput,
    identifiers: Iterable[str],
) -> UpgradeProposal:
    """Parse, filter and sort raw identifiers, then resolve a proposal.

    Args:
        dependency: The dependency; its exclusions drop identifiers.
        phase: Iteration being released.
        current: Current version, raw or parsed.
        identifiers: Published version identifiers in any order.

    Raises:
        UnparseableVersionError: ``current`` or an included identifier is
            not a dependency version.
    """
    current_version = (
        current if isinstance(current, DependencyVersion) else DependencyVersion.parse(current)
    )

    included = [identifier for identifier in identifiers if dependency.should_include(identifier)]
    available = sorted(DependencyVersion.parse(identifier) for identifier in included)

    logger.debug(
        "Resolving %s (%s) against %d published versions",
        dependency.name,
        dependency,
        len(available),
    )

    return resolve_upgrade_proposal(phase, current_version, available)


def propose_upgrades(
    phase: Iteration,
    catalogue: Mapping[Dependency, Tuple[VersionInput, Iterable[str]]],
) -> UpgradeProposals:
    """Resolve proposals for several dependencies at once.

    Args:
        phase: Iteration being released.
        catalogue: ``dependency -> (current, published identifiers)``.

    Returns:
        Proposals ordered by dependency.
    """
    proposals = {
        dependency: propose_upgrade(dependency, phase, current, identifiers)
        for dependency, (current, identifiers) in catalogue.items()
    }
    return UpgradeProposals.empty().merge_with(UpgradeProposals(proposals))
