"""
Unified data model exports for trainkeeper.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``trainkeeper.models`` instead of individual submodules.

Example:
    >>> from trainkeeper.models import ArtifactVersion, Iteration
"""

from __future__ import annotations

from trainkeeper.models.version import NumericVersion
from trainkeeper.models.iteration import Iteration, IterationKind, Iterations
from trainkeeper.models.artifact_version import ArtifactVersion
from trainkeeper.models.calver import Calver
from trainkeeper.models.dependency_version import (
    AnyDependencyVersion,
    DependencyVersion,
    NumericDependencyVersion,
    TrainDependencyVersion,
)
from trainkeeper.models.dependency import Dependency
from trainkeeper.models.proposal import UpgradeProposal, UpgradeProposals

__all__ = [
    "NumericVersion",
    "Iteration",
    "IterationKind",
    "Iterations",
    "ArtifactVersion",
    "Calver",
    "AnyDependencyVersion",
    "DependencyVersion",
    "NumericDependencyVersion",
    "TrainDependencyVersion",
    "Dependency",
    "UpgradeProposal",
    "UpgradeProposals",
]
