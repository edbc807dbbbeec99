"""
trainkeeper: release train version engine

trainkeeper models the versions a release train deals with and decides
which third-party dependency upgrades a train iteration should pick up.

Features include:
    • Artifact versions (``1.4.5.RELEASE``, ``2.0.0-M1``) and their lifecycle
    • Release train iterations (M1 … RC1 … GA … SR<n>) and calendar versions
    • A total order over train-style and SemVer-like dependency versions
    • Iteration-aware upgrade proposals and properties descriptors

Typical usage::

    from trainkeeper import Dependency, Iteration, propose_upgrade

    proposal = propose_upgrade(
        Dependency.of("Jackson", "com.fasterxml.jackson:jackson-bom"),
        Iteration.parse("SR1"),
        "2.11.0",
        ["2.11.0", "2.11.1", "2.12.0"],
    )
    str(proposal)  # '2.11.1'
"""

from __future__ import annotations

from trainkeeper.__version__ import __version__
from trainkeeper.config import TrainKeeperConfig, load_config
from trainkeeper.core.resolver import (
    UpgradePolicy,
    propose_upgrade,
    propose_upgrades,
    resolve_upgrade_proposal,
    resolve_with_policy,
)
from trainkeeper.exceptions import TrainKeeperError
from trainkeeper.models import (
    ArtifactVersion,
    Calver,
    Dependency,
    DependencyVersion,
    Iteration,
    Iterations,
    NumericVersion,
    UpgradeProposal,
    UpgradeProposals,
)

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "trainkeeper Contributors"
__license__ = "Apache-2.0"
__description__ = "Release train version modelling and dependency upgrade proposals."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    # Models
    "ArtifactVersion",
    "Calver",
    "Dependency",
    "DependencyVersion",
    "Iteration",
    "Iterations",
    "NumericVersion",
    "UpgradeProposal",
    "UpgradeProposals",
    # Resolution
    "UpgradePolicy",
    "propose_upgrade",
    "propose_upgrades",
    "resolve_upgrade_proposal",
    "resolve_with_policy",
    # Configuration & errors
    "TrainKeeperConfig",
    "TrainKeeperError",
    "load_config",
]
