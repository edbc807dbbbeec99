"""
Core functionality exports for trainkeeper.

Importing from here keeps user-facing imports clean and stable:

    from trainkeeper.core import propose_upgrade
"""

from __future__ import annotations

from trainkeeper.core.resolver import (
    UpgradePolicy,
    is_same_line,
    propose_upgrade,
    propose_upgrades,
    resolve_upgrade_proposal,
    resolve_with_policy,
)

__all__ = [
    "UpgradePolicy",
    "is_same_line",
    "propose_upgrade",
    "propose_upgrades",
    "resolve_upgrade_proposal",
    "resolve_with_policy",
]
