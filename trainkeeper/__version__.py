"""
trainkeeper version information.

This module provides a single source of truth for the package version.
It follows Semantic Versioning: https://semver.org/
"""

from __future__ import annotations

from trainkeeper.models.version import NumericVersion

# ---------------------------------------------------------------------------
# Main version (single source of truth)
# ---------------------------------------------------------------------------

__version__ = "0.1.0"


# ---------------------------------------------------------------------------
# Structured version metadata
# ---------------------------------------------------------------------------

VERSION_INFO = NumericVersion.parse(__version__)

VERSION_STRING = f"trainkeeper {__version__}"
