"""
Centralized constants for trainkeeper.

This module defines immutable values used across trainkeeper, including
the version grammars, artifact qualifiers, configuration defaults and
logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Tuple

# ---------------------------------------------------------------------------
# Numeric versions
# ---------------------------------------------------------------------------

#: Maximum number of dot-separated components (major.minor.bugfix.patch).
MAX_VERSION_PARTS: Final[int] = 4

# ---------------------------------------------------------------------------
# Artifact version qualifiers
# ---------------------------------------------------------------------------

#: Qualifier of a final (GA or service) release artifact.
RELEASE_SUFFIX: Final[str] = "RELEASE"

#: Qualifier pattern of milestone and release candidate artifacts.
MILESTONE_SUFFIX_PATTERN: Final[str] = r"M\d+|RC\d+"

#: Qualifier of a development snapshot artifact.
SNAPSHOT_SUFFIX: Final[str] = "BUILD-SNAPSHOT"

#: Full artifact version grammar: numeric part, separator, qualifier.
ARTIFACT_VERSION_PATTERN: Final[str] = (
    r"(?P<version>.+?)(?P<separator>[.-])"
    rf"(?P<suffix>{RELEASE_SUFFIX}|{MILESTONE_SUFFIX_PATTERN}|{SNAPSHOT_SUFFIX})"
)

# ---------------------------------------------------------------------------
# Dependency version grammars
# ---------------------------------------------------------------------------

#: Release train grammar, e.g. ``Moore-SR1`` or ``Neumann-BUILD-SNAPSHOT``.
TRAIN_VERSION_PATTERN: Final[str] = (
    r"([A-Za-z]+)-(RELEASE|SR(\d+)|SNAPSHOT|BUILD-SNAPSHOT)"
)

#: SemVer-like grammar, e.g. ``5.7.0``, ``1.0.0-rc1`` or ``2.3.4.RELEASE``.
NUMERIC_VERSION_PATTERN: Final[str] = r"((?:\d+\.?)+)(-?[A-Za-z]+)?(\d+)?"

#: Modifier assigned to train identifiers ending in ``-SNAPSHOT``.
TRAIN_SNAPSHOT_MODIFIER: Final[str] = "SNAPSHOT"

# ---------------------------------------------------------------------------
# Calendar versions
# ---------------------------------------------------------------------------

#: Calendar version grammar, e.g. ``2020.0.1`` or ``2021.1.0-RC2``.
CALVER_PATTERN: Final[str] = (
    r"(\d{4})\.(\d+)\.(\d+)(?:-(SR\d+|RC\d+|M\d+|SNAPSHOT))?"
)

# ---------------------------------------------------------------------------
# Iterations
# ---------------------------------------------------------------------------

#: Names of the iterations a release train walks through by default.
DEFAULT_ITERATION_NAMES: Final[Tuple[str, ...]] = (
    "M1",
    "RC1",
    "GA",
    "SR1",
    "SR2",
    "SR3",
    "SR4",
)

# ---------------------------------------------------------------------------
# Upgrade proposal descriptors
# ---------------------------------------------------------------------------

#: Property key holding the release train name.
PROPERTY_TRAIN: Final[str] = "dependency.train"

#: Property key holding the iteration name.
PROPERTY_ITERATION: Final[str] = "dependency.iteration"

#: Property key pattern for a single dependency upgrade.
PROPERTY_DEPENDENCY_PATTERN: Final[str] = (
    r"dependency\[([a-zA-Z0-9\-.]+):([a-zA-Z0-9\-.]+)\]"
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

#: Dedicated configuration file name.
CONFIG_FILE_NAME: Final[str] = "trainkeeper.toml"

#: Iteration used when the configuration does not name one.
DEFAULT_ITERATION: Final[str] = "GA"

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
