"""Configuration file loader for trainkeeper.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``trainkeeper.toml``: settings under ``[trainkeeper]`` table
- ``pyproject.toml``: settings under ``[tool.trainkeeper]`` table

Discovery order:

1. Explicit path passed to :func:`load_config`
2. ``trainkeeper.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.trainkeeper]`` section

Typical usage::

    config = load_config()  # Auto-discover
    dependency = config.apply_exclusions(Dependency.of("Jackson", coords))
    proposal = propose_upgrade(dependency, config.phase, current, identifiers)

Example (``trainkeeper.toml``)::

    [trainkeeper]
    default_iteration = "SR1"

    [trainkeeper.exclusions]
    "io.projectreactor:reactor-core" = ["3.5.0-M", "3.6"]
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass, field

from trainkeeper.constants import CONFIG_FILE_NAME, DEFAULT_ITERATION
from trainkeeper.exceptions import ConfigError, UnknownIterationError
from trainkeeper.models.dependency import Dependency
from trainkeeper.models.iteration import Iteration
from trainkeeper.utils.logger import get_logger

logger = get_logger("config")


@dataclass
class TrainKeeperConfig:
    """Parsed and validated trainkeeper configuration.

    Contains settings from ``trainkeeper.toml`` or ``pyproject.toml``.
    All fields have defaults, so empty config files are valid.

    Attributes:
        default_iteration: Name of the iteration being released when the
            caller does not pass one.
        exclusions: Identifier prefixes never proposed, keyed by
            ``groupId:artifactId`` coordinates.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    default_iteration: str = DEFAULT_ITERATION
    exclusions: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    @property
    def phase(self) -> Iteration:
        """The configured default iteration."""
        return Iteration.parse(self.default_iteration)

    def apply_exclusions(self, dependency: Dependency) -> Dependency:
        """Return ``dependency`` with its configured exclusions added."""
        for prefix in self.exclusions.get(dependency.coordinates, ()):
            dependency = dependency.exclude_version_starting_with(prefix)
        return dependency

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging.

        Excludes ``source_path`` metadata.
        """
        return {
            "default_iteration": self.default_iteration,
            "exclusions": {k: list(v) for k, v in self.exclusions.items()},
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Search order:

    1. ``explicit_path``
    2. ``trainkeeper.toml`` in current directory
    3. ``pyproject.toml`` with ``[tool.trainkeeper]`` section in current directory

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    trainkeeper_toml = cwd / CONFIG_FILE_NAME
    if trainkeeper_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, trainkeeper_toml)
        return trainkeeper_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_trainkeeper_section(pyproject_toml):
        logger.debug("Found [tool.trainkeeper] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_trainkeeper_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.trainkeeper] section.

    An unreadable or invalid pyproject.toml counts as having no section.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "trainkeeper" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> TrainKeeperConfig:
    """Load and validate trainkeeper configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`TrainKeeperConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return TrainKeeperConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("trainkeeper", {})
    else:
        section = raw.get("trainkeeper", {})

    if not section:
        logger.debug("Config file found but no trainkeeper section, using defaults")
        return TrainKeeperConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> TrainKeeperConfig:
    """Parse and validate the ``[trainkeeper]`` or ``[tool.trainkeeper]`` table.

    Raises:
        ConfigError: Unknown keys, incorrect types, an unknown iteration name
            or malformed exclusion coordinates.
    """
    config = TrainKeeperConfig()

    known_top = {"default_iteration", "exclusions"}

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "default_iteration" in section:
        val = section["default_iteration"]
        if not isinstance(val, str):
            raise ConfigError(
                f"default_iteration must be a string, got {type(val).__name__}",
                config_path=config_path,
                option="default_iteration",
            )
        try:
            Iteration.parse(val)
        except UnknownIterationError as exc:
            raise ConfigError(
                f"default_iteration is not an iteration: {val!r}",
                config_path=config_path,
                option="default_iteration",
            ) from exc
        config.default_iteration = val

    if "exclusions" in section:
        config.exclusions = _parse_exclusions(
            section["exclusions"], config_path=config_path
        )

    return config


def _parse_exclusions(
    val: Any,
    *,
    config_path: str,
) -> Dict[str, Tuple[str, ...]]:
    """Validate the ``exclusions`` table of coordinates to prefix lists."""
    if not isinstance(val, dict):
        raise ConfigError(
            f"exclusions must be a table, got {type(val).__name__}",
            config_path=config_path,
            option="exclusions",
        )

    exclusions: Dict[str, Tuple[str, ...]] = {}
    for coordinates, prefixes in val.items():
        option = f"exclusions.{coordinates}"

        group_id, sep, artifact_id = coordinates.partition(":")
        if not sep or not group_id or not artifact_id:
            raise ConfigError(
                f"Exclusion key must be groupId:artifactId, got {coordinates!r}",
                config_path=config_path,
                option=option,
            )

        if not isinstance(prefixes, list) or not all(
            isinstance(prefix, str) for prefix in prefixes
        ):
            raise ConfigError(
                f"{option} must be a list of strings",
                config_path=config_path,
                option=option,
            )

        exclusions[coordinates] = tuple(prefixes)

    return exclusions
