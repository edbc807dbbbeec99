"""
Custom exception hierarchy for trainkeeper.

This module defines structured exception types used across trainkeeper.
All exceptions inherit from :class:`TrainKeeperError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class TrainKeeperError(Exception):
    """Base exception for all trainkeeper errors.

    All trainkeeper-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ParseError(TrainKeeperError):
    """Raised when a version string cannot be parsed.

    Args:
        message: Error description.
        text: The offending input, truncated for safety.
    """

    __slots__ = ("text",)

    def __init__(self, message: str, *, text: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        if text is not None:
            details["text"] = _truncate(text)

        super().__init__(message, details)

        self.text = text


class InvalidVersionSuffixError(ParseError):
    """Raised when an artifact version carries an unrecognized qualifier."""

    __slots__ = ()


class UnparseableVersionError(ParseError):
    """Raised when a dependency identifier matches no known grammar.

    Args:
        message: Error description.
        identifier: The dependency version identifier.
    """

    __slots__ = ("identifier",)

    def __init__(self, message: str, *, identifier: str) -> None:
        super().__init__(message, text=identifier)
        self.identifier = identifier


class UnknownIterationError(TrainKeeperError):
    """Raised when an iteration name is not recognized.

    Args:
        message: Error description.
        name: The iteration name that failed to resolve.
    """

    __slots__ = ("name",)

    def __init__(self, message: str, *, name: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "name", name)

        super().__init__(message, details)

        self.name = name


class InvalidCoordinatesError(TrainKeeperError):
    """Raised when dependency coordinates are not ``group:artifact``."""

    __slots__ = ("coordinates",)

    def __init__(self, message: str, *, coordinates: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "coordinates", coordinates)

        super().__init__(message, details)

        self.coordinates = coordinates


class PropertiesVerificationError(TrainKeeperError):
    """Raised when an upgrade properties descriptor fails verification.

    Args:
        message: Error description.
        key: Property key involved, if any.
    """

    __slots__ = ("key",)

    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "key", key)

        super().__init__(message, details)

        self.key = key


class ConfigError(TrainKeeperError):
    """Raised when the configuration file is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Offending option name, if known.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
