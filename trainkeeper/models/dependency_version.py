"""
Third-party dependency version model for trainkeeper.

Dependency versions come in two grammars:

- **Train grammar**: ``Name-RELEASE``, ``Name-SR<n>``, ``Name-SNAPSHOT`` or
  ``Name-BUILD-SNAPSHOT`` (e.g. ``Moore-SR3``), parsed into a
  :class:`TrainDependencyVersion`.
- **Numeric grammar**: a dotted numeric run optionally followed by a letter
  modifier and a counter (``5.7.0``, ``1.0.0-rc1``, ``2.3.4.RELEASE``),
  parsed into a :class:`NumericDependencyVersion`.

:meth:`DependencyVersion.parse` tries the train grammar first. Both kinds
share one total order, built from the comparison stages in
:data:`COMPARISON_STAGES`, :data:`TRAIN_TIE_BREAKS` and
:data:`NUMERIC_TIE_BREAKS`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Optional, Tuple, Union

from trainkeeper.constants import (
    NUMERIC_VERSION_PATTERN,
    TRAIN_SNAPSHOT_MODIFIER,
    TRAIN_VERSION_PATTERN,
)
from trainkeeper.exceptions import ParseError, UnparseableVersionError
from trainkeeper.models.version import NumericVersion
from trainkeeper.utils.logger import get_logger

logger = get_logger("models.dependency_version")

_TRAIN_VERSION = re.compile(TRAIN_VERSION_PATTERN)
_NUMERIC_VERSION = re.compile(NUMERIC_VERSION_PATTERN)


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


class DependencyVersion:
    """Common behavior of both dependency version grammars.

    Concrete values are :class:`TrainDependencyVersion` or
    :class:`NumericDependencyVersion`; both expose ``identifier``,
    ``train_name``, ``version``, ``modifier``, ``counter`` and
    ``created_at``.
    """

    __slots__ = ()

    identifier: str
    train_name: Optional[str]
    version: NumericVersion
    modifier: str
    counter: int
    created_at: Optional[datetime]

    @classmethod
    def parse(cls, identifier: str) -> "AnyDependencyVersion":
        """Parse a dependency version identifier.

        Args:
            identifier: Raw version identifier as published upstream.

        Returns:
            A train or numeric dependency version.

        Raises:
            UnparseableVersionError: The identifier matches neither grammar,
                or its numeric run is not a valid version.

        Examples:
            >>> DependencyVersion.parse("Moore-SR2").train_name
            'Moore'
            >>> DependencyVersion.parse("1.0.0-rc1").modifier
            'RC'
        """
        if not identifier or not identifier.strip():
            raise UnparseableVersionError(
                "Version identifier must not be empty",
                identifier=identifier,
            )

        train_match = _TRAIN_VERSION.search(identifier)
        if train_match:
            service_release = train_match.group(3)
            return TrainDependencyVersion(
                identifier=identifier,
                train_name=train_match.group(1),
                version=NumericVersion(int(service_release) if service_release else 0),
                modifier=(
                    TRAIN_SNAPSHOT_MODIFIER if identifier.endswith("-SNAPSHOT") else ""
                ),
            )

        numeric_match = _NUMERIC_VERSION.search(identifier)
        if numeric_match:
            number, modifier, counter = numeric_match.groups()
            number = number[:-1] if number.endswith(".") else number
            try:
                version = NumericVersion.parse(number)
            except ParseError as exc:
                raise UnparseableVersionError(
                    f"Cannot parse version number {number}",
                    identifier=identifier,
                ) from exc

            return NumericDependencyVersion(
                identifier=identifier,
                version=version,
                modifier=(modifier or "").lstrip("-").upper(),
                counter=int(counter) if counter else 0,
            )

        logger.debug("Identifier %r matches no version grammar", identifier)
        raise UnparseableVersionError(
            f"Cannot parse version identifier {identifier}",
            identifier=identifier,
        )

    of = parse

    def with_created_at(self, created_at: Optional[datetime]) -> "AnyDependencyVersion":
        """Return a copy carrying the upstream publication timestamp."""
        return replace(self, created_at=created_at)

    def is_final_release(self) -> bool:
        """Return True if the version carries no modifier."""
        return not self.modifier

    def compare_to(self, other: "DependencyVersion") -> int:
        """Compare by running :data:`COMPARISON_STAGES` in order."""
        for stage in COMPARISON_STAGES:
            result = stage(self, other)
            if result is not None:
                return result
        return 0

    def is_newer(self, other: "DependencyVersion") -> bool:
        """Return True if this version sorts strictly after ``other``."""
        return self.compare_to(other) > 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DependencyVersion):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DependencyVersion):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DependencyVersion):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DependencyVersion):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class TrainDependencyVersion(DependencyVersion):
    """A ``Name-RELEASE`` / ``Name-SR<n>`` style release train version.

    ``version`` holds the service release counter as a major version
    (``RELEASE`` and snapshots are ``0``).
    """

    identifier: str
    train_name: str
    version: NumericVersion
    modifier: str = ""
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def counter(self) -> int:
        return 0


@dataclass(frozen=True)
class NumericDependencyVersion(DependencyVersion):
    """A SemVer-like dependency version such as ``5.7.0`` or ``1.0.0-M2``."""

    identifier: str
    version: NumericVersion
    modifier: str = ""
    counter: int = 0
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def train_name(self) -> Optional[str]:
        return None


AnyDependencyVersion = Union[TrainDependencyVersion, NumericDependencyVersion]

# ---------------------------------------------------------------------------
# Comparison stages
#
# Each stage returns None when it does not apply, handing over to the next
# stage; the first stage returning a number decides the comparison.
# ---------------------------------------------------------------------------

Stage = Callable[[Any, Any], Optional[int]]
TieBreak = Callable[[Any, Any], int]


def compare_trains(left: Any, right: Any) -> Optional[int]:
    """Two train versions order by train name, then :data:`TRAIN_TIE_BREAKS`.

    ``Name-RELEASE`` and its snapshots share service release ``0``, so the
    final release is ranked above them and the identifier settles the rest.
    """
    if left.train_name is None or right.train_name is None:
        return None
    result = _cmp(left.train_name, right.train_name)
    if result:
        return result
    for tie_break in TRAIN_TIE_BREAKS:
        result = tie_break(left, right)
        if result:
            return result
    return 0


def compare_train_precedence(left: Any, right: Any) -> Optional[int]:
    """A train version sorts below any numeric version."""
    if left.train_name is not None:
        return -1
    if right.train_name is not None:
        return 1
    return None


def compare_identifiers_without_version(left: Any, right: Any) -> Optional[int]:
    """Without a numeric version on either side, fall back to the identifier."""
    if left.version is None or right.version is None:
        return _cmp(left.identifier, right.identifier)
    return None


def by_version(left: Any, right: Any) -> int:
    return _cmp(left.version, right.version)


def by_final_release(left: Any, right: Any) -> int:
    """A final release (no modifier) outranks M/RC/SNAPSHOT of the same version."""
    return _cmp(left.is_final_release(), right.is_final_release())


def by_modifier(left: Any, right: Any) -> int:
    return _cmp(left.modifier, right.modifier)


def by_counter(left: Any, right: Any) -> int:
    return _cmp(left.counter, right.counter)


def by_identifier(left: Any, right: Any) -> int:
    return _cmp(left.identifier, right.identifier)


NUMERIC_TIE_BREAKS: Tuple[TieBreak, ...] = (
    by_version,
    by_final_release,
    by_modifier,
    by_counter,
    by_identifier,
)

TRAIN_TIE_BREAKS: Tuple[TieBreak, ...] = (
    by_version,
    by_final_release,
    by_modifier,
    by_identifier,
)


def compare_numeric(left: Any, right: Any) -> int:
    """Run :data:`NUMERIC_TIE_BREAKS` until one of them decides."""
    for tie_break in NUMERIC_TIE_BREAKS:
        result = tie_break(left, right)
        if result:
            return result
    return 0


COMPARISON_STAGES: Tuple[Stage, ...] = (
    compare_trains,
    compare_train_precedence,
    compare_identifiers_without_version,
    compare_numeric,
)
