"""
Numeric version model for trainkeeper.

A :class:`NumericVersion` is the dotted ``major.minor.bugfix[.patch]`` core
shared by artifact versions and SemVer-like dependency versions. It is an
immutable value: arithmetic returns new instances.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

from trainkeeper.constants import MAX_VERSION_PARTS
from trainkeeper.exceptions import ParseError

_SEGMENT = re.compile(r"[0-9]+")


@total_ordering
@dataclass(frozen=True, eq=False)
class NumericVersion:
    """A dotted numeric version.

    Comparison is lexicographic over ``(major, minor, bugfix, patch)`` with a
    missing ``patch`` treated as ``0``. Equality and hashing use the same
    key, so ``1.2`` equals ``1.2.0``.

    Attributes:
        major: Major component.
        minor: Minor component.
        bugfix: Bugfix component.
        patch: Optional fourth component.
    """

    major: int
    minor: int = 0
    bugfix: int = 0
    patch: Optional[int] = None

    def __post_init__(self) -> None:
        for label, value in (
            ("major", self.major),
            ("minor", self.minor),
            ("bugfix", self.bugfix),
            ("patch", self.patch or 0),
        ):
            if value < 0:
                raise ParseError(
                    f"{label.capitalize()} version must be greater or equal zero",
                    text=str(value),
                )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, *parts: int) -> "NumericVersion":
        """Create a version from one to four integer components.

        Raises:
            ParseError: No parts, more than four parts or a negative part.
        """
        if not parts or len(parts) > MAX_VERSION_PARTS:
            raise ParseError(
                f"Expected 1 to {MAX_VERSION_PARTS} version parts, got {len(parts)}",
                text=".".join(str(p) for p in parts),
            )
        return cls(*parts)

    @classmethod
    def parse(cls, text: str) -> "NumericVersion":
        """Parse ``major[.minor[.bugfix[.patch]]]``.

        Args:
            text: Version text; surrounding whitespace is ignored.

        Returns:
            The parsed version.

        Raises:
            ParseError: Empty input, a non-numeric segment, or too many
                segments.

        Examples:
            >>> NumericVersion.parse("5.7.1")
            NumericVersion(major=5, minor=7, bugfix=1, patch=None)
        """
        if text is None or not text.strip():
            raise ParseError("Version must not be empty", text=text)

        segments = text.strip().split(".")
        for segment in segments:
            if not _SEGMENT.fullmatch(segment):
                raise ParseError(
                    f"Invalid version segment {segment!r}",
                    text=text,
                )

        if len(segments) > MAX_VERSION_PARTS:
            raise ParseError(
                f"Expected at most {MAX_VERSION_PARTS} version parts",
                text=text,
            )

        return cls.of(*(int(segment) for segment in segments))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def next_major(self) -> "NumericVersion":
        return NumericVersion(self.major + 1)

    def next_minor(self) -> "NumericVersion":
        """Increment the minor component and reset bugfix and patch."""
        return NumericVersion(self.major, self.minor + 1)

    def next_bugfix(self) -> "NumericVersion":
        """Increment the bugfix component, dropping any patch.

        The patch is not carried over, so ``1.4.5.7`` becomes ``1.4.6``
        rather than ``1.4.6.7``.
        """
        return NumericVersion(self.major, self.minor, self.bugfix + 1)

    def with_bugfix(self, bugfix: int) -> "NumericVersion":
        return NumericVersion(self.major, self.minor, bugfix)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @property
    def sort_key(self) -> Tuple[int, int, int, int]:
        return (self.major, self.minor, self.bugfix, self.patch or 0)

    def compare_to(self, other: "NumericVersion") -> int:
        """Return a negative, zero or positive number like ``compareTo``."""
        if self.sort_key == other.sort_key:
            return 0
        return -1 if self.sort_key < other.sort_key else 1

    def is_greater_than(self, other: "NumericVersion") -> bool:
        return self > other

    def is_greater_than_or_equal_to(self, other: "NumericVersion") -> bool:
        return self >= other

    def is_less_than(self, other: "NumericVersion") -> bool:
        return self < other

    def is_less_than_or_equal_to(self, other: "NumericVersion") -> bool:
        return self <= other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumericVersion):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other: "NumericVersion") -> bool:
        if not isinstance(other, NumericVersion):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self) -> int:
        return hash(self.sort_key)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_major_minor_bugfix(self) -> str:
        """Render the canonical ``major.minor.bugfix`` form (patch omitted)."""
        return f"{self.major}.{self.minor}.{self.bugfix}"

    def __str__(self) -> str:
        """Render the short form, omitting trailing zero components."""
        patch = self.patch or 0
        digits = [self.major, self.minor]
        if patch or self.bugfix:
            digits.append(self.bugfix)
        if patch:
            digits.append(patch)
        return ".".join(str(d) for d in digits)
