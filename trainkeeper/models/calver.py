"""
Calendar version model for trainkeeper.

Release trains switched from names to calendar versions such as
``2020.0.1`` or ``2021.1.0-RC2``. The modifier reuses :class:`Iteration`
so calendar versions order exactly like train iterations do.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from trainkeeper.constants import CALVER_PATTERN
from trainkeeper.exceptions import ParseError
from trainkeeper.models.iteration import GA, Iteration

_CALVER = re.compile(CALVER_PATTERN)


@dataclass(frozen=True, order=True)
class Calver:
    """A calendar version ``YYYY.minor.micro[-modifier]``.

    Attributes:
        year: Four-digit release year.
        minor: Minor number within the year.
        micro: Micro (bugfix) number.
        modifier: Iteration of this version; ``GA`` when no modifier is
            written.
    """

    year: int
    minor: int
    micro: int
    modifier: Iteration = GA

    @classmethod
    def parse(cls, version: str) -> "Calver":
        """Parse a calendar version.

        Raises:
            ParseError: ``version`` is empty or not a calendar version.
        """
        if not version or not version.strip():
            raise ParseError("Version must not be empty", text=version)

        match = _CALVER.fullmatch(version.strip())
        if match is None:
            raise ParseError("Version does not match CalVer", text=version)

        year, minor, micro, modifier = match.groups()
        return cls(
            int(year),
            int(minor),
            int(micro),
            Iteration.parse(modifier) if modifier else GA,
        )

    def is_greater_than(self, other: "Calver") -> bool:
        return self > other

    def is_less_than(self, other: "Calver") -> bool:
        return self < other

    def next_minor(self) -> "Calver":
        return Calver(self.year, self.minor + 1, 0, self.modifier)

    def next_bugfix(self) -> "Calver":
        return Calver(self.year, self.minor, self.micro + 1, self.modifier)

    def with_bugfix(self, bugfix: int) -> "Calver":
        return Calver(self.year, self.minor, bugfix, self.modifier)

    def with_modifier(self, modifier: Iteration) -> "Calver":
        return Calver(self.year, self.minor, self.micro, modifier)

    @property
    def numeric_parts(self) -> Tuple[int, int, int]:
        return (self.year, self.minor, self.micro)

    def __str__(self) -> str:
        raw = ".".join(str(part) for part in self.numeric_parts)
        if self.modifier.is_ga():
            return raw
        return f"{raw}-{self.modifier.name}"
