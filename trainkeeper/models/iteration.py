"""
Release train iteration model for trainkeeper.

An iteration is a single step of a release train: milestones (``M1``..),
release candidates (``RC1``..), general availability (``GA``), service
releases (``SR1``..) or a development ``SNAPSHOT``. Iterations are totally
ordered::

    SNAPSHOT < M1 < M2 < RC1 < RC2 < GA < SR1 < SR2 < ...

The :class:`Iterations` table replaces a mutable global registry with an
immutable, ordered tuple of the iterations a train walks through.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Tuple

from trainkeeper.constants import DEFAULT_ITERATION_NAMES
from trainkeeper.exceptions import UnknownIterationError

_NAME_PATTERN = re.compile(r"(M|RC|SR)(\d+)|(GA)|(SNAPSHOT)", re.IGNORECASE)


class IterationKind(IntEnum):
    """Iteration families, valued by their position in the release order."""

    SNAPSHOT = 0
    MILESTONE = 1
    RELEASE_CANDIDATE = 2
    GA = 3
    SERVICE_RELEASE = 4


_PREFIXES = {
    IterationKind.MILESTONE: "M",
    IterationKind.RELEASE_CANDIDATE: "RC",
    IterationKind.SERVICE_RELEASE: "SR",
}

_KINDS_BY_PREFIX = {prefix: kind for kind, prefix in _PREFIXES.items()}


@dataclass(frozen=True, order=True)
class Iteration:
    """A single, ordered release train step.

    Attributes:
        kind: The iteration family.
        counter: ``n`` for ``M<n>``, ``RC<n>`` and ``SR<n>``; ``0`` for
            ``GA`` and ``SNAPSHOT``.
    """

    kind: IterationKind
    counter: int = 0

    def __post_init__(self) -> None:
        counted = self.kind in _PREFIXES
        if counted and self.counter < 1:
            raise UnknownIterationError(
                f"{self.kind.name} iterations require a counter >= 1",
                name=f"{_PREFIXES[self.kind]}{self.counter}",
            )
        if not counted and self.counter != 0:
            raise UnknownIterationError(
                f"{self.kind.name} iterations do not carry a counter",
                name=f"{self.kind.name}{self.counter}",
            )

    @classmethod
    def parse(cls, name: str) -> "Iteration":
        """Resolve a short iteration name, ignoring case.

        Args:
            name: ``M1``, ``rc2``, ``GA``, ``SR3``, ``SNAPSHOT`` and so on.

        Returns:
            The matching iteration.

        Raises:
            UnknownIterationError: ``name`` is not an iteration name.
        """
        match = _NAME_PATTERN.fullmatch(name.strip()) if name else None
        if match is None:
            raise UnknownIterationError(f"Unknown iteration {name!r}", name=name)

        prefix, counter, ga, snapshot = match.groups()
        if ga:
            return GA
        if snapshot:
            return SNAPSHOT

        return cls(_KINDS_BY_PREFIX[prefix.upper()], int(counter))

    @property
    def name(self) -> str:
        if self.kind in _PREFIXES:
            return f"{_PREFIXES[self.kind]}{self.counter}"
        return self.kind.name

    @property
    def bugfix_value(self) -> int:
        """The bugfix number contributed by a service release, else ``0``."""
        return self.counter if self.is_service_release() else 0

    def is_milestone(self) -> bool:
        return self.kind is IterationKind.MILESTONE

    def is_release_candidate(self) -> bool:
        return self.kind is IterationKind.RELEASE_CANDIDATE

    def is_pre_release(self) -> bool:
        """Return True for milestones and release candidates."""
        return self.is_milestone() or self.is_release_candidate()

    def is_ga(self) -> bool:
        return self.kind is IterationKind.GA

    def is_service_release(self) -> bool:
        return self.kind is IterationKind.SERVICE_RELEASE

    def is_snapshot(self) -> bool:
        return self.kind is IterationKind.SNAPSHOT

    def is_public(self) -> bool:
        """Return True if the iteration publishes to Maven Central (GA or SR)."""
        return self.is_ga() or self.is_service_release()

    def is_preview(self) -> bool:
        return not self.is_public()

    def is_initial(self) -> bool:
        return self == M1

    def __str__(self) -> str:
        return self.name


SNAPSHOT = Iteration(IterationKind.SNAPSHOT)
M1 = Iteration(IterationKind.MILESTONE, 1)
M2 = Iteration(IterationKind.MILESTONE, 2)
M3 = Iteration(IterationKind.MILESTONE, 3)
RC1 = Iteration(IterationKind.RELEASE_CANDIDATE, 1)
RC2 = Iteration(IterationKind.RELEASE_CANDIDATE, 2)
RC3 = Iteration(IterationKind.RELEASE_CANDIDATE, 3)
GA = Iteration(IterationKind.GA)
SR1 = Iteration(IterationKind.SERVICE_RELEASE, 1)
SR2 = Iteration(IterationKind.SERVICE_RELEASE, 2)
SR3 = Iteration(IterationKind.SERVICE_RELEASE, 3)
SR4 = Iteration(IterationKind.SERVICE_RELEASE, 4)

#: Service releases up to the longest train maintained so far.
SERVICE_RELEASES: Tuple[Iteration, ...] = tuple(
    Iteration(IterationKind.SERVICE_RELEASE, n) for n in range(1, 19)
)


class Iterations:
    """An immutable, ordered table of iterations.

    Example:
        >>> Iterations.DEFAULT.get_by_name("rc1")
        Iteration(kind=<IterationKind.RELEASE_CANDIDATE: 2>, counter=1)
    """

    __slots__ = ("_iterations",)

    DEFAULT: "Iterations"

    def __init__(self, *iterations: Iteration) -> None:
        self._iterations: Tuple[Iteration, ...] = tuple(iterations)

    def get_by_name(self, name: str) -> Iteration:
        """Return the iteration called ``name`` (case-insensitive).

        Raises:
            UnknownIterationError: No iteration in this table has that name.
        """
        for iteration in self._iterations:
            if name and iteration.name.lower() == name.strip().lower():
                return iteration

        raise UnknownIterationError(
            f"No iteration {name!r} in {', '.join(str(it) for it in self)}",
            name=name,
        )

    def next_after(self, iteration: Iteration) -> Optional[Iteration]:
        """Return the iteration following ``iteration``, or None at the end."""
        try:
            index = self._iterations.index(iteration)
        except ValueError:
            raise UnknownIterationError(
                f"Iteration {iteration} is not part of this table",
                name=iteration.name,
            ) from None

        if index + 1 < len(self._iterations):
            return self._iterations[index + 1]
        return None

    def __iter__(self) -> Iterator[Iteration]:
        return iter(self._iterations)

    def __len__(self) -> int:
        return len(self._iterations)

    def __contains__(self, iteration: object) -> bool:
        return iteration in self._iterations

    def __repr__(self) -> str:
        return f"Iterations({', '.join(str(it) for it in self)})"


Iterations.DEFAULT = Iterations(
    *(Iteration.parse(name) for name in DEFAULT_ITERATION_NAMES)
)
