"""Unit tests for trainkeeper.models.iteration module.

Test Coverage:
- Parsing iteration names (case-insensitive) and rejecting unknown ones
- Predicates and bugfix values
- Total order over iterations
- The Iterations table (lookup and succession)
"""

from __future__ import annotations

import itertools

import pytest

from trainkeeper.exceptions import UnknownIterationError
from trainkeeper.models.iteration import (
    GA,
    M1,
    M2,
    RC1,
    RC2,
    SERVICE_RELEASES,
    SNAPSHOT,
    SR1,
    SR2,
    SR4,
    Iteration,
    IterationKind,
    Iterations,
)

ORDERED = [SNAPSHOT, M1, M2, RC1, RC2, GA, SR1, SR2, SR4]


@pytest.mark.unit
class TestIterationParse:
    """Tests for Iteration.parse."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("M1", M1),
            ("m2", M2),
            ("RC1", RC1),
            ("rc2", RC2),
            ("GA", GA),
            ("ga", GA),
            ("SR1", SR1),
            ("sr4", SR4),
            ("SNAPSHOT", SNAPSHOT),
            (" SR2 ", SR2),
        ],
    )
    def test_parse_known_names(self, name: str, expected: Iteration) -> None:
        assert Iteration.parse(name) == expected

    def test_parse_beyond_named_constants(self) -> None:
        assert Iteration.parse("SR18") == SERVICE_RELEASES[-1]
        assert Iteration.parse("M7") == Iteration(IterationKind.MILESTONE, 7)

    @pytest.mark.parametrize("name", ["", "X1", "M", "SR0", "RC-1", "GA1", "RELEASE"])
    def test_parse_unknown_names(self, name: str) -> None:
        with pytest.raises(UnknownIterationError):
            Iteration.parse(name)

    def test_unknown_name_is_reported(self) -> None:
        with pytest.raises(UnknownIterationError) as exc_info:
            Iteration.parse("Foo")

        assert exc_info.value.name == "Foo"

    def test_counter_required_for_counted_kinds(self) -> None:
        with pytest.raises(UnknownIterationError):
            Iteration(IterationKind.SERVICE_RELEASE, 0)

    def test_counter_rejected_for_ga(self) -> None:
        with pytest.raises(UnknownIterationError):
            Iteration(IterationKind.GA, 1)


@pytest.mark.unit
class TestIterationPredicates:
    """Tests for the iteration predicates."""

    def test_name_rendering(self) -> None:
        assert [it.name for it in ORDERED] == [
            "SNAPSHOT", "M1", "M2", "RC1", "RC2", "GA", "SR1", "SR2", "SR4",
        ]
        assert str(RC2) == "RC2"

    def test_milestone_and_release_candidate(self) -> None:
        assert M1.is_milestone() and not M1.is_release_candidate()
        assert RC1.is_release_candidate() and not RC1.is_milestone()
        assert M2.is_pre_release() and RC2.is_pre_release()
        assert not GA.is_pre_release()
        assert not SNAPSHOT.is_pre_release()

    @pytest.mark.parametrize("iteration", [GA, SR1, SR4])
    def test_public_iterations(self, iteration: Iteration) -> None:
        assert iteration.is_public()
        assert not iteration.is_preview()

    @pytest.mark.parametrize("iteration", [SNAPSHOT, M1, RC2])
    def test_preview_iterations(self, iteration: Iteration) -> None:
        assert iteration.is_preview()
        assert not iteration.is_public()

    def test_is_initial(self) -> None:
        assert M1.is_initial()
        assert not M2.is_initial()
        assert not GA.is_initial()

    def test_bugfix_value(self) -> None:
        assert SR2.bugfix_value == 2
        assert GA.bugfix_value == 0
        assert RC2.bugfix_value == 0

    def test_ga_and_snapshot(self) -> None:
        assert GA.is_ga() and not SR1.is_ga()
        assert SNAPSHOT.is_snapshot() and not M1.is_snapshot()
        assert SR1.is_service_release() and not GA.is_service_release()


@pytest.mark.unit
class TestIterationOrdering:
    """Tests for the total order over iterations."""

    def test_declared_order(self) -> None:
        assert sorted(reversed(ORDERED)) == ORDERED

    def test_counter_orders_within_kind(self) -> None:
        assert Iteration.parse("SR2") < Iteration.parse("SR10")

    def test_antisymmetry(self) -> None:
        for a, b in itertools.product(ORDERED, repeat=2):
            if a < b:
                assert not b < a
            if a <= b and b <= a:
                assert a == b

    def test_transitivity(self) -> None:
        for a, b, c in itertools.product(ORDERED, repeat=3):
            if a < b and b < c:
                assert a < c

    def test_hashable(self) -> None:
        assert len({Iteration.parse("ga"), GA, Iteration.parse("SR1"), SR1}) == 2


@pytest.mark.unit
class TestIterations:
    """Tests for the Iterations table."""

    def test_default_table(self) -> None:
        assert [it.name for it in Iterations.DEFAULT] == [
            "M1", "RC1", "GA", "SR1", "SR2", "SR3", "SR4",
        ]
        assert len(Iterations.DEFAULT) == 7

    def test_get_by_name_ignores_case(self) -> None:
        assert Iterations.DEFAULT.get_by_name("rc1") == RC1
        assert Iterations.DEFAULT.get_by_name("Ga") == GA

    def test_get_by_name_unknown(self) -> None:
        with pytest.raises(UnknownIterationError):
            Iterations.DEFAULT.get_by_name("M2")

    def test_next_after(self) -> None:
        assert Iterations.DEFAULT.next_after(M1) == RC1
        assert Iterations.DEFAULT.next_after(GA) == SR1
        assert Iterations.DEFAULT.next_after(SR4) is None

    def test_next_after_foreign_iteration(self) -> None:
        with pytest.raises(UnknownIterationError):
            Iterations.DEFAULT.next_after(M2)

    def test_contains(self) -> None:
        assert GA in Iterations.DEFAULT
        assert SNAPSHOT not in Iterations.DEFAULT

    def test_custom_table(self) -> None:
        table = Iterations(M1, M2, GA)

        assert table.next_after(M2) == GA
        assert repr(table) == "Iterations(M1, M2, GA)"
