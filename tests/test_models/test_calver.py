"""Unit tests for trainkeeper.models.calver module."""

from __future__ import annotations

import pytest

from trainkeeper.exceptions import ParseError
from trainkeeper.models.calver import Calver
from trainkeeper.models.iteration import GA, M1, RC2, SNAPSHOT, SR1


@pytest.mark.unit
class TestCalverParse:
    """Tests for Calver.parse."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("2020.0.1", Calver(2020, 0, 1)),
            ("2021.1.0-RC2", Calver(2021, 1, 0, RC2)),
            ("2022.0.0-M1", Calver(2022, 0, 0, M1)),
            ("2020.0.3-SR1", Calver(2020, 0, 3, SR1)),
            ("2023.2.0-SNAPSHOT", Calver(2023, 2, 0, SNAPSHOT)),
        ],
    )
    def test_parse_valid(self, source: str, expected: Calver) -> None:
        assert Calver.parse(source) == expected

    @pytest.mark.parametrize(
        "source",
        ["", "20.0.1", "2020.0", "2020.0.1-GA", "2020.0.1.RELEASE", "Moore-SR1"],
    )
    def test_parse_invalid(self, source: str) -> None:
        with pytest.raises(ParseError):
            Calver.parse(source)

    def test_ga_defaults(self) -> None:
        assert Calver.parse("2020.0.1").modifier == GA


@pytest.mark.unit
class TestCalverBehavior:
    """Tests for ordering, arithmetic and rendering."""

    def test_modifier_orders_within_version(self) -> None:
        rc = Calver.parse("2020.0.1-RC2")
        ga = Calver.parse("2020.0.1")
        sr = Calver.parse("2020.0.1-SR1")

        assert rc < ga < sr
        assert sr.is_greater_than(rc)
        assert rc.is_less_than(ga)

    def test_numeric_parts_order_first(self) -> None:
        assert Calver.parse("2020.0.9") < Calver.parse("2020.1.0-M1")
        assert Calver.parse("2020.9.0") < Calver.parse("2021.0.0-SNAPSHOT")

    def test_arithmetic(self) -> None:
        version = Calver.parse("2020.0.1")

        assert str(version.next_minor()) == "2020.1.0"
        assert str(version.next_bugfix()) == "2020.0.2"
        assert str(version.with_bugfix(5)) == "2020.0.5"
        assert str(version.with_modifier(M1)) == "2020.0.1-M1"
        assert version.numeric_parts == (2020, 0, 1)

    @pytest.mark.parametrize("source", ["2020.0.1", "2021.1.0-RC2", "2020.0.3-SR1"])
    def test_rendering(self, source: str) -> None:
        assert str(Calver.parse(source)) == source
