"""Unit tests for trainkeeper.models.dependency module."""

from __future__ import annotations

import pytest

from trainkeeper.exceptions import InvalidCoordinatesError
from trainkeeper.models.dependency import Dependency


@pytest.mark.unit
class TestDependencyOf:
    """Tests for Dependency.of coordinate parsing."""

    def test_valid_coordinates(self) -> None:
        dependency = Dependency.of("Jackson", "com.fasterxml.jackson:jackson-bom")

        assert dependency.name == "Jackson"
        assert dependency.group_id == "com.fasterxml.jackson"
        assert dependency.artifact_id == "jackson-bom"
        assert dependency.coordinates == "com.fasterxml.jackson:jackson-bom"
        assert str(dependency) == "com.fasterxml.jackson:jackson-bom"
        assert dependency.exclusions == ()

    @pytest.mark.parametrize(
        "coordinates",
        ["", "com.example", ":artifact", "com.example:", "a:b:c"],
        ids=["empty", "no-colon", "no-group", "no-artifact", "too-many"],
    )
    def test_invalid_coordinates(self, coordinates: str) -> None:
        with pytest.raises(InvalidCoordinatesError) as exc_info:
            Dependency.of("Example", coordinates)

        assert exc_info.value.coordinates == coordinates

    def test_empty_name(self) -> None:
        with pytest.raises(InvalidCoordinatesError):
            Dependency.of("  ", "com.example:artifact")


@pytest.mark.unit
class TestDependencyExclusions:
    """Tests for version exclusion handling."""

    def test_exclude_returns_new_dependency(self) -> None:
        original = Dependency.of("Reactor", "io.projectreactor:reactor-bom")
        excluded = original.exclude_version_starting_with("2020.0.0-")

        assert original.exclusions == ()
        assert excluded.exclusions == ("2020.0.0-",)

    def test_should_include(self) -> None:
        dependency = (
            Dependency.of("Reactor", "io.projectreactor:reactor-bom")
            .exclude_version_starting_with("Dysprosium")
            .exclude_version_starting_with("2020.0.0-M")
        )

        assert dependency.should_include("2020.0.1")
        assert dependency.should_include("Californium-SR1")
        assert not dependency.should_include("Dysprosium-SR3")
        assert not dependency.should_include("2020.0.0-M2")

    def test_exclusions_ignored_for_equality(self) -> None:
        plain = Dependency.of("Reactor", "io.projectreactor:reactor-bom")

        assert plain.exclude_version_starting_with("x") == plain
        assert hash(plain.exclude_version_starting_with("x")) == hash(plain)


@pytest.mark.unit
class TestDependencyOrdering:
    """Dependencies order by display name."""

    def test_sorted_by_name(self) -> None:
        dependencies = [
            Dependency.of("Reactor", "io.projectreactor:reactor-bom"),
            Dependency.of("Jackson", "com.fasterxml.jackson:jackson-bom"),
            Dependency.of("Kotlin", "org.jetbrains.kotlin:kotlin-bom"),
        ]

        assert [d.name for d in sorted(dependencies)] == ["Jackson", "Kotlin", "Reactor"]
