"""Tests for the dependency model and scan result types."""

import pytest
from pathlib import Path

from dep_verify.core.parsers.base import Dependency, DependencyType, dependency_key
from dep_verify.core.scanner import (
    ScanResult,
    ValidationResult,
    ValidationStatus,
    deduplicate_dependencies,
)


def make_dependency(name, ecosystem=DependencyType.NPM, version=None, source="package.json"):
    return Dependency(name=name, version=version, ecosystem=ecosystem, source_file=Path(source))


class TestDependency:
    """Test the Dependency value type."""

    def test_key_ignores_case(self):
        assert make_dependency("Lodash").key == make_dependency("lodash").key
        assert dependency_key(DependencyType.NUGET, "Newtonsoft.Json") == "NuGet:newtonsoft.json"

    @pytest.mark.parametrize("first,second", [
        (DependencyType.NPM, DependencyType.PYPI),
        (DependencyType.MAVEN, DependencyType.GRADLE),
        (DependencyType.CRATES, DependencyType.NUGET),
    ])
    def test_key_differs_between_ecosystems(self, first, second):
        assert dependency_key(first, "x") != dependency_key(second, "x")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_is_rejected(self, name):
        with pytest.raises(ValueError):
            make_dependency(name)

    def test_dependency_is_immutable(self):
        dependency = make_dependency("lodash")
        with pytest.raises(AttributeError):
            dependency.name = "other"

    def test_ecosystem_display_names(self):
        assert [str(ecosystem) for ecosystem in DependencyType] == [
            "Npm", "NuGet", "PyPi", "Crates", "Maven", "Gradle"
        ]


class TestDeduplication:
    """Test collapsing of duplicate declarations."""

    def test_first_declaration_wins(self):
        first = make_dependency("lodash", version="^4.17.21", source="f1")
        second = make_dependency("lodash", version="1.0.0", source="f2")

        unique = deduplicate_dependencies([first, second])

        assert unique == [first]

    def test_case_variants_collapse(self):
        unique = deduplicate_dependencies([
            make_dependency("Serilog", DependencyType.NUGET),
            make_dependency("serilog", DependencyType.NUGET),
        ])

        assert [dep.name for dep in unique] == ["Serilog"]

    def test_same_name_in_different_ecosystems_is_kept(self):
        unique = deduplicate_dependencies([
            make_dependency("requests", DependencyType.NPM),
            make_dependency("requests", DependencyType.PYPI),
        ])

        assert len(unique) == 2

    def test_order_is_preserved(self):
        names = ["c", "a", "b", "a", "c"]
        unique = deduplicate_dependencies([make_dependency(name) for name in names])

        assert [dep.name for dep in unique] == ["c", "a", "b"]


class TestScanResult:
    """Test derived scan result counts."""

    def test_counts_and_problems(self):
        results = (
            ValidationResult(make_dependency("a"), ValidationStatus.VALID),
            ValidationResult(make_dependency("b"), ValidationStatus.NOT_FOUND),
            ValidationResult(make_dependency("c"), ValidationStatus.BLACKLISTED),
            ValidationResult(make_dependency("d"), ValidationStatus.WHITELISTED),
            ValidationResult(make_dependency("e"), ValidationStatus.ERROR),
            ValidationResult(make_dependency("f"), ValidationStatus.VALID),
        )
        result = ScanResult(scanned_path="/project", validation_results=results)

        assert result.valid_count == 2
        assert result.not_found_count == 1
        assert result.blacklisted_count == 1
        assert result.whitelisted_count == 1
        assert result.error_count == 1
        assert result.has_problems
        assert [problem.dependency.name for problem in result.problems] == ["b", "c"]

    def test_errors_are_not_problems(self):
        result = ScanResult(
            scanned_path="/project",
            validation_results=(ValidationResult(make_dependency("a"), ValidationStatus.ERROR),),
        )

        assert not result.has_problems
        assert result.problems == []

    def test_empty_result(self):
        result = ScanResult(scanned_path="/project")

        assert not result.has_problems
        assert result.all_dependencies == ()
        assert result.valid_count == 0
