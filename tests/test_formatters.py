"""Tests for output formatters."""

import json
from datetime import datetime
from pathlib import Path

import pytest
from rich.console import Console

from dep_verify.core.parsers.base import Dependency, DependencyType
from dep_verify.core.scanner import ScanResult, ValidationResult, ValidationStatus
from dep_verify.output.formatters import ConsoleFormatter, JSONFormatter


def make_result(*entries):
    """Build a scan result from (name, ecosystem, status) tuples."""
    dependencies = tuple(
        Dependency(name, "1.0.0", ecosystem, Path("/project/manifest"))
        for name, ecosystem, _ in entries
    )
    results = tuple(
        ValidationResult(dependency, status, f"{status} message")
        for dependency, (_, _, status) in zip(dependencies, entries)
    )
    return ScanResult(
        scanned_path="/project",
        scan_time=datetime(2024, 5, 1, 12, 30, 0),
        all_dependencies=dependencies,
        unique_dependencies=dependencies,
        validation_results=results,
        scanned_files=(Path("/project/manifest"),),
    )


@pytest.fixture
def problem_result():
    return make_result(
        ("lodash", DependencyType.NPM, ValidationStatus.VALID),
        ("evil-internal", DependencyType.NPM, ValidationStatus.NOT_FOUND),
        ("moment", DependencyType.NPM, ValidationStatus.BLACKLISTED),
        ("corp-lib", DependencyType.PYPI, ValidationStatus.WHITELISTED),
        ("flaky", DependencyType.CRATES, ValidationStatus.ERROR),
    )


class TestJSONFormatter:
    """Test the JSON report."""

    def test_report_shape(self, problem_result):
        report = JSONFormatter().format_scan_result(problem_result)

        assert report["scannedPath"] == "/project"
        assert report["scanTime"] == "2024-05-01T12:30:00"
        assert report["scannedFiles"] == 1
        assert report["summary"] == {
            "totalDependencies": 5,
            "uniqueDependencies": 5,
            "valid": 1,
            "whitelisted": 1,
            "notFound": 1,
            "blacklisted": 1,
            "errors": 1,
        }
        assert report["hasProblems"] is True
        assert report["problems"][0] == {
            "packageName": "evil-internal",
            "packageType": "Npm",
            "version": "1.0.0",
            "status": "NotFound",
            "sourceFile": str(Path("/project/manifest")),
            "message": "NotFound message",
        }
        assert [p["packageName"] for p in report["problems"]] == ["evil-internal", "moment"]

    def test_clean_report(self):
        report = JSONFormatter().format_scan_result(make_result())

        assert report["hasProblems"] is False
        assert report["problems"] == []

    def test_save_results(self, tmp_path, problem_result):
        output_file = tmp_path / "report.json"
        formatter = JSONFormatter(output_file)
        report = formatter.format_scan_result(problem_result)

        formatter.save_results(report)

        assert json.loads(output_file.read_text(encoding="utf-8")) == report

    def test_save_without_file_fails(self):
        with pytest.raises(ValueError):
            JSONFormatter().save_results({})


class TestConsoleFormatter:
    """Test the rich console report."""

    def render(self, result):
        console = Console(record=True, width=160)
        ConsoleFormatter(console).format_scan_result(result)
        return console.export_text()

    def test_failed_report_lists_problems(self, problem_result):
        text = self.render(problem_result)

        assert "Problems Found" in text
        assert "evil-internal" in text
        assert "moment" in text
        assert "FAILED" in text
        assert "flaky" not in text

    def test_passed_report(self):
        text = self.render(make_result(("lodash", DependencyType.NPM, ValidationStatus.VALID)))

        assert "PASSED" in text
        assert "Problems Found" not in text
        assert "/project" in text

    def test_format_error(self):
        console = Console(record=True, width=120)
        ConsoleFormatter(console).format_error("Scan failed", "boom")

        text = console.export_text()
        assert "Scan failed" in text
        assert "boom" in text


class TestMarkupInUserData:
    """Paths and names containing rich markup are printed literally."""

    def test_bracketed_path_and_names(self):
        dependency = Dependency("pkg[/bold]", "1.0[x]", DependencyType.NPM, Path("/work/foo[/team]/package.json"))
        result = ScanResult(
            scanned_path="/work/foo[/team]",
            scan_time=datetime(2024, 5, 1, 12, 30, 0),
            all_dependencies=(dependency,),
            unique_dependencies=(dependency,),
            validation_results=(ValidationResult(dependency, ValidationStatus.NOT_FOUND),),
            scanned_files=(dependency.source_file,),
        )
        console = Console(record=True, width=200)

        ConsoleFormatter(console).format_scan_result(result)

        text = console.export_text()
        assert "/work/foo[/team]" in text
        assert "pkg[/bold]" in text
        assert "1.0[x]" in text
        assert "FAILED" in text

    def test_error_with_markup(self):
        console = Console(record=True, width=200)

        ConsoleFormatter(console).format_error("Scan failed", "closing tag '[/team]' doesn't match")

        assert "[/team]" in console.export_text()
