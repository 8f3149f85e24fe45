"""Output formatters for DepVerify results."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.scanner import ScanResult, ValidationResult, ValidationStatus
from ..utils.logging import get_logger

STATUS_STYLES = {
    ValidationStatus.VALID: "green",
    ValidationStatus.NOT_FOUND: "red bold",
    ValidationStatus.BLACKLISTED: "red",
    ValidationStatus.WHITELISTED: "blue",
    ValidationStatus.ERROR: "yellow",
}


class ConsoleFormatter:
    """Rich console formatter for DepVerify output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()
        self.logger = get_logger("ConsoleFormatter")

    def format_scan_result(self, result: ScanResult) -> None:
        """Format and display a scan result.

        Args:
            result: Completed scan result
        """
        self.console.print(self._create_info_panel(result))
        self.console.print(self._create_summary_table(result))

        problems = result.problems
        if problems:
            self.console.print(self._create_problems_table(problems))

        if result.has_problems:
            self.console.print(Panel(
                f"FAILED: {len(problems)} problem(s) found. "
                "Missing packages may be claimed by an attacker.",
                style="red"
            ))
        else:
            self.console.print(Panel("PASSED: no problems found", style="green"))

    def _create_info_panel(self, result: ScanResult) -> Panel:
        content = (
            f"[bold]Path:[/bold] {escape(result.scanned_path)}\n"
            f"[bold]Time:[/bold] {result.scan_time:%Y-%m-%d %H:%M:%S}\n"
            f"[bold]Manifest files:[/bold] {len(result.scanned_files)}"
        )
        return Panel(content, title="DepVerify Scan", style="blue")

    def _create_summary_table(self, result: ScanResult) -> Table:
        """Create the summary table.

        Args:
            result: Completed scan result

        Returns:
            Rich table with the dependency counts
        """
        table = Table(title="Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Count", justify="right")

        table.add_row("Total dependencies", str(len(result.all_dependencies)))
        table.add_row("Unique dependencies", str(len(result.unique_dependencies)))
        table.add_row("Valid", Text(str(result.valid_count), style="green"))
        table.add_row("Whitelisted", Text(str(result.whitelisted_count), style="blue"))
        table.add_row("Not found", Text(str(result.not_found_count), style="red"))
        table.add_row("Blacklisted", Text(str(result.blacklisted_count), style="red"))
        table.add_row("Errors", Text(str(result.error_count), style="yellow"))

        return table

    def _create_problems_table(self, problems: List[ValidationResult]) -> Table:
        table = Table(title="Problems Found")

        table.add_column("Ecosystem", style="cyan", no_wrap=True)
        table.add_column("Package", style="bold")
        table.add_column("Version", style="blue")
        table.add_column("Source", style="dim")
        table.add_column("Status")

        for problem in problems:
            dependency = problem.dependency
            table.add_row(
                str(dependency.ecosystem),
                Text(dependency.name),
                Text(dependency.version or "-"),
                Text(str(dependency.source_file)),
                Text(str(problem.status), style=STATUS_STYLES[problem.status]),
            )

        return table

    def format_error(self, error: str, details: Optional[str] = None) -> None:
        """Format and display error message.

        Args:
            error: Error message
            details: Optional error details
        """
        content = f"[bold red]Error:[/bold red] {escape(error)}"
        if details:
            content += f"\n\n[dim]{escape(details)}[/dim]"

        self.console.print(Panel(content, style="red"))


class JSONFormatter:
    """JSON formatter for DepVerify output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_scan_result(self, result: ScanResult) -> Dict[str, Any]:
        """Format a scan result as a JSON-serialisable report.

        Args:
            result: Completed scan result

        Returns:
            Report dictionary
        """
        return {
            "scannedPath": result.scanned_path,
            "scanTime": result.scan_time.isoformat(),
            "scannedFiles": len(result.scanned_files),
            "summary": {
                "totalDependencies": len(result.all_dependencies),
                "uniqueDependencies": len(result.unique_dependencies),
                "valid": result.valid_count,
                "whitelisted": result.whitelisted_count,
                "notFound": result.not_found_count,
                "blacklisted": result.blacklisted_count,
                "errors": result.error_count,
            },
            "hasProblems": result.has_problems,
            "problems": [self._format_problem(problem) for problem in result.problems],
        }

    @staticmethod
    def _format_problem(problem: ValidationResult) -> Dict[str, Any]:
        dependency = problem.dependency
        return {
            "packageName": dependency.name,
            "packageType": str(dependency.ecosystem),
            "version": dependency.version,
            "status": str(problem.status),
            "sourceFile": str(dependency.source_file),
            "message": problem.message,
        }

    def render(self, results: Dict[str, Any]) -> str:
        """Serialise a report to indented JSON text."""
        return json.dumps(results, indent=2, ensure_ascii=False)

    def save_results(
        self,
        results: Dict[str, Any],
        output_file: Optional[Path] = None
    ) -> None:
        """Save results to JSON file.

        Args:
            results: Results dictionary
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.render(results))
                f.write("\n")

            self.logger.info(f"Results saved to {file_path}")
        except OSError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise
