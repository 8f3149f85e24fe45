"""Main CLI interface for DepVerify."""

import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..core.config import DEFAULT_CONFIG_FILE, create_example_config, load_configuration
from ..core.parsers import DependencyParser
from ..core.scanner import DependencyScanner
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import setup_logging, get_logger

app = typer.Typer(
    name="depverify",
    help="Check that every declared dependency exists in its public registry",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")

OUTPUT_FORMATS = ("console", "json")

# Exit codes
EXIT_OK = 0
EXIT_PROBLEMS = 1
EXIT_ERROR = 2


@app.command()
def scan(
    path: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Path to the project directory to scan"
    ),
    config_file: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE),
        "--config",
        "-c",
        help="Configuration file with whitelist, blacklist and exclude patterns"
    ),
    output_format: str = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' or 'json'"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        help="Additional exclude patterns (glob, relative to PATH)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Also log parse failures and other diagnostics"
    )
) -> None:
    """Scan a project for dependencies missing from their registries."""

    setup_logging(verbose=verbose, debug=debug)

    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]Error: Unknown output format: {escape(output_format)}[/red]")
        raise typer.Exit(EXIT_ERROR)

    config = load_configuration(config_file)
    if exclude:
        config.exclude.extend(exclude)

    logger.info(
        f"Configuration: {len(config.whitelist)} whitelisted, "
        f"{len(config.blacklist)} blacklisted, {len(config.exclude)} exclude patterns"
    )

    try:
        scanner = DependencyScanner(config)
        result = asyncio.run(scanner.scan(path))

        json_formatter = JSONFormatter(output)
        if output_format == "json" or output:
            report = json_formatter.format_scan_result(result)
            if output_format == "json":
                typer.echo(json_formatter.render(report))
            if output:
                json_formatter.save_results(report)

        if output_format == "console":
            ConsoleFormatter(console).format_scan_result(result)
            if output:
                console.print(f"Results saved to {escape(str(output))}")

    except Exception as e:
        logger.error(f"Scan failed: {e}")
        ConsoleFormatter(Console(stderr=True)).format_error("Scan failed", str(e))
        raise typer.Exit(EXIT_ERROR)

    raise typer.Exit(EXIT_PROBLEMS if result.has_problems else EXIT_OK)


@app.command()
def init(
    path: Path = typer.Argument(
        Path(DEFAULT_CONFIG_FILE),
        help="Where to write the example configuration"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing file"
    )
) -> None:
    """Write an example configuration file."""

    if path.exists() and not force:
        console.print(f"[red]Error: {escape(str(path))} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(EXIT_PROBLEMS)

    try:
        create_example_config(path)
    except OSError as e:
        console.print(f"[red]Error: Failed to write {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(EXIT_ERROR)

    console.print(f"[green]Example configuration written to {escape(str(path))}[/green]")


@app.command()
def info() -> None:
    """Show information about DepVerify."""
    console.print(Panel.fit(
        f"[bold]DepVerify[/bold] v{__version__}\n"
        "Checks that the dependencies declared in a project's manifests exist\n"
        "in their public registries, to catch dependency confusion early",
        title="Information"
    ))

    table = Table(title="Supported Ecosystems")
    table.add_column("Ecosystem", style="cyan")
    table.add_column("Manifest files", style="green")

    for parser in DependencyParser:
        table.add_row(str(parser.ecosystem), ", ".join(parser.file_patterns))

    console.print(table)


def main() -> None:
    """Main entry point for DepVerify CLI."""
    app()


if __name__ == "__main__":
    main()
