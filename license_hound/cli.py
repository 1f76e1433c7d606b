"""CLI entry point for license-hound."""

from __future__ import annotations

import asyncio
import io
import json
import logging
import sys
from pathlib import Path
from typing import Literal, Optional, cast

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from license_hound import __version__
from license_hound.config import load_config
from license_hound.constants import EXIT_ERROR, EXIT_SUCCESS, EXIT_UNRESOLVED
from license_hound.exceptions import ConfigurationError, LicenseHoundError
from license_hound.manifest import load_manifest
from license_hound.models.config import HoundConfig
from license_hound.models.scan import ScanOptions, ScanResult, Verbosity
from license_hound.output.conclusion_json import ConclusionJsonFormatter
from license_hound.output.terminal import TerminalFormatter
from license_hound.scanner import scan_dependencies

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)

LOG_LEVELS = {
    Verbosity.QUIET: logging.ERROR,
    Verbosity.NORMAL: logging.WARNING,
    Verbosity.VERBOSE: logging.DEBUG,
}


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """License Hound - Determine the licenses of resolved dependencies.

    Looks for license files in each dependency's source tree, then asks
    GitHub, then fetches conventional license files from the repository.
    Accepts MIT, BSD-3-Clause and MPL-2.0.

    \b
    Examples:
        license-hound resolve deps.yaml
        license-hound resolve deps.yaml --format json
        license-hound resolve deps.yaml --verbose
    """
    pass


@main.command()
@click.argument(
    "manifest_path",
    metavar="MANIFEST",
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for conclusions (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of dependencies resolved at once.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="HTTP request timeout in seconds.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show the evidence trail of every dependency.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Show only unresolved dependencies.",
)
def resolve(
    manifest_path: str,
    output_format: str,
    output_path: str | None,
    config_path: str | None,
    concurrency: Optional[int],
    timeout: Optional[float],
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Resolve the license of every dependency in MANIFEST.

    MANIFEST is a YAML or JSON file listing dependencies with their
    name, version, local source path and repository URL.

    \b
    Examples:
        license-hound resolve deps.yaml
        license-hound resolve deps.yaml --format json --output licenses.json
        license-hound resolve deps.yaml --concurrency 4 --timeout 30
        license-hound resolve deps.yaml --config custom-config.yaml
    """
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")

    if quiet_flag:
        verbosity = Verbosity.QUIET
    elif verbose_flag:
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL

    configure_logging(verbosity)

    format_value = cast(Literal["terminal", "json"], output_format.lower())
    options = ScanOptions(format=format_value, verbosity=verbosity)

    try:
        config = load_config(config_path)
        overrides = {
            key: value
            for key, value in (("concurrency", concurrency), ("timeout", timeout))
            if value is not None
        }
        if overrides:
            config = config.model_copy(update=overrides)

        result = _run_resolution(Path(manifest_path), options, config)
        _display_result(result, options, output_path)

        if result.has_issues:
            sys.exit(EXIT_UNRESOLVED)
        sys.exit(EXIT_SUCCESS)

    except LicenseHoundError as e:
        _display_error(e, options.format)
        sys.exit(EXIT_ERROR)


def configure_logging(verbosity: Verbosity) -> None:
    """Route library logging to stderr through Rich.

    Args:
        verbosity: Output verbosity; selects the log level.
    """
    handler = RichHandler(console=_error_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("license_hound")
    package_logger.handlers = [handler]
    package_logger.setLevel(LOG_LEVELS[verbosity])
    package_logger.propagate = False


def _run_resolution(
    manifest_path: Path, options: ScanOptions, config: HoundConfig
) -> ScanResult:
    """Load the manifest and resolve every dependency in it.

    Args:
        manifest_path: Manifest listing the dependencies.
        options: Output options, used to decide on progress display.
        config: Timeouts, concurrency, endpoints and credentials.

    Returns:
        ScanResult with one conclusion per dependency.
    """
    dependencies = load_manifest(manifest_path)

    # Progress only makes sense on an interactive terminal report
    show_progress = (
        options.format == "terminal" and options.verbosity != Verbosity.QUIET
    )

    conclusions = asyncio.run(
        scan_dependencies(
            dependencies,
            config,
            console=_console if show_progress else None,
            show_progress=show_progress,
        )
    )
    return ScanResult.from_conclusions(conclusions)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Args:
        content: The report content to write.
        path: The file path to write to.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _error_console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _error_console.print(f"[green]Report written to {path}[/green]")


def _render_terminal_report(result: ScanResult, verbosity: Verbosity) -> str:
    """Render the terminal report as plain text for writing to a file."""
    recorder = Console(record=True, width=120, file=io.StringIO())
    TerminalFormatter(console=recorder, verbosity=verbosity).format_scan_result(
        result
    )
    return recorder.export_text()


def _display_result(
    result: ScanResult, options: ScanOptions, output_path: str | None = None
) -> None:
    """Display conclusions in the specified format.

    Args:
        result: The scan result to display.
        options: Scan options including format.
        output_path: Optional file path to write output to.
    """
    if options.format == "json":
        content = ConclusionJsonFormatter().format_scan_result(result)
    elif output_path:
        content = _render_terminal_report(result, options.verbosity)
    else:
        TerminalFormatter(
            console=_console, verbosity=options.verbosity
        ).format_scan_result(result)
        return

    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: LicenseHoundError, format_type: str) -> None:
    """Display error message to user.

    All errors are written to stderr; JSON runs get a JSON error object.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__

    if format_type == "json":
        click.echo(
            json.dumps({"error": {"type": error_type, "message": str(error)}}),
            err=True,
        )
    else:
        _error_console.print(
            f"[red bold]Error: {error_type}: {escape(str(error))}[/red bold]"
        )


if __name__ == "__main__":
    main()
