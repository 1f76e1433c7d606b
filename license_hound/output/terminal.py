"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from license_hound.constants import LEGAL_DISCLAIMER_SHORT
from license_hound.models.conclusion import Conclusion, EvidenceOutcome
from license_hound.models.scan import ScanResult, Verbosity

OUTCOME_STYLES = {
    EvidenceOutcome.MATCHED: "green",
    EvidenceOutcome.UNRECOGNIZED: "yellow",
    EvidenceOutcome.NOT_FOUND: "dim",
    EvidenceOutcome.NO_METADATA: "dim",
    EvidenceOutcome.UNACCEPTED_LICENSE: "yellow",
}


class TerminalFormatter:
    """Format conclusions for terminal display using Rich.

    Normal mode shows one table row per dependency; verbose mode adds the
    evidence trail of every dependency.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_scan_result(self, result: ScanResult) -> None:
        """Display conclusions as a Rich table.

        Args:
            result: The scan result to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(result)
            return

        self._print_disclaimer()

        if result.total_dependencies == 0:
            self._console.print("[yellow]No dependencies found[/yellow]")
            return

        table = Table(title="License Resolution Results")
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Version", style="magenta")
        table.add_column("License", style="green")
        table.add_column("Stage")
        table.add_column("Source")

        for conclusion in result.conclusions:
            license_display = (
                conclusion.license.value
                if conclusion.license
                else "[yellow]Unresolved[/yellow]"
            )
            table.add_row(
                escape(conclusion.name),
                escape(conclusion.version),
                license_display,
                conclusion.terminal_stage.value,
                escape(conclusion.source_locator or ""),
            )

        self._console.print(table)

        if self._verbosity == Verbosity.VERBOSE:
            for conclusion in result.conclusions:
                self._print_evidence(conclusion)

        resolved = result.total_dependencies - result.unresolved
        self._console.print(
            f"\n[bold]Total dependencies:[/bold] {result.total_dependencies}"
        )
        self._console.print(f"[bold]Resolved:[/bold] {resolved}")
        self._console.print(f"[bold]Unresolved:[/bold] {result.unresolved}")

    def _print_quiet_output(self, result: ScanResult) -> None:
        """Print minimal output for quiet mode.

        Args:
            result: The scan result to display.
        """
        if result.total_dependencies == 0:
            self._console.print("[yellow]No dependencies found[/yellow]")
            return

        if not result.has_issues:
            self._console.print(
                f"[green]PASS[/green] - All {result.total_dependencies} "
                "dependencies resolved"
            )
            return

        self._console.print(
            f"[red]UNRESOLVED[/red] - {result.unresolved} "
            "dependency license(s) could not be determined"
        )
        for conclusion in result.conclusions:
            if not conclusion.is_resolved:
                self._console.print(
                    f"  - {conclusion.name}@{conclusion.version}: "
                    "[yellow]No accepted license found[/yellow]"
                )

    def _print_evidence(self, conclusion: Conclusion) -> None:
        """Print the evidence trail of one conclusion."""
        self._console.print(
            f"\n[bold]{conclusion.name}@{conclusion.version}[/bold] "
            f"({conclusion.status.value})"
        )
        if conclusion.copyright_notice:
            self._console.print(f"  {escape(conclusion.copyright_notice)}")
        for item in conclusion.evidence:
            style = OUTCOME_STYLES.get(item.outcome, "red")
            line = f"  [{style}]{item.source.value}: {item.outcome.value}[/{style}]"
            if item.locator:
                line += f" {escape(item.locator)}"
            if item.detail:
                line += f" ({escape(item.detail)})"
            self._console.print(line, highlight=False)

    def _print_disclaimer(self) -> None:
        """Print legal disclaimer panel."""
        panel = Panel(
            LEGAL_DISCLAIMER_SHORT,
            title="[bold yellow]NOT LEGAL ADVICE[/bold yellow]",
            border_style="yellow",
        )
        self._console.print(panel)
        self._console.print("")
