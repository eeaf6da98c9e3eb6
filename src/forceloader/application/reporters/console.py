"""Console reporter: AnalysisResult → rich formatted string."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from forceloader.domain.model.diagnostic import Diagnostic
    from forceloader.domain.model.result import AnalysisResult


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_classification: List resolver classes and the restricted surface.
        max_diagnostics: Max diagnostics to display. None = unlimited.
        width: Console width in columns.
    """

    show_classification: bool = False
    max_diagnostics: int | None = None
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_diagnostics is not None and self.max_diagnostics < 0:
            raise ValueError(f"max_diagnostics must be >= 0, got {self.max_diagnostics}")
        if self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs rich formatted text grouped by file.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        self._config = config or ConsoleConfig()

    def report(self, result: AnalysisResult) -> str:
        """Format analysis result as rich formatted string.

        Args:
            result: Analysis result to format.

        Returns:
            Formatted string with colors and tables.
        """
        output = StringIO()
        console = Console(
            file=output, force_terminal=True, width=self._config.width, highlight=False
        )

        self._render_header(console, result)

        diagnostics = result.diagnostics
        if self._config.max_diagnostics is not None:
            diagnostics = diagnostics[: self._config.max_diagnostics]
        self._render_diagnostics(console, diagnostics)

        hidden = result.diagnostic_count - len(diagnostics)
        if hidden:
            console.print(f"[dim]... {hidden} more diagnostic(s) not shown[/dim]")
            console.print()

        if self._config.show_classification:
            self._render_classification(console, result)

        self._render_footer(console, result)
        return output.getvalue()

    def _render_header(self, console: Console, result: AnalysisResult) -> None:
        stats = result.stats
        console.print()
        console.rule("[bold]FORCELOADER[/bold]")
        console.print()
        console.print(
            f"[bold]Modules:[/bold] {stats.units_analyzed}  "
            f"[bold]Resolver methods:[/bold] {stats.resolver_methods}  "
            f"[bold]Call sites:[/bold] {stats.call_sites}  "
            f"[bold]Suppressed:[/bold] {stats.suppressed}"
        )
        console.print()

    def _render_diagnostics(self, console: Console, diagnostics: tuple[Diagnostic, ...]) -> None:
        by_file: dict[Path, list[Diagnostic]] = defaultdict(list)
        for diagnostic in diagnostics:
            by_file[diagnostic.location.file].append(diagnostic)

        for file_path, items in by_file.items():
            console.print(f"[bold]{file_path}[/bold]")
            table = Table(show_header=False, box=None, padding=(0, 1))
            table.add_column("Location", style="cyan")
            table.add_column("Message")
            for diagnostic in items:
                location = diagnostic.location
                table.add_row(f"{location.line}:{location.column}", diagnostic.message)
            console.print(table)
            console.print()

    def _render_classification(self, console: Console, result: AnalysisResult) -> None:
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Resolvers")
        table.add_column("Restricted")

        resolvers = sorted(result.resolvers)
        restricted = sorted(result.restricted_surface)
        for i in range(max(len(resolvers), len(restricted))):
            table.add_row(
                resolvers[i] if i < len(resolvers) else "",
                restricted[i] if i < len(restricted) else "",
            )
        console.print(table)
        console.print()

    def _render_footer(self, console: Console, result: AnalysisResult) -> None:
        if result.passed:
            console.print("[bold green]PASSED[/bold green]")
        else:
            console.print(
                f"[bold red]FAILED[/bold red]: {result.diagnostic_count} diagnostic(s)"
            )
