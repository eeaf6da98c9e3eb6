"""Plain text reporter using print().

Stdlib-only reporter: one `file:line:column: message (analyzer)` line per
diagnostic, like a compiler.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from forceloader.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from forceloader.domain.model.result import AnalysisResult


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Outputs to stdout by default, can be configured for any TextIO.
    """

    def __init__(self, output: TextIO | None = None, *, summary: bool = True) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            summary: Append a one-line summary after the diagnostics
        """
        self._output = output if output is not None else sys.stdout
        self._summary = summary

    def report(self, result: AnalysisResult) -> None:
        """Report analysis results as plain text.

        Args:
            result: Complete analysis result
        """
        for diagnostic in result.diagnostics:
            self._write(str(diagnostic))

        if self._summary:
            self._report_summary(result)

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _report_summary(self, result: AnalysisResult) -> None:
        stats = result.stats
        status = "PASSED" if result.passed else "FAILED"
        self._write(
            f"{status}: {result.diagnostic_count} diagnostic(s), "
            f"{stats.suppressed} suppressed, "
            f"{stats.resolver_methods} resolver method(s) in {stats.units_analyzed} module(s)"
        )
