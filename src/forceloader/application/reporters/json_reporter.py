"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from forceloader.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from forceloader.domain.model.diagnostic import Diagnostic
    from forceloader.domain.model.result import AnalysisResult


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs analysis results as JSON for CI/CD integration
    or parsing by other tools.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def report(self, result: AnalysisResult) -> None:
        """Report analysis results as JSON.

        Args:
            result: Complete analysis result
        """
        data = self._result_to_dict(result)
        json.dump(data, self._output, indent=self._indent)
        self._output.write("\n")

    def _result_to_dict(self, result: AnalysisResult) -> dict[str, object]:
        """Convert AnalysisResult to JSON-serializable dict."""
        return {
            "passed": result.passed,
            "diagnostics": [self._diagnostic_to_dict(d) for d in result.diagnostics],
            "resolvers": sorted(result.resolvers),
            "restricted_surface": sorted(result.restricted_surface),
            "stats": {
                "units_analyzed": result.stats.units_analyzed,
                "resolver_methods": result.stats.resolver_methods,
                "call_sites": result.stats.call_sites,
                "suppressed": result.stats.suppressed,
                "analysis_time_ms": result.stats.analysis_time_ms,
            },
        }

    def _diagnostic_to_dict(self, diagnostic: Diagnostic) -> dict[str, object]:
        location = diagnostic.location
        return {
            "analyzer": diagnostic.analyzer,
            "message": diagnostic.message,
            "location": {
                "file": str(location.file),
                "line": location.line,
                "column": location.column,
                "end_line": location.end_line,
                "end_column": location.end_column,
            },
        }
